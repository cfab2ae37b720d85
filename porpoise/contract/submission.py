"""
Module 04 - Commitment Submission

Hands a survey commitment to the contract collaborator. The proof is
checked through the contract's own verify() before the root is
registered; registration rejections are returned untouched.
"""

from __future__ import annotations

import logging
from typing import Optional

from porpoise.config.runtime import RuntimeConfig
from porpoise.contract.interface import CallResult, PorpacleContract
from porpoise.schemas.errors import MerkleVerificationException
from porpoise.survey.commitment import SurveyCommitment, build_survey_commitment
from porpoise.survey.models import Survey

logger = logging.getLogger(__name__)


def submit_commitment(
    contract: PorpacleContract,
    commitment: SurveyCommitment,
    deadline: int,
) -> CallResult:
    """
    Verify the tracked proof on the contract, then register the root.

    Returns:
        The contract's CallResult for register_survey

    Raises:
        MerkleVerificationException: If the contract does not accept the proof
    """
    if not contract.verify(commitment.proof, commitment.root, commitment.tracked_leaf):
        raise MerkleVerificationException(
            "Contract rejected the commitment proof",
            leaf_index=commitment.tracked_index,
            details={"root": commitment.root},
        )

    result = contract.register_survey(commitment.root, deadline)
    if not result.accepted:
        logger.info("register_survey rejected: %s", result.reason)
    return result


def submit_survey(
    contract: PorpacleContract,
    survey: Survey,
    config: Optional[RuntimeConfig] = None,
) -> tuple[SurveyCommitment, CallResult]:
    """Build a survey's commitment and submit it with the survey's deadline."""
    commitment = build_survey_commitment(survey, config=config)
    return commitment, submit_commitment(contract, commitment, survey.deadline)


__all__ = [
    "submit_commitment",
    "submit_survey",
]
