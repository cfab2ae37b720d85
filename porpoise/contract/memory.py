"""
Module 04 - In-Memory Contract

An in-process PorpacleContract, so commitments can be exercised end to
end without a chain. It keeps registered surveys and emitted events in
plain dicts/lists and checks deadlines against an injectable Clock.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from porpoise.config.runtime import ContractConfig
from porpoise.contract.interface import (
    CallResult,
    Clock,
    ResolutionEvent,
    SystemClock,
    hex_to_uint256,
)
from porpoise.merkle.encoding import validate_hex_hash
from porpoise.merkle.merkle_proofs import MerkleVerifier

logger = logging.getLogger(__name__)

# Rejection reasons
REASON_DEADLINE_PASSED = "Deadline must be in the future"
REASON_ALREADY_REGISTERED = "Survey already registered"
REASON_SURVEY_OPEN = "Survey deadline has not passed"
REASON_ALREADY_RESOLVED = "Survey already resolved"
REASON_MALFORMED_ROOT = "Malformed survey root"


class InMemoryPorpacle:
    """
    Dict-backed survey contract.

    Surveys are keyed by their root read as a uint256. Results may be
    recorded for unregistered surveys; for registered ones the deadline
    must have passed.
    """

    def __init__(
        self,
        config: Optional[ContractConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        config = config or ContractConfig()
        self._domains: list[str] = list(config.domains)
        self._clock: Clock = clock or SystemClock()
        self._deadlines: dict[int, int] = {}
        self._results: dict[int, int] = {}
        self._events: list[ResolutionEvent] = []

    def domains(self, index: int) -> str:
        """
        Raises:
            IndexError: If no domain is registered at index
        """
        return self._domains[index]

    def register_survey(self, root: str, deadline: int) -> CallResult:
        method = "register_survey"
        try:
            survey = hex_to_uint256(validate_hex_hash(root, "root"))
        except ValueError:
            return CallResult.rejected(REASON_MALFORMED_ROOT, method)

        if deadline <= self._clock.now():
            return CallResult.rejected(REASON_DEADLINE_PASSED, method)
        if survey in self._deadlines:
            return CallResult.rejected(REASON_ALREADY_REGISTERED, method)

        self._deadlines[survey] = deadline
        logger.debug("Registered survey %s with deadline %d", root, deadline)
        return CallResult.ok(survey, method)

    def record_result(self, survey: int, outcome: int) -> CallResult:
        method = "record_result"
        deadline = self._deadlines.get(survey)
        if deadline is not None and self._clock.now() < deadline:
            return CallResult.rejected(REASON_SURVEY_OPEN, method)
        if survey in self._results:
            return CallResult.rejected(REASON_ALREADY_RESOLVED, method)

        self._results[survey] = outcome
        event = ResolutionEvent(survey=survey, outcome=outcome)
        self._events.append(event)
        logger.debug("Recorded outcome %d for survey %d", outcome, survey)
        return CallResult.ok(event, method)

    def verify(self, proof: Sequence[str], root: str, leaf: str) -> bool:
        try:
            return MerkleVerifier.verify_hex(proof, root, leaf)
        except ValueError as e:
            logger.debug("Rejected malformed proof input: %s", e)
            return False

    # Read helpers, outside the PorpacleContract surface

    def get_resolution_events(self) -> list[ResolutionEvent]:
        return list(self._events)

    def deadline_of(self, survey: int) -> Optional[int]:
        return self._deadlines.get(survey)

    def result_of(self, survey: int) -> Optional[int]:
        return self._results.get(survey)


__all__ = [
    "REASON_DEADLINE_PASSED",
    "REASON_ALREADY_REGISTERED",
    "REASON_SURVEY_OPEN",
    "REASON_ALREADY_RESOLVED",
    "REASON_MALFORMED_ROOT",
    "InMemoryPorpacle",
]
