"""
Module 03 - Surveys

Survey model and the builder of its Merkle commitment.
"""

from .models import (
    QUESTION_INDEX,
    DEADLINE_INDEX,
    FIRST_OPTION_INDEX,
    Survey,
)

from .commitment import (
    SurveyCommitment,
    commitment_from_leaves,
    build_survey_commitment,
    build_commitment_from_values,
)

__all__ = [
    "QUESTION_INDEX",
    "DEADLINE_INDEX",
    "FIRST_OPTION_INDEX",
    "Survey",
    "SurveyCommitment",
    "commitment_from_leaves",
    "build_survey_commitment",
    "build_commitment_from_values",
]
