"""
Module 03 - Survey Models

A survey as committed on-chain: a question, a deadline and the answer
options. The committed field order is fixed:

    [question, deadline, option_0, option_1, ...]

with the deadline rendered as a uint256 hex timestamp.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from porpoise.crypto.hashing import UINT256_MAX, format_uint256
from porpoise.merkle.fields import SurveyField

# Index of each fixed field in Survey.to_fields()
QUESTION_INDEX = 0
DEADLINE_INDEX = 1
FIRST_OPTION_INDEX = 2


class Survey(BaseModel):
    """A survey question with its deadline and answer options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    question: str = Field(..., min_length=1, description="The survey question")
    deadline: int = Field(
        ...,
        ge=0,
        le=UINT256_MAX,
        description="Deadline timestamp (seconds), committed as a uint256",
    )
    options: list[str] = Field(
        ...,
        min_length=1,
        description="Answer options, in committed order",
    )

    @property
    def deadline_hex(self) -> str:
        """Deadline as 64 hex characters, no prefix."""
        return format_uint256(self.deadline)

    def to_fields(self) -> list[SurveyField]:
        """Fields in committed order, with their encoding kinds."""
        return [
            SurveyField.text(self.question),
            SurveyField.hex_timestamp(self.deadline_hex),
            *(SurveyField.text(option) for option in self.options),
        ]

    def to_values(self) -> list[str]:
        """Raw values in committed order, for the positional encoder."""
        return [field.value for field in self.to_fields()]

    def option_index(self, option: str) -> int:
        """
        Field index of an option.

        Raises:
            ValueError: If the option is not part of the survey
        """
        try:
            return FIRST_OPTION_INDEX + self.options.index(option)
        except ValueError:
            raise ValueError(f"Unknown survey option: {option!r}") from None
