"""
Module 03 - Survey Commitment Builder

Builds the Merkle commitment of a survey and the inclusion proof of one
of its fields, in the hex form the verifier contract takes.

Flow:
    fields -> pad_fields() -> reduce_merkle() -> convert_proof_to_hex()

By default the tracked field is the deadline (index 1), since that is the
field a contract checks against the clock.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from porpoise.config.runtime import RuntimeConfig, get_default_config
from porpoise.crypto.hashing import from_hex
from porpoise.merkle.encoding import (
    HexProof,
    convert_proof_to_hex,
    eth_hex_string,
    validate_hex_hash,
)
from porpoise.merkle.fields import SurveyField
from porpoise.merkle.merkle_tree import compute_root_from_proof, reduce_merkle
from porpoise.merkle.padding import (
    is_power_of_two,
    pad_array_to_power_of_two,
    pad_fields,
)
from porpoise.schemas.versioning import SCHEMA_VERSION, assert_supported_schema_version
from porpoise.survey.models import Survey

logger = logging.getLogger(__name__)


class SurveyCommitment(BaseModel):
    """
    Merkle commitment of a survey plus the proof of one tracked field.

    All hashes are 0x-prefixed lowercase hex. leaves is the padded leaf
    level, so placeholders are included and len(leaves) is a power of two.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str = Field(..., description="Merkle root (0x-prefixed, 32 bytes)")
    leaves: list[str] = Field(
        ...,
        min_length=1,
        description="Padded leaf level (0x-prefixed, 32 bytes each)",
    )
    field_count: int = Field(
        ...,
        ge=1,
        description="Number of fields before padding",
    )
    tracked_index: int = Field(..., ge=0, description="Index of the proven leaf")
    proof: list[str] = Field(
        default_factory=list,
        description="Siblings of the tracked leaf, leaf level first",
    )

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @field_validator("leaves")
    @classmethod
    def _validate_leaves(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(value, f"leaves[{i}]") for i, value in enumerate(v)]

    @field_validator("proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(value, f"proof[{i}]") for i, value in enumerate(v)]

    @model_validator(mode="after")
    def _validate_shape(self) -> "SurveyCommitment":
        size = len(self.leaves)
        if not is_power_of_two(size):
            raise ValueError(f"Leaf count must be a power of two, got {size}")
        if self.field_count > size:
            raise ValueError(
                f"field_count {self.field_count} exceeds padded size {size}"
            )
        if self.tracked_index >= size:
            raise ValueError(
                f"tracked_index {self.tracked_index} out of range for {size} leaves"
            )
        expected = size.bit_length() - 1
        if len(self.proof) != expected:
            raise ValueError(
                f"Proof for {size} leaves must have {expected} siblings, "
                f"got {len(self.proof)}"
            )
        return self

    @property
    def padded_size(self) -> int:
        return len(self.leaves)

    @property
    def tracked_leaf(self) -> str:
        return self.leaves[self.tracked_index]

    def field_leaf(self, index: int) -> str:
        """Hex leaf of the field at index in the padded sequence."""
        return self.leaves[index]

    def hex_proof(self) -> HexProof:
        """The tracked proof as a HexProof, leaf included."""
        return HexProof(proof=self.proof, root=self.root, leaf=self.tracked_leaf)

    def verify(self) -> bool:
        """Fold the tracked leaf through the proof and compare with the root."""
        siblings = [from_hex(value) for value in self.proof]
        computed = compute_root_from_proof(from_hex(self.tracked_leaf), siblings)
        return computed == from_hex(self.root)


def commitment_from_leaves(
    leaves: Sequence[bytes],
    tracked_index: int,
    field_count: Optional[int] = None,
) -> SurveyCommitment:
    """
    Reduce a padded leaf level and package the result.

    Raises:
        NonPowerOfTwoInputException: If len(leaves) is not a power of two
        TrackedIndexOutOfRangeException: If tracked_index is out of range
    """
    result = reduce_merkle(leaves, tracked_index)
    hex_proof, hex_root = convert_proof_to_hex(result.proof, result.root)
    return SurveyCommitment(
        root=hex_root,
        leaves=[eth_hex_string(leaf) for leaf in leaves],
        field_count=field_count if field_count is not None else len(leaves),
        tracked_index=tracked_index,
        proof=hex_proof,
    )


def build_survey_commitment(
    survey: Union[Survey, Sequence[SurveyField]],
    tracked_index: Optional[int] = None,
    placeholder: Optional[str] = None,
    config: Optional[RuntimeConfig] = None,
) -> SurveyCommitment:
    """
    Build the commitment of a survey (or of explicitly tagged fields).

    Args:
        survey: A Survey, or fields already tagged with their kinds
        tracked_index: Leaf to prove, against the padded sequence;
                       defaults to config.merkle.default_tracked_index
        placeholder: Padding value; defaults to config.merkle.padding_value
        config: Runtime config; defaults to the process-wide default

    Returns:
        SurveyCommitment

    Raises:
        InvalidFieldCountException: If there are no fields
        MalformedHexFieldException: If the timestamp field is malformed
        TrackedIndexOutOfRangeException: If tracked_index is out of range
    """
    config = config or get_default_config()
    if tracked_index is None:
        tracked_index = config.merkle.default_tracked_index
    if placeholder is None:
        placeholder = config.merkle.padding_value

    fields = survey.to_fields() if isinstance(survey, Survey) else list(survey)
    leaves = pad_fields(fields, placeholder)

    logger.debug(
        "Building commitment for %d fields (%d leaves), tracking leaf %d",
        len(fields),
        len(leaves),
        tracked_index,
    )
    return commitment_from_leaves(leaves, tracked_index, field_count=len(fields))


def build_commitment_from_values(
    values: Sequence[str],
    tracked_index: Optional[int] = None,
    padding_value: Optional[str] = None,
    config: Optional[RuntimeConfig] = None,
) -> SurveyCommitment:
    """
    Build a commitment from raw values with the positional encoding rule.

    The value at config.merkle.hex_position is decoded as a hex timestamp.
    Placeholders follow the rule of their padded position, see
    porpoise.merkle.padding.pad_array_to_power_of_two().
    """
    config = config or get_default_config()
    if tracked_index is None:
        tracked_index = config.merkle.default_tracked_index
    if padding_value is None:
        padding_value = config.merkle.padding_value

    leaves = pad_array_to_power_of_two(values, padding_value, config.merkle.hex_position)
    return commitment_from_leaves(leaves, tracked_index, field_count=len(values))


__all__ = [
    "SurveyCommitment",
    "commitment_from_leaves",
    "build_survey_commitment",
    "build_commitment_from_values",
]
