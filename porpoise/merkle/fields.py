"""
Module 02 - Field Encoder
Turns survey fields into 32-byte Merkle leaves.

Owner: Protocol/Crypto Engineer
Module ID: M02

Leaf Encoding Rules (Hard Contracts):
1. HEX_TIMESTAMP fields: leaf = sha256(bytes.fromhex(value))
   - value must be exactly 64 hex characters, no prefix (a uint256,
     big-endian, zero-padded on the left)
   - never truncated, re-padded or reinterpreted
2. TEXT fields: leaf = sha256(one byte per UTF-16 code unit, low 8 bits),
   i.e. latin-1 for characters up to U+00FF

Fields carry their kind explicitly. The positional helper encode_value()
reproduces the legacy rule where the field at one fixed position (the
deadline, position 1) is hex and every other position is text.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from porpoise.crypto.hashing import UINT256_HEX_LENGTH, sha256
from porpoise.schemas.errors import MalformedHexFieldException


# Position of the deadline field in a survey's field list
DEFAULT_HEX_POSITION: int = 1

_UINT256_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{%d}$" % UINT256_HEX_LENGTH)


class FieldKind(str, Enum):
    """How a field's value is turned into bytes before hashing."""

    TEXT = "text"
    HEX_TIMESTAMP = "hex_timestamp"


class SurveyField(BaseModel):
    """A single committed field together with its encoding kind."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: str = Field(..., description="Raw field value")
    kind: FieldKind = Field(default=FieldKind.TEXT)

    @classmethod
    def text(cls, value: str) -> "SurveyField":
        return cls(value=value, kind=FieldKind.TEXT)

    @classmethod
    def hex_timestamp(cls, value: str) -> "SurveyField":
        return cls(value=value, kind=FieldKind.HEX_TIMESTAMP)


def decode_hex_field(value: str, position: int | None = None) -> bytes:
    """
    Decode a fixed-width uint256 hex field to its 32 raw bytes.

    Args:
        value: 64 hex characters, no 0x prefix
        position: Field position, reported in the error details

    Returns:
        32 bytes

    Raises:
        MalformedHexFieldException: If value is not exactly 64 hex chars
    """
    if not isinstance(value, str) or not _UINT256_HEX_PATTERN.match(value):
        shown = value if isinstance(value, str) else repr(value)
        raise MalformedHexFieldException(
            f"Timestamp field must be exactly {UINT256_HEX_LENGTH} hex characters "
            f"without prefix, got {shown[:20]!r}",
            value=shown,
            position=position,
        )
    return bytes.fromhex(value)


def encode_text(value: str) -> bytes:
    """
    Raw bytes of a text field.

    Each UTF-16 code unit keeps only its low byte, so U+0000..U+00FF map to
    their latin-1 byte and anything above is truncated the same way the
    survey tooling does.
    """
    return value.encode("utf-16-le", "surrogatepass")[::2]


def encode_field(field: SurveyField, position: int | None = None) -> bytes:
    """
    Hash one field into a 32-byte leaf according to its kind.

    Args:
        field: The field to encode
        position: Optional position, only used for error reporting

    Returns:
        32-byte leaf hash

    Raises:
        MalformedHexFieldException: For a malformed HEX_TIMESTAMP value
    """
    if field.kind is FieldKind.HEX_TIMESTAMP:
        return sha256(decode_hex_field(field.value, position))
    return sha256(encode_text(field.value))


def encode_fields(fields: Sequence[SurveyField]) -> list[bytes]:
    """Encode fields in order into leaves."""
    return [encode_field(field, position) for position, field in enumerate(fields)]


def encode_value(
    value: str,
    position: int,
    hex_position: int = DEFAULT_HEX_POSITION,
) -> bytes:
    """
    Hash a raw value using the positional rule.

    The value at hex_position is treated as a hex timestamp, every other
    position as text.
    """
    kind = FieldKind.HEX_TIMESTAMP if position == hex_position else FieldKind.TEXT
    return encode_field(SurveyField(value=value, kind=kind), position)


def fields_from_values(
    values: Sequence[str],
    hex_position: int = DEFAULT_HEX_POSITION,
) -> list[SurveyField]:
    """Tag raw values with kinds using the positional rule."""
    return [
        SurveyField(
            value=value,
            kind=FieldKind.HEX_TIMESTAMP if position == hex_position else FieldKind.TEXT,
        )
        for position, value in enumerate(values)
    ]


__all__ = [
    "DEFAULT_HEX_POSITION",
    "FieldKind",
    "SurveyField",
    "decode_hex_field",
    "encode_text",
    "encode_field",
    "encode_fields",
    "encode_value",
    "fields_from_values",
]
