"""
Module 02 - Power-of-Two Padding
Pads a field list so the leaf level of the tree is a power of two.

Owner: Protocol/Crypto Engineer
Module ID: M02

Padding Rules (Hard Contracts):
1. N already a power of two: no placeholder is appended
2. Otherwise append (next_power_of_two(N) - N) copies of the placeholder
   on the right, then encode every field
3. N == 0 is rejected before any hashing

Two entry points:
- pad_fields(): fields carry their kind, placeholders are always TEXT
- pad_array_to_power_of_two(): raw values, kind decided by final position.
  A placeholder appended past the original fields inherits the rule of
  its new position. When hex_position is at or past the original field
  count, a placeholder lands on it and must itself be valid uint256 hex.
"""
from __future__ import annotations

import logging
from typing import Sequence

from porpoise.merkle.fields import (
    DEFAULT_HEX_POSITION,
    SurveyField,
    encode_fields,
    encode_value,
)
from porpoise.schemas.errors import InvalidFieldCountException

logger = logging.getLogger(__name__)


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ...; False for zero and negatives."""
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two >= n.

    Raises:
        InvalidFieldCountException: If n < 1
    """
    if n < 1:
        raise InvalidFieldCountException(n)
    return 1 << (n - 1).bit_length()


def padding_count(n: int) -> int:
    """Number of placeholders needed to pad n fields."""
    return next_power_of_two(n) - n


def pad_fields(
    fields: Sequence[SurveyField],
    placeholder: str = "",
) -> list[bytes]:
    """
    Pad tagged fields to a power of two and encode them into leaves.

    Placeholders are TEXT fields regardless of where they land.

    Args:
        fields: Ordered fields, at least one
        placeholder: Value of each padding field

    Returns:
        Leaves, length next_power_of_two(len(fields))

    Raises:
        InvalidFieldCountException: If fields is empty
        MalformedHexFieldException: If a HEX_TIMESTAMP field is malformed
    """
    count = padding_count(len(fields))
    padded = list(fields) + [SurveyField.text(placeholder)] * count
    if count:
        logger.debug("Padded %d fields with %d placeholders", len(fields), count)
    return encode_fields(padded)


def pad_array_to_power_of_two(
    values: Sequence[str],
    padding_value: str,
    hex_position: int = DEFAULT_HEX_POSITION,
) -> list[bytes]:
    """
    Pad raw values to a power of two and encode them by position.

    Args:
        values: Ordered raw field values, at least one
        padding_value: Value of each padding field
        hex_position: The one position decoded as a uint256 hex timestamp

    Returns:
        Leaves, length next_power_of_two(len(values))

    Raises:
        InvalidFieldCountException: If values is empty
        MalformedHexFieldException: If the value at hex_position is malformed,
            including a placeholder that landed there
    """
    count = padding_count(len(values))
    padded = list(values) + [padding_value] * count
    if len(values) <= hex_position < len(padded):
        logger.warning(
            "Placeholder landed on hex position %d (%d fields given); "
            "it will be decoded as a hex timestamp",
            hex_position,
            len(values),
        )
    return [
        encode_value(value, position, hex_position)
        for position, value in enumerate(padded)
    ]


__all__ = [
    "is_power_of_two",
    "next_power_of_two",
    "padding_count",
    "pad_fields",
    "pad_array_to_power_of_two",
]
