"""
Module 02 - Hashing Utilities
Hashing primitives shared by the field encoder and the Merkle reducer.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Canonical sorted-pair hashing for Merkle parents
- Hex encoding/decoding with 0x prefix
- Fixed-width uint256 hex formatting for timestamp fields

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Pair ordering compares raw bytes, never a numeric interpretation
- All operations are deterministic
"""
from __future__ import annotations

import hashlib

# Width of a uint256 rendered as hex without prefix
UINT256_HEX_LENGTH: int = 64
UINT256_MAX: int = 2**256 - 1

HEX_PREFIX: str = "0x"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: sha256(left + right).

    Order-sensitive; hash_sorted_pair() orders its operands before calling it.
    """
    return sha256(left + right)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two nodes under canonical ordering.

    The lexicographically smaller byte string is concatenated first, so
    hash_sorted_pair(a, b) == hash_sorted_pair(b, a). A verifier folding
    a proof therefore never needs to know whether a sibling sat on the
    left or the right.

    Args:
        a: First node hash
        b: Second node hash

    Returns:
        32-byte SHA-256 digest of min(a, b) + max(a, b)
    """
    if a < b:
        return hash_concat(a, b)
    return hash_concat(b, a)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return HEX_PREFIX + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith(HEX_PREFIX):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def format_uint256(value: int) -> str:
    """
    Render an unsigned integer as a 256-bit big-endian hex string.

    The result is exactly 64 lowercase hex characters, zero-padded on the
    left, with no prefix. This is the form the timestamp field of a
    survey takes before it is hex-decoded and hashed.

    Args:
        value: Integer in [0, 2**256 - 1]

    Returns:
        64-character lowercase hex string

    Raises:
        ValueError: If value is negative or does not fit in 256 bits

    Example:
        >>> format_uint256(255)[-4:]
        '00ff'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"uint256 value must be an int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value {value} does not fit in an unsigned 256-bit integer")
    return format(value, "064x")


__all__ = [
    "UINT256_HEX_LENGTH",
    "UINT256_MAX",
    "HEX_PREFIX",
    "sha256",
    "hash_concat",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "format_uint256",
]
