"""
Core cryptographic utilities.

Module 02 provides the hashing primitives behind survey commitments.
"""
from .hashing import (
    UINT256_HEX_LENGTH,
    UINT256_MAX,
    HEX_PREFIX,
    sha256,
    hash_concat,
    hash_sorted_pair,
    to_hex,
    from_hex,
    format_uint256,
)

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
