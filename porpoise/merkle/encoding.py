"""
Module 02 - Proof Encoding
Converts proofs and roots to the hex literals a verifier contract takes.

Owner: Protocol/Crypto Engineer
Module ID: M02

Wire format: every 32-byte value is "0x" followed by 64 lowercase hex
characters. Conversion preserves proof order.
"""
from __future__ import annotations

import re
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from porpoise.crypto.hashing import from_hex, to_hex


# 0x followed by 64 hex chars = 32 bytes
HEX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a 32-byte hex hash with 0x prefix."""
    if not isinstance(value, str) or not HEX_HASH_PATTERN.match(value):
        shown = value if isinstance(value, str) else repr(value)
        shown = f"{shown[:20]}..." if len(shown) > 20 else shown
        raise ValueError(
            f"{field_name} must be a 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {shown}"
        )
    return value.lower()


def eth_hex_string(value: bytes) -> str:
    """Render bytes as a 0x-prefixed lowercase hex literal."""
    return to_hex(value)


def convert_proof_to_hex(
    proof: Sequence[bytes],
    root: bytes,
) -> tuple[list[str], str]:
    """
    Convert a proof and its root to hex literals.

    Args:
        proof: Sibling hashes, leaf level first
        root: The root

    Returns:
        (hex proof, hex root), proof order preserved
    """
    return [eth_hex_string(sibling) for sibling in proof], eth_hex_string(root)


def decode_hex_proof(
    hex_proof: Sequence[str],
    hex_root: str,
) -> tuple[list[bytes], bytes]:
    """
    Inverse of convert_proof_to_hex().

    Raises:
        ValueError: If any literal is not a 0x-prefixed 32-byte hex string
    """
    siblings = [
        from_hex(validate_hex_hash(value, f"proof[{i}]"))
        for i, value in enumerate(hex_proof)
    ]
    return siblings, from_hex(validate_hex_hash(hex_root, "root"))


class HexProof(BaseModel):
    """Proof and root in verifier wire format."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes, leaf level first (0x-prefixed, 32 bytes)",
    )
    root: str = Field(
        ...,
        description="Merkle root (0x-prefixed, 32 bytes)",
    )
    leaf: Optional[str] = Field(
        default=None,
        description="Leaf the proof is for (0x-prefixed, 32 bytes)",
    )

    @field_validator("proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(value, f"proof[{i}]") for i, value in enumerate(v)]

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @field_validator("leaf")
    @classmethod
    def _validate_leaf(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_hex_hash(v, "leaf")

    @classmethod
    def from_bytes(
        cls,
        proof: Sequence[bytes],
        root: bytes,
        leaf: bytes | None = None,
    ) -> "HexProof":
        hex_proof, hex_root = convert_proof_to_hex(proof, root)
        return cls(
            proof=hex_proof,
            root=hex_root,
            leaf=eth_hex_string(leaf) if leaf is not None else None,
        )

    def to_bytes(self) -> tuple[list[bytes], bytes]:
        """Decode back to (siblings, root)."""
        return decode_hex_proof(self.proof, self.root)


__all__ = [
    "HEX_HASH_PATTERN",
    "validate_hex_hash",
    "eth_hex_string",
    "convert_proof_to_hex",
    "decode_hex_proof",
    "HexProof",
]
