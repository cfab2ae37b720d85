"""
Module 02 - Merkle Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides class-based interfaces:
- MerkleProver: Generate proofs from leaves or from fields
- MerkleVerifier: Verify proofs, including in hex wire format
"""
from __future__ import annotations

from typing import Sequence

from porpoise.crypto.hashing import from_hex
from porpoise.merkle.encoding import decode_hex_proof, validate_hex_hash
from porpoise.merkle.fields import SurveyField
from porpoise.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    compute_root_from_proof,
    verify_merkle_proof,
)
from porpoise.merkle.padding import pad_fields


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> leaves = [sha256(b"a"), sha256(b"b"), sha256(b"c"), sha256(b"d")]
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            NonPowerOfTwoInputException: If len(leaves) is not a power of two
            TrackedIndexOutOfRangeException: If index is out of range
        """
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_fields(
        fields: Sequence[SurveyField],
        index: int,
        placeholder: str = "",
    ) -> MerkleProof:
        """
        Pad and encode fields, then prove the field at index.

        Index addresses the padded sequence, so placeholders can be proven
        too.
        """
        return build_merkle_proof(pad_fields(fields, placeholder), index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a power-of-two sequence of leaves."""
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_fields(
        fields: Sequence[SurveyField],
        placeholder: str = "",
    ) -> bytes:
        """Pad and encode fields, then compute the root."""
        return build_merkle_root(pad_fields(fields, placeholder))


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Verification folds the leaf through the siblings with the sorted-pair
    hash, exactly as the on-chain verifier does.
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a Merkle proof."""
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf is included in a root using raw components."""
        return compute_root_from_proof(leaf, siblings) == root

    @staticmethod
    def verify_hex(
        hex_proof: Sequence[str],
        hex_root: str,
        hex_leaf: str,
    ) -> bool:
        """
        Verify hex literals in the argument shape of the contract's
        verify(proof, root, leaf).

        Raises:
            ValueError: If any literal is not a 0x-prefixed 32-byte hex string
        """
        siblings, root = decode_hex_proof(hex_proof, hex_root)
        leaf = from_hex(validate_hex_hash(hex_leaf, "leaf"))
        return MerkleVerifier.verify_leaf_in_root(leaf, siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
