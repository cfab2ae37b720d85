"""
Module 02 - Merkle Tree Implementation
Sorted-pair Merkle reduction with inclusion-proof capture.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Round-by-round reduction of a power-of-two leaf level to a root,
  capturing the sibling of one tracked leaf per round
- Merkle proof generation for any leaf index
- Merkle proof verification by folding a leaf through its siblings

Canonical Commitment Rules (Hard Contracts):
1. Leaves are produced by porpoise.merkle.fields (sha256 of encoded field)
2. Parent hashing: parent = sha256(min(a, b) + max(a, b)), raw byte order
3. Leaf count entering reduction must be a power of two (pad first);
   there is no duplicate-last rule
4. Single leaf: root = leaf, proof is empty
5. Proof siblings are ordered leaf level first, one per round, so
   len(siblings) == log2(leaf count)

Because parents are order-independent, a proof carries no left/right
flags and verification never needs the leaf index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from porpoise.crypto.hashing import hash_sorted_pair
from porpoise.merkle.padding import is_power_of_two, next_power_of_two
from porpoise.schemas.errors import (
    NonPowerOfTwoInputException,
    TrackedIndexOutOfRangeException,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleReduction:
    """
    Result of reducing a leaf level to its root.

    Attributes:
        root: The 32-byte root
        proof: Sibling hashes of the tracked leaf, leaf level first
        tracked: Index of the tracked node at the last level (0 unless
                 the input already was a single node)
    """
    root: bytes
    proof: list[bytes]
    tracked: int


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        index: The 0-based index of the leaf in the padded leaf list
        siblings: List of sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_sorted_pair(left, right)


def _check_level(leaves: Sequence[bytes], tracked: int) -> None:
    if not is_power_of_two(len(leaves)):
        raise NonPowerOfTwoInputException(len(leaves))
    if tracked < 0 or tracked >= len(leaves):
        raise TrackedIndexOutOfRangeException(tracked, len(leaves))


def reduce_merkle(
    leaves: Sequence[bytes],
    tracked: int,
    proof: Sequence[bytes] | None = None,
) -> MerkleReduction:
    """
    Reduce a leaf level to its root, collecting the tracked leaf's proof.

    Algorithm, per round until one node remains:
    1. Walk the level in pairs (2i, 2i + 1)
    2. If the tracked index is in the pair, append the other member
       (taken from this level, before pairing) to the proof and move the
       tracked index to i
    3. The next level is the sorted-pair hash of every pair, in order

    Args:
        leaves: Leaf hashes, length a power of two
        tracked: 0-based index of the leaf to prove
        proof: Siblings already collected; copied, never mutated

    Returns:
        MerkleReduction with root, proof and final tracked index

    Raises:
        NonPowerOfTwoInputException: If len(leaves) is not a power of two
        TrackedIndexOutOfRangeException: If tracked does not address a leaf

    Example:
        >>> a, b = sha256(b"Hello"), sha256(b"World!")
        >>> result = reduce_merkle([a, b], 0)
        >>> result.proof == [b]
        True
    """
    _check_level(leaves, tracked)

    siblings: list[bytes] = list(proof) if proof else []
    level: list[bytes] = list(leaves)

    while len(level) > 1:
        next_level: list[bytes] = []
        for i in range(len(level) // 2):
            a = level[2 * i]
            b = level[2 * i + 1]
            if tracked == 2 * i:
                siblings.append(b)
                tracked = i
            elif tracked == 2 * i + 1:
                siblings.append(a)
                tracked = i
            next_level.append(hash_sorted_pair(a, b))
        level = next_level

    logger.debug(
        "Reduced %d leaves to root with %d proof siblings",
        len(leaves),
        len(siblings),
    )
    return MerkleReduction(root=level[0], proof=siblings, tracked=tracked)


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a power-of-two sequence of leaf hashes.

    Raises:
        NonPowerOfTwoInputException: If len(leaves) is not a power of two
    """
    return reduce_merkle(leaves, 0).root


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Args:
        leaves: Leaf hashes, length a power of two
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with leaf, index, siblings (bottom-up), and root

    Raises:
        NonPowerOfTwoInputException: If len(leaves) is not a power of two
        TrackedIndexOutOfRangeException: If index is out of range
    """
    result = reduce_merkle(leaves, index)
    return MerkleProof(
        leaf=leaves[index],
        index=index,
        siblings=result.proof,
        root=result.root,
    )


def compute_root_from_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """Fold a leaf through its siblings with the sorted-pair hash."""
    current = leaf
    for sibling in siblings:
        current = hash_sorted_pair(current, sibling)
    return current


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof.

    Recomputes the root from the leaf and siblings, checking against the
    claimed root. The index is not consulted.

    Returns:
        True if proof is valid, False otherwise
    """
    return compute_root_from_proof(proof.leaf, proof.siblings) == proof.root


def compute_proof_length(num_leaves: int) -> int:
    """
    Number of siblings in a proof once num_leaves fields are padded.

    Raises:
        InvalidFieldCountException: If num_leaves < 1
    """
    return next_power_of_two(num_leaves).bit_length() - 1


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of the tree built from num_leaves fields.

    Depth is the number of levels from the padded leaf level to the root
    (inclusive). A single leaf has depth 1, two leaves have depth 2,
    three leaves pad to four and have depth 3.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves == 0:
        return 0
    return compute_proof_length(num_leaves) + 1


__all__ = [
    "MerkleReduction",
    "MerkleProof",
    "merkle_parent",
    "reduce_merkle",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_proof_length",
    "compute_tree_depth",
]
