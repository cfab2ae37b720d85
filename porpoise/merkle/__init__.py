"""
Module 02 - Merkle Tree and Commitments
Sorted-pair Merkle commitments over survey fields, with inclusion proofs.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Field encoding: fields -> 32-byte leaves
- Padding: leaf level padded to a power of two
- Reduction: root plus the proof of one tracked leaf
- Proof encoding: 0x-prefixed hex literals for the verifier

Canonical Commitment Rules:
1. Leaf hashing: sha256(field bytes), hex timestamp fields hex-decoded first
2. Parent hashing: sha256(min(a, b) + max(a, b))
3. Padding: placeholders appended to the next power of two
4. Single leaf: root = leaf, empty proof

Usage:
    from porpoise.merkle import SurveyField, pad_fields, reduce_merkle

    leaves = pad_fields([SurveyField.text("Q"), SurveyField.hex_timestamp(ts)])
    result = reduce_merkle(leaves, tracked=1)
    hex_proof, hex_root = convert_proof_to_hex(result.proof, result.root)
"""
from .fields import (
    DEFAULT_HEX_POSITION,
    FieldKind,
    SurveyField,
    decode_hex_field,
    encode_field,
    encode_fields,
    encode_value,
    fields_from_values,
)

from .padding import (
    is_power_of_two,
    next_power_of_two,
    pad_fields,
    pad_array_to_power_of_two,
)

from .merkle_tree import (
    MerkleReduction,
    MerkleProof,
    merkle_parent,
    reduce_merkle,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_proof_length,
    compute_tree_depth,
)

from .encoding import (
    HexProof,
    eth_hex_string,
    convert_proof_to_hex,
    decode_hex_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Field encoding
    "DEFAULT_HEX_POSITION",
    "FieldKind",
    "SurveyField",
    "decode_hex_field",
    "encode_field",
    "encode_fields",
    "encode_value",
    "fields_from_values",
    # Padding
    "is_power_of_two",
    "next_power_of_two",
    "pad_fields",
    "pad_array_to_power_of_two",
    # Core types
    "MerkleReduction",
    "MerkleProof",
    # Core functions
    "merkle_parent",
    "reduce_merkle",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_proof_length",
    "compute_tree_depth",
    # Wire format
    "HexProof",
    "eth_hex_string",
    "convert_proof_to_hex",
    "decode_hex_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
