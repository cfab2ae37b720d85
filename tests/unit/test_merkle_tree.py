"""
Module 02 - Merkle Tree Unit Tests
Tests for porpoise/merkle/merkle_tree.py and merkle_proofs.py

Covers:
1. Root determinism - same leaves -> same root across runs
2. Pair order independence - sorted-pair parents
3. Proof length - log2(leaf count) siblings
4. Round-trip verification - every leaf's proof folds back to the root
5. Single leaf - root equals leaf, empty proof
6. Input validation - non-power-of-two and out-of-range tracked index
7. Tamper detection and the wrong-tracked-leaf case
"""
import hashlib

import pytest

from porpoise.crypto.hashing import format_uint256, hash_sorted_pair, sha256
from porpoise.merkle.fields import SurveyField
from porpoise.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from porpoise.merkle.merkle_tree import (
    MerkleProof,
    MerkleReduction,
    merkle_parent,
    reduce_merkle,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_proof_length,
    compute_tree_depth,
)
from porpoise.merkle.padding import pad_array_to_power_of_two
from porpoise.schemas.errors import (
    ErrorCodes,
    NonPowerOfTwoInputException,
    TrackedIndexOutOfRangeException,
)

from fixtures.common import make_text_leaves


TIMESTAMP_HEX = format_uint256(1_798_761_599)


def sorted_pair(a: bytes, b: bytes) -> bytes:
    """Reference pair hash, written out independently of the module."""
    low, high = (a, b) if a < b else (b, a)
    return hashlib.sha256(low + high).digest()


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_reduction(self):
        """reduce([x], [], 0) returns (x, [], 0)."""
        leaf = sha256(b"single leaf")

        result = reduce_merkle([leaf], 0)

        assert result == MerkleReduction(root=leaf, proof=[], tracked=0)

    def test_single_leaf_keeps_given_proof(self):
        leaf = sha256(b"single")
        carried = [sha256(b"carried")]

        result = reduce_merkle([leaf], 0, proof=carried)

        assert result.proof == carried

    def test_single_leaf_proof_verifies(self):
        leaf = sha256(b"single")
        proof = build_merkle_proof([leaf], 0)

        assert proof.siblings == []
        assert proof.root == leaf
        assert verify_merkle_proof(proof)


class TestTwoLeafScenario:
    """Leaves "Hello" and "World!" hashed individually then paired."""

    def setup_method(self):
        self.hello = hashlib.sha256(b"Hello").digest()
        self.world = hashlib.sha256(b"World!").digest()
        self.expected_root = sorted_pair(self.hello, self.world)

    def test_root(self):
        assert build_merkle_root([self.hello, self.world]) == self.expected_root

    def test_proof_for_leaf_zero(self):
        result = reduce_merkle([self.hello, self.world], 0)

        assert result.proof == [self.world]
        assert result.tracked == 0

    def test_proof_for_leaf_one(self):
        result = reduce_merkle([self.hello, self.world], 1)

        assert result.proof == [self.hello]

    def test_leaf_zero_verifies(self):
        proof = build_merkle_proof([self.hello, self.world], 0)

        assert compute_root_from_proof(self.hello, proof.siblings) == self.expected_root
        assert MerkleVerifier.verify(proof)

    def test_swapped_order_same_root(self):
        """The root does not depend on which leaf is on the left."""
        assert build_merkle_root([self.world, self.hello]) == self.expected_root


class TestFourFieldScenario:
    """Fields ["Q", <timestamp>, "OptA", "OptB"], tracking the timestamp."""

    def setup_method(self):
        self.values = ["Q", TIMESTAMP_HEX, "OptA", "OptB"]
        self.leaves = pad_array_to_power_of_two(self.values, "")

    def test_proof_has_two_siblings(self):
        result = reduce_merkle(self.leaves, 1)

        assert len(result.proof) == 2

    def test_timestamp_leaf_folds_to_root(self):
        result = reduce_merkle(self.leaves, 1)
        timestamp_leaf = hashlib.sha256(bytes.fromhex(TIMESTAMP_HEX)).digest()

        folded = sorted_pair(sorted_pair(timestamp_leaf, result.proof[0]), result.proof[1])

        assert folded == result.root

    def test_siblings_taken_before_pairing(self):
        """Round 0 sibling is leaf 0; round 1 sibling is the (OptA, OptB) parent."""
        q, ts, opt_a, opt_b = self.leaves

        result = reduce_merkle(self.leaves, 1)

        assert result.proof == [q, sorted_pair(opt_a, opt_b)]
        assert result.root == sorted_pair(sorted_pair(q, ts), sorted_pair(opt_a, opt_b))


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        leaves = make_text_leaves(8)

        results = [reduce_merkle(leaves, 3) for _ in range(10)]

        assert all(r == results[0] for r in results)

    def test_root_deterministic_different_runs(self):
        root1 = build_merkle_root(make_text_leaves(16))
        root2 = build_merkle_root(make_text_leaves(16))

        assert root1 == root2

    def test_root_independent_of_tracked_index(self):
        leaves = make_text_leaves(8)

        roots = {reduce_merkle(leaves, i).root for i in range(8)}

        assert len(roots) == 1

    def test_different_leaves_different_roots(self):
        assert build_merkle_root(make_text_leaves(4, "a")) != build_merkle_root(
            make_text_leaves(4, "b")
        )

    def test_swapping_within_pair_keeps_root(self):
        a, b, c, d = make_text_leaves(4)

        assert build_merkle_root([a, b, c, d]) == build_merkle_root([b, a, d, c])

    def test_moving_leaf_across_pairs_changes_root(self):
        """Pair membership still matters."""
        a, b, c, d = make_text_leaves(4)

        assert build_merkle_root([a, b, c, d]) != build_merkle_root([a, c, b, d])


class TestProofLength:
    """len(proof) == k for 2**k leaves."""

    @pytest.mark.parametrize("k", [0, 1, 2, 3, 5, 8])
    def test_proof_length(self, k):
        leaves = make_text_leaves(2**k)

        for index in (0, 2**k - 1):
            assert len(reduce_merkle(leaves, index).proof) == k

    def test_final_tracked_index_is_zero(self):
        leaves = make_text_leaves(16)

        assert all(reduce_merkle(leaves, i).tracked == 0 for i in range(16))


class TestProofVerification:
    """Round-trip verification for every leaf."""

    @pytest.mark.parametrize("count", [1, 2, 4, 8, 32])
    def test_proof_verifies_for_each_index(self, count):
        leaves = make_text_leaves(count)

        for i in range(count):
            proof = build_merkle_proof(leaves, i)
            assert proof.leaf == leaves[i]
            assert verify_merkle_proof(proof), f"Proof failed for index {i}"

    def test_proof_root_matches_tree_root(self):
        leaves = make_text_leaves(8)
        expected_root = build_merkle_root(leaves)

        for i in range(len(leaves)):
            assert build_merkle_proof(leaves, i).root == expected_root

    def test_input_proof_not_mutated(self):
        carried: list[bytes] = []

        reduce_merkle(make_text_leaves(4), 2, proof=carried)

        assert carried == []

    def test_input_leaves_not_mutated(self):
        leaves = make_text_leaves(4)
        snapshot = list(leaves)

        reduce_merkle(leaves, 1)

        assert leaves == snapshot


class TestWrongTrackedLeaf:
    """Proof correctness is structural: the tracked index decides what is proven."""

    def test_proof_verifies_wrong_leaf_only(self):
        values = ["Q", TIMESTAMP_HEX, "OptA", "OptB"]
        leaves = pad_array_to_power_of_two(values, "")
        intended = leaves[1]

        # caller meant the timestamp (1) but tracked OptA (2)
        result = reduce_merkle(leaves, 2)

        assert MerkleVerifier.verify_leaf_in_root(leaves[2], result.proof, result.root)
        assert not MerkleVerifier.verify_leaf_in_root(intended, result.proof, result.root)


class TestInputValidation:
    """Caller contract violations fail fast."""

    @pytest.mark.parametrize("count", [0, 3, 5, 6, 7])
    def test_non_power_of_two_rejected(self, count):
        with pytest.raises(NonPowerOfTwoInputException) as exc_info:
            reduce_merkle(make_text_leaves(count), 0)

        assert exc_info.value.code == ErrorCodes.NON_POWER_OF_TWO_INPUT
        assert exc_info.value.details["count"] == count

    @pytest.mark.parametrize("index", [4, 5, 100, -1])
    def test_tracked_index_out_of_range(self, index):
        with pytest.raises(TrackedIndexOutOfRangeException) as exc_info:
            reduce_merkle(make_text_leaves(4), index)

        assert exc_info.value.code == ErrorCodes.TRACKED_INDEX_OUT_OF_RANGE

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            build_merkle_proof(make_text_leaves(2), 2)

    def test_build_root_requires_power_of_two(self):
        with pytest.raises(NonPowerOfTwoInputException):
            build_merkle_root(make_text_leaves(3))


class TestTamperDetection:
    """Tests for tamper detection (invalid proofs fail)."""

    def test_tampered_sibling_fails(self):
        proof = build_merkle_proof(make_text_leaves(4), 1)
        siblings = list(proof.siblings)
        siblings[0] = sha256(b"tampered")

        tampered = MerkleProof(
            leaf=proof.leaf, index=proof.index, siblings=siblings, root=proof.root
        )

        assert not verify_merkle_proof(tampered)

    def test_tampered_leaf_fails(self):
        proof = build_merkle_proof(make_text_leaves(4), 2)

        tampered = MerkleProof(
            leaf=sha256(b"wrong leaf"),
            index=proof.index,
            siblings=proof.siblings,
            root=proof.root,
        )

        assert not verify_merkle_proof(tampered)

    def test_tampered_root_fails(self):
        proof = build_merkle_proof(make_text_leaves(4), 0)

        tampered = MerkleProof(
            leaf=proof.leaf,
            index=proof.index,
            siblings=proof.siblings,
            root=sha256(b"wrong root"),
        )

        assert not verify_merkle_proof(tampered)

    def test_missing_sibling_fails(self):
        proof = build_merkle_proof(make_text_leaves(8), 3)

        tampered = MerkleProof(
            leaf=proof.leaf,
            index=proof.index,
            siblings=proof.siblings[:-1],
            root=proof.root,
        )

        assert not verify_merkle_proof(tampered)

    def test_reordered_siblings_fail(self):
        proof = build_merkle_proof(make_text_leaves(8), 5)

        assert not MerkleVerifier.verify_leaf_in_root(
            proof.leaf, list(reversed(proof.siblings)), proof.root
        )

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            MerkleProof(leaf=b"", index=-1, siblings=[], root=b"")


class TestMerkleParent:
    """Tests for merkle_parent() function."""

    def test_merkle_parent_order_independent(self):
        a = sha256(b"a")
        b = sha256(b"b")

        assert merkle_parent(a, b) == merkle_parent(b, a)

    def test_merkle_parent_equals_sorted_pair(self):
        a = sha256(b"left")
        b = sha256(b"right")

        assert merkle_parent(a, b) == hash_sorted_pair(a, b) == sorted_pair(a, b)


class TestComputeTreeDepth:
    """Tests for compute_tree_depth() / compute_proof_length()."""

    def test_depth_empty(self):
        assert compute_tree_depth(0) == 0

    @pytest.mark.parametrize(
        "count,depth",
        [(1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5)],
    )
    def test_depth_accounts_for_padding(self, count, depth):
        assert compute_tree_depth(count) == depth

    @pytest.mark.parametrize("count,length", [(1, 0), (2, 1), (3, 2), (4, 2), (7, 3)])
    def test_proof_length(self, count, length):
        assert compute_proof_length(count) == length


class TestMerkleProver:
    """Tests for the MerkleProver / MerkleVerifier wrappers."""

    def test_prove_matches_build(self):
        leaves = make_text_leaves(4)

        assert MerkleProver.prove(leaves, 1) == build_merkle_proof(leaves, 1)

    def test_prove_fields_pads(self):
        fields = [
            SurveyField.text("Q"),
            SurveyField.hex_timestamp(TIMESTAMP_HEX),
            SurveyField.text("OptA"),
        ]

        proof = MerkleProver.prove_fields(fields, 1, placeholder="PAD")

        assert len(proof.siblings) == 2
        assert proof.root == MerkleProver.compute_root_from_fields(fields, "PAD")
        assert MerkleVerifier.verify(proof)

    def test_prove_fields_placeholder_index(self):
        fields = [SurveyField.text(str(i)) for i in range(3)]

        proof = MerkleProver.prove_fields(fields, 3, placeholder="PAD")

        assert proof.leaf == sha256(b"PAD")
        assert MerkleVerifier.verify(proof)

    def test_verify_hex(self):
        leaves = make_text_leaves(4)
        proof = build_merkle_proof(leaves, 2)

        assert MerkleVerifier.verify_hex(
            ["0x" + s.hex() for s in proof.siblings],
            "0x" + proof.root.hex(),
            "0x" + proof.leaf.hex(),
        )

    def test_verify_hex_rejects_malformed(self):
        with pytest.raises(ValueError):
            MerkleVerifier.verify_hex([], "0x1234", "0x" + "00" * 32)
