"""
Proof Transport Schema Unit Tests
Tests for sortedmerkle/schemas/proof.py
"""
import pytest

from fixtures import make_leaves, make_tx_hashes

from sortedmerkle.config.runtime import TreeConfig
from sortedmerkle.crypto.hashing import sha256, to_hex
from sortedmerkle.merkle.merkle_proofs import MerkleProof, ProofStep, SiblingSide
from sortedmerkle.merkle.merkle_tree import MerkleTree
from sortedmerkle.schemas.errors import (
    EmptyTreeException,
    ErrorCodes,
    MalformedProofException,
)
from sortedmerkle.schemas.proof import InclusionProofModel, ProofStepModel


class TestProofStepModel:
    """Tests for ProofStepModel."""

    def test_from_step(self):
        sibling = sha256(b"s")
        model = ProofStepModel.from_step(ProofStep(sibling, SiblingSide.LEFT))

        assert model.sibling == to_hex(sibling)
        assert model.is_left is True

    def test_to_step(self):
        sibling = sha256(b"s")
        model = ProofStepModel(sibling=to_hex(sibling))

        assert model.to_step() == ProofStep(sibling, SiblingSide.RIGHT)

    def test_hex_is_lowercased(self):
        model = ProofStepModel(sibling="0xABCD")

        assert model.sibling == "0xabcd"

    def test_invalid_hex_rejected(self):
        with pytest.raises(ValueError):
            ProofStepModel(sibling="abcd")

    def test_extra_fields_rejected(self):
        with pytest.raises(ValueError):
            ProofStepModel(sibling="0xab", depth=1)


class TestInclusionProofModel:
    """Tests for InclusionProofModel."""

    def test_wire_round_trip_verifies(self):
        leaves = make_tx_hashes(5)
        tree = MerkleTree(leaves)
        leaf = leaves[2]
        model = InclusionProofModel.from_proof(leaf, tree.generate_proof(leaf), tree.root())

        received = InclusionProofModel.from_wire(model.model_dump())

        assert received.verify()
        assert received.verify(expected_height=tree.height)
        assert received.to_proof() == tree.generate_proof(leaf)
        assert received.leaf_bytes() == leaf
        assert received.root_bytes() == tree.root()
        assert received.height == 3

    def test_json_round_trip(self):
        leaves = make_leaves(4)
        tree = MerkleTree(leaves)
        model = InclusionProofModel.from_proof(
            leaves[1], tree.generate_proof(leaves[1]), tree.root()
        )

        restored = InclusionProofModel.model_validate_json(model.model_dump_json())

        assert restored == model
        assert restored.verify()

    def test_carries_policy(self):
        config = TreeConfig(ordering="positional", hash_algorithm="sha3_256")
        leaves = make_leaves(6)
        tree = MerkleTree.build(leaves, config)
        model = InclusionProofModel.from_proof(
            leaves[3], tree.generate_proof(leaves[3]), tree.root(), config
        )

        assert model.ordering == "positional"
        assert model.hash_algorithm == "sha3_256"
        assert model.verify()

    def test_policy_mismatch_fails(self):
        leaves = make_leaves(6)
        tree = MerkleTree.build(leaves, TreeConfig(ordering="positional"))
        model = InclusionProofModel.from_proof(
            leaves[3], tree.generate_proof(leaves[3]), tree.root()
        )

        assert model.ordering == "sorted"
        assert not model.verify()

    def test_unknown_policy_is_false(self):
        leaf = sha256(b"a")
        model = InclusionProofModel(leaf=to_hex(leaf), root=to_hex(leaf), ordering="zigzag")

        assert model.verify() is False

    def test_tampered_wire_sibling_fails(self):
        leaves = make_leaves(8)
        tree = MerkleTree(leaves)
        data = InclusionProofModel.from_proof(
            leaves[0], tree.generate_proof(leaves[0]), tree.root()
        ).model_dump()
        data["steps"][1]["sibling"] = to_hex(sha256(b"forged"))

        assert not InclusionProofModel.from_wire(data).verify()

    def test_from_wire_rejects_bad_payload(self):
        with pytest.raises(MalformedProofException) as exc_info:
            InclusionProofModel.from_wire({"leaf": "0x00", "root": "nothex"})

        assert exc_info.value.code == ErrorCodes.MALFORMED_PROOF
        assert exc_info.value.details["errors"]

    def test_from_wire_rejects_missing_fields(self):
        with pytest.raises(MalformedProofException):
            InclusionProofModel.from_wire({"steps": []})

    def test_from_proof_without_root_raises(self):
        leaf = sha256(b"a")

        with pytest.raises(EmptyTreeException):
            InclusionProofModel.from_proof(leaf, MerkleProof(), MerkleTree().root())
