"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: build from leaf hashes, get the root, generate proofs
- MerkleProof / ProofStep / SiblingSide: detached inclusion proofs
- verify_merkle_proof / MerkleVerifier: verify without the tree
- build_merkle_root, compute_tree_depth: helpers

Commitment Rules:
1. Leaves are caller-supplied hashes
2. Parent hashing: sorted_hash(a, b) = H(min(a, b) + max(a, b)) by default
3. Padding: a lone last node is paired with itself at any level
4. Empty tree: no root (None)
5. Single leaf: root = leaf

Usage:
    from sortedmerkle.merkle import MerkleTree, verify_merkle_proof
    from sortedmerkle.crypto import sha256

    leaves = [sha256(tx) for tx in (b"tx1", b"tx2", b"tx3")]
    tree = MerkleTree(leaves)
    proof = tree.generate_proof(leaves[1])
    assert verify_merkle_proof(leaves[1], proof, tree.root())
"""
from .merkle_proofs import (
    SiblingSide,
    ProofStep,
    MerkleProof,
    verify_merkle_proof,
    MerkleVerifier,
)
from .merkle_tree import (
    Level,
    MerkleTree,
    build_merkle_root,
    compute_tree_depth,
)


__all__ = [
    # Core types
    "Level",
    "MerkleTree",
    "SiblingSide",
    "ProofStep",
    "MerkleProof",
    # Core functions
    "verify_merkle_proof",
    "build_merkle_root",
    "compute_tree_depth",
    # Convenience classes
    "MerkleVerifier",
]
