"""
sortedmerkle - Merkle tree commitments with order-normalized pair hashing.

Build a tree over leaf hashes, publish its root, hand out inclusion proofs,
and verify them anywhere the root is known.
"""
from sortedmerkle.crypto import (
    sha256,
    sorted_hash,
    PairHasher,
    SortedPairHasher,
    PositionalPairHasher,
    get_pair_hasher,
)
from sortedmerkle.merkle import (
    MerkleTree,
    MerkleProof,
    ProofStep,
    SiblingSide,
    MerkleVerifier,
    verify_merkle_proof,
    build_merkle_root,
)
from sortedmerkle.schemas import (
    MerkleException,
    EmptyTreeException,
    LeafNotFoundException,
    InvalidLeafException,
    MalformedProofException,
    InclusionProofModel,
)
from sortedmerkle.config import RuntimeConfig, TreeConfig

__version__ = "0.1.0"

__all__ = [
    "sha256",
    "sorted_hash",
    "PairHasher",
    "SortedPairHasher",
    "PositionalPairHasher",
    "get_pair_hasher",
    "MerkleTree",
    "MerkleProof",
    "ProofStep",
    "SiblingSide",
    "MerkleVerifier",
    "verify_merkle_proof",
    "build_merkle_root",
    "MerkleException",
    "EmptyTreeException",
    "LeafNotFoundException",
    "InvalidLeafException",
    "MalformedProofException",
    "InclusionProofModel",
    "RuntimeConfig",
    "TreeConfig",
]
