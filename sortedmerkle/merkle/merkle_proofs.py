"""
Merkle Proofs
Inclusion proof data model and stateless proof verification.

This module provides:
- SiblingSide: which side a sibling occupied when its parent was built
- ProofStep: one (sibling hash, side) pair
- MerkleProof: ordered leaf-to-root sequence of proof steps
- verify_merkle_proof: replay a proof and compare with a claimed root
- MerkleVerifier: class-based wrapper bound to one pair-hashing policy

Verification depends only on the pair-hashing policy, never on a built
tree, so it can run anywhere the root is known.

Verification Rules:
1. current = leaf
2. For each step (leaf to root):
   - symmetric policy: current = combine(current, sibling)
   - non-symmetric policy: sibling on the left gives combine(sibling, current),
     sibling on the right gives combine(current, sibling)
3. Valid iff current == claimed root (exact bytes)

Verification is total: malformed input yields False, never an exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Sequence

from sortedmerkle.crypto.hashing import BYTES_TYPES
from sortedmerkle.crypto.ordering import DEFAULT_PAIR_HASHER, PairHasher

logger = logging.getLogger(__name__)


class SiblingSide(str, Enum):
    """Position of the sibling relative to the node on the proven path."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def is_left(self) -> bool:
        return self is SiblingSide.LEFT

    @classmethod
    def from_is_left(cls, is_left: bool) -> "SiblingSide":
        return cls.LEFT if is_left else cls.RIGHT


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Hash of the node paired with the path node at this level
        side: Whether that sibling was the left or the right argument
    """
    sibling: bytes
    side: SiblingSide = SiblingSide.RIGHT

    def __post_init__(self) -> None:
        """Normalize and validate step fields."""
        if not isinstance(self.sibling, BYTES_TYPES):
            raise TypeError(
                f"Sibling hash must be bytes, got {type(self.sibling).__name__}"
            )
        object.__setattr__(self, "sibling", bytes(self.sibling))
        if not isinstance(self.side, SiblingSide):
            # Accepts the enum's string values; anything else is a ValueError
            object.__setattr__(self, "side", SiblingSide(self.side))


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Holds copies of the sibling hashes along the path from the leaf up to,
    but excluding, the root. It keeps no reference to the tree it came from.

    Attributes:
        steps: Proof steps in leaf-to-root order
    """
    steps: tuple[ProofStep, ...] = ()

    def __post_init__(self) -> None:
        steps = tuple(
            step if isinstance(step, ProofStep) else ProofStep(*step)
            for step in self.steps
        )
        object.__setattr__(self, "steps", steps)

    @property
    def siblings(self) -> list[bytes]:
        return [step.sibling for step in self.steps]

    @property
    def sides(self) -> list[SiblingSide]:
        return [step.side for step in self.steps]

    @property
    def height(self) -> int:
        """Number of levels the proof climbs (tree height)."""
        return len(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    def to_pairs(self) -> list[tuple[bytes, bool]]:
        """Wire view: (sibling hash, is_left flag) per step."""
        return [(step.sibling, step.side.is_left) for step in self.steps]

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[bytes, bool]]) -> "MerkleProof":
        """Build a proof from (sibling hash, is_left flag) pairs."""
        return cls(
            steps=tuple(
                ProofStep(sibling, SiblingSide.from_is_left(is_left))
                for sibling, is_left in pairs
            )
        )

    @classmethod
    def from_siblings(cls, siblings: Iterable[bytes]) -> "MerkleProof":
        """
        Build a proof from bare sibling hashes, without side information.

        Every step is marked as a right sibling. Such proofs only verify
        under a symmetric pair-hashing policy.
        """
        return cls(steps=tuple(ProofStep(sibling) for sibling in siblings))


def verify_merkle_proof(
    leaf: bytes,
    proof: MerkleProof,
    claimed_root: bytes | None,
    *,
    hasher: PairHasher | None = None,
    expected_height: int | None = None,
) -> bool:
    """
    Verify that ``leaf`` is included under ``claimed_root``.

    Args:
        leaf: The leaf hash being proven
        proof: Inclusion proof generated for that leaf
        claimed_root: Root the verifier trusts; None (empty tree) never verifies
        hasher: Pair-hashing policy; must match the one used to build the tree
        expected_height: If given, proofs with a different step count are
            rejected as malformed

    Returns:
        True if replaying the proof reproduces the claimed root, False otherwise
    """
    if claimed_root is None or not isinstance(claimed_root, BYTES_TYPES):
        return False
    if not isinstance(leaf, BYTES_TYPES) or not isinstance(proof, MerkleProof):
        return False
    if expected_height is not None and len(proof) != expected_height:
        logger.debug(
            f"Rejecting malformed proof: {len(proof)} steps, expected {expected_height}"
        )
        return False

    hasher = hasher or DEFAULT_PAIR_HASHER
    current = bytes(leaf)

    for step in proof.steps:
        if hasher.symmetric or step.side is SiblingSide.RIGHT:
            current = hasher.combine(current, step.sibling)
        else:
            current = hasher.combine(step.sibling, current)

    return current == bytes(claimed_root)


class MerkleVerifier:
    """
    Verifier bound to one pair-hashing policy.

    Example:
        >>> verifier = MerkleVerifier()
        >>> verifier.verify(leaf, tree.generate_proof(leaf), tree.root())
        True
    """

    def __init__(self, hasher: PairHasher | None = None) -> None:
        self.hasher = hasher or DEFAULT_PAIR_HASHER

    def verify(
        self,
        leaf: bytes,
        proof: MerkleProof,
        claimed_root: bytes | None,
        expected_height: int | None = None,
    ) -> bool:
        return verify_merkle_proof(
            leaf,
            proof,
            claimed_root,
            hasher=self.hasher,
            expected_height=expected_height,
        )

    def verify_pairs(
        self,
        leaf: bytes,
        pairs: Sequence[tuple[bytes, bool]],
        claimed_root: bytes | None,
    ) -> bool:
        """
        Verify a proof given as raw (sibling hash, is_left) pairs.

        Undecodable pairs make the proof invalid rather than raising.
        """
        try:
            proof = MerkleProof.from_pairs(pairs)
        except (TypeError, ValueError) as e:
            logger.debug(f"Rejecting undecodable proof pairs: {e}")
            return False
        return self.verify(leaf, proof, claimed_root)

    def verify_siblings(
        self,
        leaf: bytes,
        siblings: Sequence[bytes],
        claimed_root: bytes | None,
    ) -> bool:
        """
        Verify a proof given as bare sibling hashes (no side flags).

        Only meaningful for a symmetric policy; returns False otherwise.
        """
        if not self.hasher.symmetric:
            return False
        try:
            proof = MerkleProof.from_siblings(siblings)
        except (TypeError, ValueError) as e:
            logger.debug(f"Rejecting undecodable sibling list: {e}")
            return False
        return self.verify(leaf, proof, claimed_root)


__all__ = [
    "SiblingSide",
    "ProofStep",
    "MerkleProof",
    "verify_merkle_proof",
    "MerkleVerifier",
]
