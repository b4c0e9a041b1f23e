"""
Merkle Tree Implementation
Deterministic Merkle tree construction and inclusion proof generation.

This module provides:
- MerkleTree: immutable level-by-level tree over caller-supplied leaf hashes
- build_merkle_root: compute a root without keeping the tree
- compute_tree_depth: number of levels for a given leaf count

Commitment Rules (Hard Contracts):
1. Leaves are pre-hashed by the caller; they are never re-hashed here
2. Parent hashing: parent = combine(left, right) of the pair-hashing policy
   (order-normalized sorted_hash by default)
3. Padding rule: a lone last node at any level is paired with itself.
   The duplicate is used for hashing only and never stored in a level
4. Empty leaves: no root (None), not a zero hash
5. Single leaf: root = leaf

Determinism Notes:
- No randomness; identical ordered leaves give identical levels and root
- Leaves are sorted only when sort_leaves=True
- Duplicate leaves are kept; proofs use the first matching index
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from sortedmerkle.config.runtime import TreeConfig, get_default_config
from sortedmerkle.crypto.hashing import BYTES_TYPES, to_hex
from sortedmerkle.crypto.ordering import DEFAULT_PAIR_HASHER, PairHasher
from sortedmerkle.merkle.merkle_proofs import (
    MerkleProof,
    ProofStep,
    SiblingSide,
    verify_merkle_proof,
)
from sortedmerkle.schemas.errors import (
    EmptyTreeException,
    InvalidLeafException,
    LeafNotFoundException,
)

logger = logging.getLogger(__name__)

Level = tuple[bytes, ...]


class MerkleTree:
    """
    A binary Merkle tree holding every level from the leaves to the root.

    The tree is immutable once built; build a new instance to commit to a
    different leaf sequence.

    Example:
        >>> leaves = [sha256(b"tx1"), sha256(b"tx2"), sha256(b"tx3")]
        >>> tree = MerkleTree(leaves)
        >>> proof = tree.generate_proof(leaves[2])
        >>> verify_merkle_proof(leaves[2], proof, tree.root())
        True
    """

    def __init__(
        self,
        leaves: Iterable[bytes] = (),
        *,
        sort_leaves: bool = False,
        hasher: PairHasher | None = None,
        strict_leaf_size: bool = False,
    ) -> None:
        """
        Build a tree from leaf hashes.

        Args:
            leaves: Leaf hashes in caller-defined order
            sort_leaves: Sort leaves by byte order before building
            hasher: Pair-hashing policy (symmetric SHA-256 by default)
            strict_leaf_size: Reject leaves whose length differs from the
                policy's digest size

        Raises:
            InvalidLeafException: If a leaf is not bytes, or has the wrong
                size when strict_leaf_size is set
        """
        self._hasher = hasher or DEFAULT_PAIR_HASHER
        self._sorted = sort_leaves

        leaf_level = self._normalize_leaves(leaves, strict_leaf_size)
        if sort_leaves:
            leaf_level.sort()

        self._levels: tuple[Level, ...] = self._build_levels(tuple(leaf_level))
        logger.debug(
            f"Built Merkle tree: {self.leaf_count} leaves, height {self.height}, "
            f"hasher {self._hasher!r}, sorted={sort_leaves}"
        )

    @classmethod
    def build(
        cls,
        leaves: Iterable[bytes],
        config: TreeConfig | None = None,
    ) -> "MerkleTree":
        """
        Build a tree using a TreeConfig (the process default when omitted).
        """
        if config is None:
            config = get_default_config().tree
        return cls(
            leaves,
            sort_leaves=config.sort_leaves,
            hasher=config.pair_hasher(),
            strict_leaf_size=config.strict_leaf_size,
        )

    def _normalize_leaves(
        self,
        leaves: Iterable[bytes],
        strict_leaf_size: bool,
    ) -> list[bytes]:
        expected_size = self._hasher.digest_size if strict_leaf_size else None
        normalized: list[bytes] = []
        for i, leaf in enumerate(leaves):
            if not isinstance(leaf, BYTES_TYPES):
                raise InvalidLeafException(
                    f"Leaf {i} must be bytes, got {type(leaf).__name__}",
                    leaf_index=i,
                )
            leaf = bytes(leaf)
            if expected_size is not None and len(leaf) != expected_size:
                raise InvalidLeafException(
                    f"Leaf {i} is {len(leaf)} bytes, expected {expected_size}",
                    leaf_index=i,
                    details={"expected_size": expected_size, "actual_size": len(leaf)},
                )
            normalized.append(leaf)
        return normalized

    def _build_levels(self, leaves: Level) -> tuple[Level, ...]:
        """
        Reduce the leaf level to the root, keeping every level.

        Example: [a, b, c] -> [combine(a, b), combine(c, c)] -> [root]
        """
        if not leaves:
            return ()

        levels: list[Level] = [leaves]
        current = leaves

        while len(current) > 1:
            n = len(current)
            parents: list[bytes] = []
            for i in range(0, n, 2):
                # Odd level: the last node is paired with itself
                right = current[i + 1] if i + 1 < n else current[i]
                parents.append(self._hasher.combine(current[i], right))
            current = tuple(parents)
            levels.append(current)

        return tuple(levels)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def root(self) -> Optional[bytes]:
        """Root hash, or None for a tree built from no leaves."""
        if not self._levels:
            return None
        return self._levels[-1][0]

    @property
    def has_root(self) -> bool:
        return bool(self._levels)

    @property
    def leaves(self) -> Level:
        """Leaf level as committed (sorted if sort_leaves was set)."""
        return self._levels[0] if self._levels else ()

    @property
    def levels(self) -> tuple[Level, ...]:
        """All levels, leaves first, root last."""
        return self._levels

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def depth(self) -> int:
        """Number of levels including leaves and root (0 when empty)."""
        return len(self._levels)

    @property
    def height(self) -> int:
        """Number of levels above the leaves; equals every proof's length."""
        return max(len(self._levels) - 1, 0)

    @property
    def hasher(self) -> PairHasher:
        return self._hasher

    @property
    def sorted(self) -> bool:
        return self._sorted

    def index_of(self, leaf: bytes) -> Optional[int]:
        """First index of ``leaf`` in the leaf level, or None."""
        if not isinstance(leaf, BYTES_TYPES):
            return None
        try:
            return self.leaves.index(bytes(leaf))
        except ValueError:
            return None

    def __contains__(self, leaf: bytes) -> bool:
        return self.index_of(leaf) is not None

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        root = self.root()
        root_hex = to_hex(root) if root is not None else None
        return (
            f"MerkleTree(leaves={self.leaf_count}, height={self.height}, "
            f"root={root_hex})"
        )

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def generate_proof(self, target: bytes) -> MerkleProof:
        """
        Generate an inclusion proof for a leaf hash.

        If the hash occurs more than once among the leaves, the proof is
        for its first occurrence.

        Args:
            target: Leaf hash to prove (exact byte match)

        Returns:
            MerkleProof with one step per level below the root

        Raises:
            EmptyTreeException: If the tree has no leaves
            InvalidLeafException: If target is not bytes
            LeafNotFoundException: If no leaf equals target
        """
        if not self._levels:
            raise EmptyTreeException()
        if not isinstance(target, BYTES_TYPES):
            raise InvalidLeafException(
                f"Proof target must be bytes, got {type(target).__name__}"
            )

        index = self.index_of(target)
        if index is None:
            target_hex = to_hex(bytes(target))
            raise LeafNotFoundException(
                f"Leaf {target_hex} is not in the tree",
                leaf_hex=target_hex,
            )

        return self._proof_for_index(index)

    def generate_proof_at(self, index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at ``index``.

        Raises:
            EmptyTreeException: If the tree has no leaves
            IndexError: If index is out of range
        """
        if not self._levels:
            raise EmptyTreeException()
        if index < 0 or index >= self.leaf_count:
            raise IndexError(
                f"Leaf index {index} out of range for {self.leaf_count} leaves"
            )
        return self._proof_for_index(index)

    def _proof_for_index(self, index: int) -> MerkleProof:
        """
        Collect siblings bottom-up, mirroring the pairing used in _build_levels.

        Even index: sibling is index + 1 on the right, or the node itself when
        it is the lone last node. Odd index: sibling is index - 1 on the left.
        """
        steps: list[ProofStep] = []
        current_index = index

        for level in self._levels[:-1]:
            if current_index % 2 == 0:
                sibling_index = current_index + 1
                if sibling_index == len(level):
                    sibling_index = current_index
                side = SiblingSide.RIGHT
            else:
                sibling_index = current_index - 1
                side = SiblingSide.LEFT

            steps.append(ProofStep(level[sibling_index], side))
            current_index //= 2

        logger.debug(f"Generated proof for leaf index {index}: {len(steps)} steps")
        return MerkleProof(steps=tuple(steps))

    def verify(self, leaf: bytes, proof: MerkleProof) -> bool:
        """Verify a proof against this tree's own root and pairing policy."""
        return verify_merkle_proof(
            leaf,
            proof,
            self.root(),
            hasher=self._hasher,
            expected_height=self.height,
        )


def build_merkle_root(
    leaves: Sequence[bytes],
    *,
    sort_leaves: bool = False,
    hasher: PairHasher | None = None,
) -> Optional[bytes]:
    """
    Compute the Merkle root of a leaf sequence.

    Returns:
        Root hash, or None when leaves is empty
    """
    return MerkleTree(leaves, sort_leaves=sort_leaves, hasher=hasher).root()


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a Merkle tree with given number of leaves.

    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "Level",
    "MerkleTree",
    "build_merkle_root",
    "compute_tree_depth",
]
