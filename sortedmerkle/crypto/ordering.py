"""
Hash Ordering
Combine two child hashes into their parent hash.

This module provides:
- sorted_hash: order-normalized parent hash (smaller input goes left)
- PairHasher: interface for parent-hash policies
- SortedPairHasher: symmetric policy built on sorted_hash (default)
- PositionalPairHasher: non-symmetric policy, hash(left + right)
- get_pair_hasher: resolve a policy by name

Ordering Rules:
1. Inputs are compared as raw bytes (lexicographic, unsigned)
2. If a < b: parent = H(a + b)
3. Otherwise (a > b or a == b): parent = H(b + a)
4. Hence sorted_hash(a, b) == sorted_hash(b, a)

Security Notes:
- Leaves and internal nodes are hashed identically (no domain separation).
  An internal node can therefore be presented as a leaf of a shorter tree.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from sortedmerkle.crypto.hashing import (
    HashFunction,
    digest_size,
    get_hash_function,
    sha256,
)


ORDERING_SORTED = "sorted"
ORDERING_POSITIONAL = "positional"


def sorted_hash(a: bytes, b: bytes, hash_fn: HashFunction = sha256) -> bytes:
    """
    Compute the order-normalized parent hash of two nodes.

    The byte-wise smaller value is always placed on the left before hashing,
    so the result does not depend on argument order.

    Args:
        a: First child hash
        b: Second child hash
        hash_fn: Hash primitive (defaults to SHA-256)

    Returns:
        Parent hash

    Example:
        >>> x, y = sha256(b"x"), sha256(b"y")
        >>> sorted_hash(x, y) == sorted_hash(y, x)
        True
    """
    if a < b:
        return hash_fn(a + b)
    return hash_fn(b + a)


class PairHasher(ABC):
    """
    Policy for combining a left and a right child into a parent hash.

    Implementations hold no mutable state and may be shared across threads.
    """

    name: str = ""
    symmetric: bool = False

    def __init__(self, hash_fn: HashFunction = sha256) -> None:
        self._hash_fn = hash_fn

    @property
    def hash_fn(self) -> HashFunction:
        return self._hash_fn

    @property
    def digest_size(self) -> int:
        return digest_size(self._hash_fn)

    @abstractmethod
    def combine(self, left: bytes, right: bytes) -> bytes:
        """Return the parent hash of ``left`` and ``right``."""

    def __repr__(self) -> str:
        fn_name = getattr(self._hash_fn, "__name__", repr(self._hash_fn))
        return f"{self.__class__.__name__}(hash_fn={fn_name})"


class SortedPairHasher(PairHasher):
    """Symmetric policy: combine(a, b) == combine(b, a)."""

    name = ORDERING_SORTED
    symmetric = True

    def combine(self, left: bytes, right: bytes) -> bytes:
        return sorted_hash(left, right, self._hash_fn)


class PositionalPairHasher(PairHasher):
    """
    Non-symmetric policy: parent = H(left + right) in tree position order.

    With this policy the side recorded in each proof step decides the
    argument order during verification.
    """

    name = ORDERING_POSITIONAL
    symmetric = False

    def combine(self, left: bytes, right: bytes) -> bytes:
        return self._hash_fn(left + right)


_PAIR_HASHERS: dict[str, type[PairHasher]] = {
    ORDERING_SORTED: SortedPairHasher,
    ORDERING_POSITIONAL: PositionalPairHasher,
}


def get_pair_hasher(
    ordering: str = ORDERING_SORTED,
    hash_algorithm: str = "sha256",
) -> PairHasher:
    """
    Build a pair hasher from policy and algorithm names.

    Raises:
        ValueError: If either name is unknown
    """
    try:
        hasher_cls = _PAIR_HASHERS[ordering]
    except KeyError:
        raise ValueError(
            f"Unknown ordering '{ordering}'. Supported: {sorted(_PAIR_HASHERS)}"
        ) from None
    return hasher_cls(get_hash_function(hash_algorithm))


# Shared default policy; stateless so a single instance is enough
DEFAULT_PAIR_HASHER: PairHasher = SortedPairHasher()


__all__ = [
    "ORDERING_SORTED",
    "ORDERING_POSITIONAL",
    "sorted_hash",
    "PairHasher",
    "SortedPairHasher",
    "PositionalPairHasher",
    "get_pair_hasher",
    "DEFAULT_PAIR_HASHER",
]
