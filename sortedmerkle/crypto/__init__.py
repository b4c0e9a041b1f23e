"""
Core cryptographic utilities.

Hash primitives plus the order-normalized pair hashing used to build
Merkle parents.
"""
from .hashing import (
    HashFunction,
    BYTES_TYPES,
    HASH_FUNCTIONS,
    sha256,
    double_sha256,
    sha3_256,
    blake2b_256,
    get_hash_function,
    digest_size,
    to_hex,
    from_hex,
)
from .ordering import (
    ORDERING_SORTED,
    ORDERING_POSITIONAL,
    sorted_hash,
    PairHasher,
    SortedPairHasher,
    PositionalPairHasher,
    get_pair_hasher,
    DEFAULT_PAIR_HASHER,
)

__all__ = [
    "HashFunction",
    "BYTES_TYPES",
    "HASH_FUNCTIONS",
    "sha256",
    "double_sha256",
    "sha3_256",
    "blake2b_256",
    "get_hash_function",
    "digest_size",
    "to_hex",
    "from_hex",
    "ORDERING_SORTED",
    "ORDERING_POSITIONAL",
    "sorted_hash",
    "PairHasher",
    "SortedPairHasher",
    "PositionalPairHasher",
    "get_pair_hasher",
    "DEFAULT_PAIR_HASHER",
]
