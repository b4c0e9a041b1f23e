"""
Hashing Utilities
Hash primitives and hex helpers used by the Merkle commitment layer.

This module provides:
- SHA-256 hashing for raw bytes (the default primitive)
- A small registry of alternative fixed-output primitives
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Every registered primitive has a fixed digest size
- Producer and verifier must agree on the primitive by name
"""
from __future__ import annotations

import hashlib
from typing import Callable


# A hash primitive: bytes in, fixed-length digest out
HashFunction = Callable[[bytes], bytes]

# Types accepted wherever a hash value is expected
BYTES_TYPES = (bytes, bytearray, memoryview)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """SHA-256 applied twice, as used for Bitcoin transaction ids."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def sha3_256(data: bytes) -> bytes:
    """32-byte SHA3-256 digest."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """BLAKE2b truncated to a 32-byte digest."""
    return hashlib.blake2b(data, digest_size=32).digest()


# Named primitives that may be selected through configuration
HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "double_sha256": double_sha256,
    "sha3_256": sha3_256,
    "blake2b_256": blake2b_256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a registered hash primitive by name.

    Args:
        name: Registry key, e.g. "sha256"

    Returns:
        The hash function

    Raises:
        ValueError: If no primitive is registered under that name
    """
    try:
        return HASH_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm '{name}'. "
            f"Supported: {sorted(HASH_FUNCTIONS)}"
        ) from None


def digest_size(hash_fn: HashFunction) -> int:
    """Output length in bytes of a hash primitive."""
    return len(hash_fn(b""))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
]
