"""
Common factories shared by all test modules.
"""
import hashlib


def make_leaves(n: int, prefix: str = "leaf") -> list[bytes]:
    """SHA-256 hashes of f"{prefix}{i}" for i in range(n)."""
    return [hashlib.sha256(f"{prefix}{i}".encode()).digest() for i in range(n)]


def make_tx_hashes(n: int) -> list[bytes]:
    """SHA-256 hashes of b"tx1" .. b"tx{n}"."""
    return [hashlib.sha256(f"tx{i}".encode()).digest() for i in range(1, n + 1)]


def flip_byte(data: bytes, position: int = 0) -> bytes:
    """Return a copy of data with one byte inverted."""
    mutated = bytearray(data)
    mutated[position] ^= 0xFF
    return bytes(mutated)
