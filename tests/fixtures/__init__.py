"""
Test fixtures package for sortedmerkle tests.

- common.py: leaf factories and tampering helpers

Usage:
    from fixtures import make_leaves

    def test_something():
        leaves = make_leaves(5)
"""

from .common import (
    make_leaves,
    make_tx_hashes,
    flip_byte,
)

__all__ = [
    "make_leaves",
    "make_tx_hashes",
    "flip_byte",
]
