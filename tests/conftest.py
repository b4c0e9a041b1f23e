"""
Pytest configuration and shared fixtures for sortedmerkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_leaves = _common.make_leaves
make_tx_hashes = _common.make_tx_hashes
flip_byte = _common.flip_byte

from sortedmerkle.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

_ENV_VARS = (
    "SORTEDMERKLE_SORT_LEAVES",
    "SORTEDMERKLE_ORDERING",
    "SORTEDMERKLE_HASH_ALGORITHM",
    "SORTEDMERKLE_STRICT_LEAF_SIZE",
    "SORTEDMERKLE_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run every test with a clean environment and default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def tx_hashes():
    """SHA-256 of b"tx1" .. b"tx5"."""
    return make_tx_hashes(5)


@pytest.fixture
def seven_leaves():
    """Seven distinct leaf hashes (odd at two levels)."""
    return make_leaves(7)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
