"""
Pytest configuration and shared fixtures for the Merkle engine tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used leaf sets and trees
3. Isolates tests from MERKLE_* environment variables and config files
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from core.merkle import MerkleTree  # noqa: E402


_MERKLE_ENV_VARS = (
    "MERKLE_HASH_ALGORITHM",
    "MERKLE_LEAF_ENCODING",
    "MERKLE_LOG_LEVEL",
    "MERKLE_LOG_FILE",
    "MERKLE_API_HOST",
    "MERKLE_API_PORT",
)


# =============================================================================
# Leaf factories
# =============================================================================

def make_leaves(n: int) -> list[bytes]:
    """Leaves "1".."n" as UTF-8 bytes."""
    return [str(i).encode("utf-8") for i in range(1, n + 1)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_merkle_env(monkeypatch):
    """Strip MERKLE_* variables so a developer's shell cannot leak into tests."""
    for name in _MERKLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def leaves_1_to_8():
    """Leaves "1".."8" (even count, no padding)."""
    return make_leaves(8)


@pytest.fixture
def leaves_1_to_7():
    """Leaves "1".."7" (odd count, last leaf duplicated)."""
    return make_leaves(7)


@pytest.fixture
def tree_1_to_8(leaves_1_to_8):
    """A sha256 MerkleTree built over "1".."8"."""
    tree = MerkleTree()
    tree.build_tree(leaves_1_to_8)
    return tree


@pytest.fixture
def tree_1_to_7(leaves_1_to_7):
    """A sha256 MerkleTree built over "1".."7"."""
    tree = MerkleTree()
    tree.build_tree(leaves_1_to_7)
    return tree


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
