"""Shared fixtures for the tree transfer test-suite.

Provides the seed hierarchy used throughout the tests, a compact node
builder, and isolation of the configuration singleton from the user's
home directory.
"""

import os
import sys

import pytest

# Ensure project root is importable when running pytest from repository root
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from tree_transfer.config import ConfigManager
from tree_transfer.core.models import ROOT_ID, TreeNode


def n(node_id, *children):
    """Compact builder: ``n("a", n("b"), n("c"))``."""
    return TreeNode(node_id, list(children))


SEED_IDS = [
    "node1", "node1-1", "node1-2", "node1-3", "node1-3-1", "node1-3-2", "node1-3-3",
    "node2", "node2-1", "node2-1-1", "node2-1-2", "node2-2",
]


def build_seed():
    return n(
        ROOT_ID,
        n("node1",
          n("node1-1"),
          n("node1-2"),
          n("node1-3", n("node1-3-1"), n("node1-3-2"), n("node1-3-3"))),
        n("node2",
          n("node2-1", n("node2-1-1"), n("node2-1-2")),
          n("node2-2")),
    )


@pytest.fixture
def seed_tree():
    return build_seed()


@pytest.fixture
def empty_root():
    return n(ROOT_ID)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Fresh ConfigManager per test, reading user overrides from a temp dir."""
    config_dir = tmp_path / "user_config"
    monkeypatch.setenv("TREE_TRANSFER_CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    return config_dir


@pytest.fixture
def node():
    """The compact node builder, for tests that assemble their own trees."""
    return n
