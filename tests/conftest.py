"""Shared fixtures for pgreconcile tests."""

import sys
from pathlib import Path

import pytest

# allow "import main" and "import pgreconcile" without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pgreconcile.config import ReconcileConfig  # noqa: E402


@pytest.fixture
def config() -> ReconcileConfig:
    """Configuration with every optional statement family disabled."""
    return ReconcileConfig()


@pytest.fixture
def full_config() -> ReconcileConfig:
    """Configuration emitting comments, owners and privileges."""
    return ReconcileConfig(comment=True, owner=True, privileges=True)
