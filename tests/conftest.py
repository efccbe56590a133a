"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import pytest

# Add the repository root to the path so the package imports without installation
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from pointproofs.groups import setup  # noqa: E402


@pytest.fixture(scope="session")
def pairing_params():
    """Initialize pairing group."""
    return setup('MNT224')


@pytest.fixture(scope="session")
def group(pairing_params):
    return pairing_params['group']


@pytest.fixture
def rng():
    """Seeded randomness source, fresh per test."""
    return random.Random(0x5EED)
