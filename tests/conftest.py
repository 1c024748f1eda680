"""Pytest configuration and shared fixtures."""

import pytest
import sys
import numpy as np
from pathlib import Path

# Add the project root (for 'examples') and 'src' to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))
sys.path.insert(0, str(root_dir / 'src'))


@pytest.fixture
def rng():
    """Seeded random generator, fresh for every test."""
    return np.random.default_rng(42)


@pytest.fixture
def xor_inputs():
    """The four XOR input patterns, shape (4, 2)."""
    return np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])


@pytest.fixture
def xor_ideals():
    """The four XOR ideal outputs, shape (4, 1)."""
    return np.array([[0.0], [1.0], [1.0], [0.0]])


@pytest.fixture
def xor_network(rng):
    """A seeded 2-3-1 sigmoid network."""
    from evoprop.phenotype import Network
    return Network.from_sizes([2, 3, 1], rng=rng)
