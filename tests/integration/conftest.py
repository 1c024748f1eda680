"""
Shared fixtures for integration tests.
"""

import pytest
from itertools import count

from evoprop.genotype import NeuralChromosome


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset the chromosome ID generator so IDs start from 0 in each test."""
    NeuralChromosome._id_generator = count(0)
    yield
    NeuralChromosome._id_generator = count(0)


@pytest.fixture
def seeds():
    """Seeds tried in turn by tests whose outcome depends on the initial weights."""
    return list(range(10))
