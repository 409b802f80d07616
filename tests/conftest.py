"""Shared fixtures for the galab test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from galab.evolution.bitstring import from_string
from galab.evolution.individual import Individual


class IdentityFunction:
    """f(x) = x_0 on [0, x_max]; with 4 bits and x_max=15 bits decode to integers."""

    name = 'identity'

    def __init__(self, x_max: float = 15.0):
        self._x_max = x_max

    def eval(self, x, rng=None):
        return float(x[0])

    def x_range(self):
        return (0.0, self._x_max)

    def min_x(self):
        return [0.0]

    def min_y(self):
        return 0.0

    def max_y(self):
        return self._x_max

    def num_variables(self):
        return 1


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def identity():
    return IdentityFunction()


@pytest.fixture
def make_individual(identity):
    """Factory: Individual from a '0'/'1' string over the identity function."""
    def _make(bits: str, evaluate: bool = True) -> Individual:
        x_min, x_max = identity.x_range()
        individual = Individual(from_string(bits, x_min, x_max, 1), identity)
        if evaluate:
            individual.evaluate()
        return individual
    return _make


@pytest.fixture
def make_valued(make_individual):
    """Factory: evaluated 4-bit Individual whose objective value is `value` (0..15)."""
    def _make(value: int) -> Individual:
        return make_individual(format(value, '04b'))
    return _make
