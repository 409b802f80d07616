"""
De Jong's five-function test suite.

Each function is a small stateless object implementing the
ObjectiveFunction protocol. max_y is the largest value the function can
take on its domain, so ``max_y - eval(x)`` is never negative.

Functions:
- dejong1: Sphere, sum x_i^2 (3 variables)
- dejong2: Rosenbrock's saddle (2 variables)
- dejong3: Step, 30 + sum floor(x_i) (5 variables)
- dejong4: Quartic with clipped Gaussian noise (10 variables)
- dejong5: Shekel's foxholes (2 variables)
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple, Type

import numpy as np

from ..errors import ConfigurationError


def _check_arity(x: Sequence[float], expected: int, name: str) -> None:
    if len(x) != expected:
        raise ConfigurationError(f"{name} takes {expected} variables, got {len(x)}")


class Sphere:
    """f(x) = sum x_i^2 on [-5.12, 5.12]^3. Minimum f(0, 0, 0) = 0."""

    name = 'dejong1'
    label = 'Sphere'

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        _check_arity(x, 3, self.label)
        return float(sum(v * v for v in x))

    def x_range(self) -> Tuple[float, float]:
        return (-5.12, 5.12)

    def min_x(self) -> List[float]:
        return [0.0, 0.0, 0.0]

    def min_y(self) -> float:
        return 0.0

    def max_y(self) -> float:
        # Reached at every corner of the cube.
        return 3 * (5.12 * 5.12)

    def num_variables(self) -> int:
        return 3


def _rosenbrock(x1: float, x2: float) -> float:
    t = x1 * x1 - x2
    u = 1 - x1
    return 100 * t * t + u * u


class Rosenbrock:
    """
    f(x) = 100 (x_1^2 - x_2)^2 + (1 - x_1)^2 on [-5.12, 5.12]^2.

    Minimum f(1, 1) = 0. The maximum sits at (-5.12, -5.12), about 98221.92.
    """

    name = 'dejong2'
    label = 'Rosenbrock'

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        _check_arity(x, 2, self.label)
        return float(_rosenbrock(x[0], x[1]))

    def x_range(self) -> Tuple[float, float]:
        return (-5.12, 5.12)

    def min_x(self) -> List[float]:
        return [1.0, 1.0]

    def min_y(self) -> float:
        return 0.0

    def max_y(self) -> float:
        return _rosenbrock(-5.12, -5.12)

    def num_variables(self) -> int:
        return 2


class Step:
    """f(x) = 30 + sum floor(x_i) on [-5.12, 5.12]^5. Minimum 0, maximum 55."""

    name = 'dejong3'
    label = 'Step'

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        _check_arity(x, 5, self.label)
        return 30.0 + sum(math.floor(v) for v in x)

    def x_range(self) -> Tuple[float, float]:
        return (-5.12, 5.12)

    def min_x(self) -> List[float]:
        return [-5.12] * 5

    def min_y(self) -> float:
        return 0.0

    def max_y(self) -> float:
        return 55.0

    def num_variables(self) -> int:
        return 5


# Noise is drawn from N(0, 1) and clipped to +/- this many sigmas.
QUARTIC_NOISE_LIMIT = 3.0


def _quartic(x: Sequence[float]) -> float:
    total = 3.0
    for i, v in enumerate(x):
        total += (i + 1) * v ** 4
    return total


class NoisyQuartic:
    """
    f(x) = 3 + sum i * x_i^4 + noise on [-1.28, 1.28]^10.

    The noise term is a standard normal draw clipped to [-3, 3], so repeated
    evaluations of the same point differ. The constant 3 keeps f >= 0.
    """

    name = 'dejong4'
    label = 'Noisy Quartic'

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        _check_arity(x, 10, self.label)
        if rng is None:
            rng = np.random.default_rng()
        noise = float(np.clip(rng.standard_normal(), -QUARTIC_NOISE_LIMIT, QUARTIC_NOISE_LIMIT))
        return _quartic(x) + noise

    def x_range(self) -> Tuple[float, float]:
        return (-1.28, 1.28)

    def min_x(self) -> List[float]:
        return [0.0] * 10

    def min_y(self) -> float:
        return 3.0 - QUARTIC_NOISE_LIMIT

    def max_y(self) -> float:
        return _quartic([1.28] * 10) + QUARTIC_NOISE_LIMIT

    def num_variables(self) -> int:
        return 10


_FOXHOLE_OFFSET = 0.002
_FOXHOLE_CENTERS = [-32.0, -16.0, 0.0, 16.0, 32.0]
# a[0][j] cycles through the centers, a[1][j] steps every five holes.
FOXHOLES = [
    (_FOXHOLE_CENTERS[j % 5], _FOXHOLE_CENTERS[j // 5])
    for j in range(25)
]


class ShekelFoxholes:
    """
    f(x) = 1 / (0.002 + sum_j 1 / (j + sum_i (x_i - a_ij)^6)) on [-65.536, 65.536]^2.

    Minimum near f(-32, -32) ~ 0.998. Bounded above by 1 / 0.002 = 500.
    """

    name = 'dejong5'
    label = "Shekel's Foxholes"

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        _check_arity(x, 2, self.label)
        total = _FOXHOLE_OFFSET
        for j, (a1, a2) in enumerate(FOXHOLES):
            total += 1.0 / ((j + 1) + (x[0] - a1) ** 6 + (x[1] - a2) ** 6)
        return 1.0 / total

    def x_range(self) -> Tuple[float, float]:
        return (-65.536, 65.536)

    def min_x(self) -> List[float]:
        return [-32.0, -32.0]

    def min_y(self) -> float:
        return self.eval(self.min_x())

    def max_y(self) -> float:
        return 1.0 / _FOXHOLE_OFFSET

    def num_variables(self) -> int:
        return 2


FUNCTIONS: Dict[str, Type] = {
    Sphere.name: Sphere,
    Rosenbrock.name: Rosenbrock,
    Step.name: Step,
    NoisyQuartic.name: NoisyQuartic,
    ShekelFoxholes.name: ShekelFoxholes,
}


def get_function(name: str):
    """
    Instantiate a benchmark function by key ('dejong1' ... 'dejong5').

    Raises:
        ConfigurationError: If the key is unknown
    """
    try:
        return FUNCTIONS[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown function: {name}. Choose from {sorted(FUNCTIONS)}"
        ) from None
