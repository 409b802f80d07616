"""Benchmark objective functions."""

from .base import ObjectiveFunction
from .dejong import (
    Sphere,
    Rosenbrock,
    Step,
    NoisyQuartic,
    ShekelFoxholes,
    FUNCTIONS,
    get_function,
)

__all__ = [
    'ObjectiveFunction',
    'Sphere',
    'Rosenbrock',
    'Step',
    'NoisyQuartic',
    'ShekelFoxholes',
    'FUNCTIONS',
    'get_function',
]
