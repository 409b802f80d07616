"""
GA Lab - binary-encoded genetic algorithms on the De Jong test suite.

A research engine comparing a simple generational GA with CHC on
five classic benchmark functions.
"""

from .errors import (
    ConfigurationError,
    EvaluationStateError,
    FitnessRangeError,
    ReportError,
)
from .evolution import (
    Bitstring,
    Individual,
    Algorithm,
    AlgorithmConfig,
    SimpleGA,
    CHC,
    GenerationPerformance,
    RunHistory,
)
from .functions import FUNCTIONS, get_function

__version__ = '0.1.0'

__all__ = [
    'ConfigurationError',
    'EvaluationStateError',
    'FitnessRangeError',
    'ReportError',
    'Bitstring',
    'Individual',
    'Algorithm',
    'AlgorithmConfig',
    'SimpleGA',
    'CHC',
    'GenerationPerformance',
    'RunHistory',
    'FUNCTIONS',
    'get_function',
]
