"""
Binary-encoded evolutionary search.

Provides:
- Bitstring: fixed-width encoding of bounded real vectors
- Individual: a bitstring with a cached fitness
- SimpleGA and CHC generational algorithms
- GenerationPerformance records and RunHistory persistence
"""

from .bitstring import Bitstring, MAX_BITS_PER_GROUP, from_string
from .individual import Individual, FitnessResult
from .operators import (
    proportional_selection,
    select_random_pairs,
    select_survivors,
    one_point_crossover,
    half_uniform_crossover,
    incest_preventing_crossover,
    bit_flip_mutation,
    flip_random_bits,
)
from .population import (
    create_initial_population,
    evaluate_population,
    is_permutation,
)
from .algorithm import Algorithm, AlgorithmConfig
from .simple_ga import SimpleGA
from .chc import CHC
from .history import GenerationPerformance, RunHistory, summarize_population

__all__ = [
    # Encoding
    'Bitstring',
    'MAX_BITS_PER_GROUP',
    'from_string',
    'Individual',
    'FitnessResult',
    # Operators
    'proportional_selection',
    'select_random_pairs',
    'select_survivors',
    'one_point_crossover',
    'half_uniform_crossover',
    'incest_preventing_crossover',
    'bit_flip_mutation',
    'flip_random_bits',
    # Population
    'create_initial_population',
    'evaluate_population',
    'is_permutation',
    # Algorithms
    'Algorithm',
    'AlgorithmConfig',
    'SimpleGA',
    'CHC',
    # Records
    'GenerationPerformance',
    'RunHistory',
    'summarize_population',
]
