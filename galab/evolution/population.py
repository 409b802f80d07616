"""
Population management for binary-encoded evolutionary search.

Handles:
- Initial population creation
- Batch evaluation
- Set-equality checks between populations (CHC convergence)
"""

from collections import Counter
from typing import List, Sequence

import numpy as np

from .individual import Individual


def create_initial_population(
    population_size: int,
    bits_per_variable: int,
    num_variables: int,
    function,
    rng: np.random.Generator,
) -> List[Individual]:
    """
    Create a population of uniformly random individuals.

    Args:
        population_size: Number of individuals
        bits_per_variable: Width of each encoded variable
        num_variables: Variables per chromosome
        function: Objective function
        rng: Random stream shared by the run

    Returns:
        List of unevaluated individuals
    """
    return [
        Individual.random(bits_per_variable, num_variables, function, rng)
        for _ in range(population_size)
    ]


def evaluate_population(
    population: Sequence[Individual],
    only_stale: bool = False,
) -> int:
    """
    Evaluate individuals in order.

    Args:
        population: Individuals to evaluate
        only_stale: Skip individuals whose cache is still valid

    Returns:
        Number of evaluations performed
    """
    evaluations = 0
    for individual in population:
        if only_stale and individual.is_evaluated():
            continue
        individual.evaluate()
        evaluations += 1
    return evaluations


def is_permutation(
    population_a: Sequence[Individual],
    population_b: Sequence[Individual],
) -> bool:
    """True if both populations hold the same chromosomes with the same multiplicity."""
    if len(population_a) != len(population_b):
        return False
    return (
        Counter(ind.chromosome.key() for ind in population_a)
        == Counter(ind.chromosome.key() for ind in population_b)
    )
