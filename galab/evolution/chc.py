"""
CHC: Cross-generational elitist selection, Heterogeneous recombination
and Cataclysmic mutation (Eshelman, 1991).

Per generation:
1. Shuffle the population into random mating pairs
2. Recombine pairs with HUX only if half their Hamming distance exceeds
   the incest threshold d
3. Evaluate the children
4. Keep the best P of parents + children
5. If nothing changed, decrement d
6. If d < 0, restart from mutated copies of the best individual

There is no per-generation mutation step; mutation_prob only sets the
restart divergence rate and the post-restart threshold.
"""

import math
from typing import List

from .algorithm import Algorithm
from .history import GenerationPerformance
from .individual import Individual
from .operators import (
    flip_random_bits,
    incest_preventing_crossover,
    select_random_pairs,
    select_survivors,
)
from .population import evaluate_population, is_permutation


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class CHC(Algorithm):
    """
    Elitist, incest-avoiding, restart-on-convergence GA.

    Attributes:
        threshold: Current incest threshold d
        restarts: Number of cataclysmic restarts so far
    """

    name = 'chc'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.threshold = self.initial_threshold()
        self.restarts = 0

    def initial_threshold(self) -> float:
        """L / 4, a quarter of the chromosome length."""
        return self.config.chromosome_length / 4.0

    def restart_threshold(self) -> float:
        """Threshold after a restart: r * (1 - r) * P."""
        rate = self.config.mutation_prob
        return rate * (1.0 - rate) * self.config.population_size

    def initialize_population(self) -> None:
        self.population = self._random_population()
        self.total_evaluations = evaluate_population(self.population)
        self.threshold = self.initial_threshold()
        self.generation = 0
        self.restarts = 0

    def run_generation(self) -> GenerationPerformance:
        mating_pool = select_random_pairs(self.population, self.rng)
        children = incest_preventing_crossover(mating_pool, self.threshold, self.rng)
        self.total_evaluations += evaluate_population(children)

        survivors = select_survivors(mating_pool, children, self.config.population_size)
        if is_permutation(survivors, self.population):
            self.threshold -= 1.0
        self.population = survivors

        if self.threshold < 0:
            self.population = self.diverge(self.population)
            self.threshold = self.restart_threshold()
            self.restarts += 1

        record = self.summarize()
        self.generation += 1
        return record

    def diverge(self, population: List[Individual]) -> List[Individual]:
        """
        Cataclysmic restart.

        Fills the population with copies of the best individual. Every copy
        but the first gets round(mutation_prob * L) distinct random bits
        flipped and is re-evaluated.
        """
        best = max(population, key=lambda ind: ind.fitness)
        n_flips = _round_half_up(self.config.mutation_prob * len(best))

        new_population = [best.copy() for _ in range(self.config.population_size)]
        for individual in new_population[1:]:
            flip_random_bits(individual, n_flips, self.rng)
        self.total_evaluations += evaluate_population(new_population, only_stale=True)
        return new_population
