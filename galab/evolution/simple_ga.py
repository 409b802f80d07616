"""
Simple generational genetic algorithm.

Per generation:
1. Evaluate every individual
2. Record statistics
3. Select parent pairs by roulette wheel
4. One-point crossover with probability crossover_prob
5. Independent bit-flip mutation with probability mutation_prob
6. Replace the whole population (no elitism)
"""

from typing import List

from .algorithm import Algorithm
from .history import GenerationPerformance
from .individual import Individual
from .operators import (
    bit_flip_mutation,
    one_point_crossover,
    proportional_selection,
)
from .population import evaluate_population


class SimpleGA(Algorithm):
    """
    Fitness-proportional generational GA.

    With an odd population size the last slot is filled by one extra
    roulette-selected parent, copied and mutated without crossover.
    """

    name = 'simple_ga'

    def initialize_population(self) -> None:
        self.population = self._random_population()
        self.generation = 0
        self.total_evaluations = 0

    def run_generation(self) -> GenerationPerformance:
        self.total_evaluations += evaluate_population(self.population)
        record = self.summarize()

        self.population = self.breed([ind.fitness for ind in self.population])
        self.generation += 1
        return record

    def breed(self, fitness: List[float]) -> List[Individual]:
        """Build the next population from the current evaluated one."""
        size = self.config.population_size
        offspring: List[Individual] = []

        for _ in range(size // 2):
            i, j = proportional_selection(fitness, self.rng)
            parent1, parent2 = self.population[i], self.population[j]

            if self.rng.random() < self.config.crossover_prob:
                child1, child2 = one_point_crossover(parent1, parent2, self.rng)
            else:
                child1, child2 = parent1.copy(), parent2.copy()

            bit_flip_mutation(child1, self.config.mutation_prob, self.rng)
            bit_flip_mutation(child2, self.config.mutation_prob, self.rng)
            offspring.extend([child1, child2])

        if size % 2 == 1:
            i, _ = proportional_selection(fitness, self.rng)
            child = self.population[i].copy()
            bit_flip_mutation(child, self.config.mutation_prob, self.rng)
            offspring.append(child)

        return offspring
