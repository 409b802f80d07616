"""
Tests for CHC: incest threshold, survivor elitism and cataclysmic restart.

Run with: python -m pytest tests/test_chc.py -v
"""

import pytest

from galab.evolution.algorithm import AlgorithmConfig
from galab.evolution.chc import CHC
from galab.evolution.population import is_permutation
from galab.functions import Rosenbrock, Sphere, Step


@pytest.fixture
def sphere_chc():
    config = AlgorithmConfig(
        population_size=10, num_generations=20,
        crossover_prob=0.95, mutation_prob=0.05,
        bits_per_variable=32, num_variables=3,
    )
    return CHC(config, Sphere(), seed=42)


def converge(chc):
    """Replace the population with evaluated copies of its first member."""
    chc.initialize_population()
    template = chc.population[0]
    chc.population = [template.copy() for _ in range(chc.config.population_size)]
    return template


class TestThreshold:
    """Tests for the incest threshold d."""

    def test_initial_threshold_is_quarter_length(self, sphere_chc):
        sphere_chc.initialize_population()
        assert sphere_chc.threshold == pytest.approx(96 / 4)
        assert all(ind.is_evaluated() for ind in sphere_chc.population)
        assert sphere_chc.total_evaluations == 10

    def test_restart_threshold(self, sphere_chc):
        assert sphere_chc.restart_threshold() == pytest.approx(0.05 * 0.95 * 10)

    def test_unchanged_population_decrements(self, sphere_chc):
        converge(sphere_chc)
        sphere_chc.threshold = 10.0
        previous = list(sphere_chc.population)

        sphere_chc.run_generation()

        assert sphere_chc.threshold == pytest.approx(9.0)
        assert is_permutation(sphere_chc.population, previous)
        assert sphere_chc.restarts == 0

    def test_changed_population_keeps_threshold(self, identity, make_individual):
        config = AlgorithmConfig(2, 1, 0.95, 0.05, 4, 1)
        chc = CHC(config, identity, seed=0)
        # Complementary parents: HUX swaps 2 of 4 bits, so the children sum to
        # 15 and the fitter child (fitness >= 7.5) displaces 1111 (fitness 0).
        chc.population = [make_individual('0000'), make_individual('1111')]
        chc.threshold = 0.0
        before = list(chc.population)

        chc.run_generation()

        assert not is_permutation(chc.population, before)
        assert str(chc.population[0].chromosome) == '0000'
        assert str(chc.population[1].chromosome) not in ('0000', '1111')
        assert chc.threshold == pytest.approx(0.0)
        assert chc.restarts == 0


class TestRestart:
    """Tests for divergence when the threshold drops below zero."""

    def test_restart_triggers_below_zero(self, sphere_chc):
        template = converge(sphere_chc)
        sphere_chc.threshold = 0.5

        sphere_chc.run_generation()

        assert sphere_chc.restarts == 1
        assert sphere_chc.threshold == pytest.approx(sphere_chc.restart_threshold())

        population = sphere_chc.population
        assert len(population) == 10
        # Copy 0 is the untouched best individual.
        assert population[0].chromosome == template.chromosome
        # Every other copy differs in round(0.05 * 96) = 5 bits.
        for ind in population[1:]:
            assert ind.chromosome.hamming_distance(template.chromosome) == 5
            assert ind.is_evaluated()

    def test_diverge_keeps_best(self, sphere_chc):
        sphere_chc.initialize_population()
        best = max(sphere_chc.population, key=lambda ind: ind.fitness)

        population = sphere_chc.diverge(sphere_chc.population)

        assert population[0].chromosome == best.chromosome
        assert population[0].fitness == best.fitness
        assert population[0] is not best

    def test_flip_count_rounds_half_up(self, identity):
        # 0.125 * 4 bits = 0.5 flips, rounded up to 1
        config = AlgorithmConfig(4, 1, 0.95, 0.125, 4, 1)
        chc = CHC(config, identity, seed=0)
        template = converge(chc)
        population = chc.diverge(chc.population)
        for ind in population[1:]:
            assert ind.chromosome.hamming_distance(template.chromosome) == 1

    def test_restart_evaluations_counted(self, sphere_chc):
        converge(sphere_chc)
        sphere_chc.threshold = 0.5
        start = sphere_chc.total_evaluations
        sphere_chc.run_generation()
        # 10 children plus 9 mutated copies
        assert sphere_chc.total_evaluations - start == 19


class TestRun:
    """Tests for full CHC runs."""

    def test_exactly_num_generations_records(self, sphere_chc):
        records = sphere_chc.run()
        assert len(records) == 20
        assert [r.generation for r in records] == list(range(20))

    def test_best_fitness_never_decreases(self):
        config = AlgorithmConfig(16, 40, 0.95, 0.05, 16, 2)
        records = CHC(config, Rosenbrock(), seed=7).run()
        best = [r.best_fitness for r in records]
        assert all(b2 >= b1 for b1, b2 in zip(best, best[1:]))

    def test_restarts_happen_on_easy_problem(self):
        config = AlgorithmConfig(8, 200, 0.95, 0.05, 4, 5)
        chc = CHC(config, Step(), seed=3)
        chc.run()
        assert chc.restarts > 0

    @pytest.mark.parametrize('population_size', [1, 7])
    def test_odd_population_size(self, population_size):
        config = AlgorithmConfig(population_size, 10, 0.95, 0.05, 8, 3)
        chc = CHC(config, Sphere(), seed=1)
        records = chc.run()
        assert len(records) == 10
        assert len(chc.population) == population_size

    def test_same_seed_same_run(self):
        config = AlgorithmConfig(10, 10, 0.95, 0.05, 16, 3)
        assert CHC(config, Sphere(), seed=9).run() == CHC(config, Sphere(), seed=9).run()
