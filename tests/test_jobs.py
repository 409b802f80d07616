"""
Tests for the batch harness and parameter search.

Run with: python -m pytest tests/test_jobs.py -v
"""

import pytest

from galab.core.jobs import (
    ALGORITHMS,
    CROSSOVER_RANGE,
    GENERATION_RANGE,
    MUTATION_RANGE,
    POPULATION_RANGE,
    get_algorithm,
    random_parameter_search,
    run_trials,
)
from galab.errors import ConfigurationError
from galab.evolution.algorithm import AlgorithmConfig
from galab.evolution.chc import CHC
from galab.evolution.simple_ga import SimpleGA
from galab.functions import Sphere


@pytest.fixture
def small_config():
    return AlgorithmConfig(
        population_size=8, num_generations=5,
        crossover_prob=0.7, mutation_prob=0.02,
        bits_per_variable=8, num_variables=3,
    )


class TestRegistry:

    def test_algorithms(self):
        assert ALGORITHMS == {'simple_ga': SimpleGA, 'chc': CHC}
        assert get_algorithm('chc') is CHC
        assert get_algorithm(SimpleGA) is SimpleGA

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError):
            get_algorithm('tabu')


class TestRunTrials:
    """Tests for replicate runs."""

    @pytest.mark.parametrize('algorithm', ['simple_ga', 'chc'])
    def test_inline_runs(self, algorithm, small_config):
        histories = run_trials(algorithm, small_config, Sphere(), n_runs=3, n_workers=1, seed=0)
        assert [h.run_index for h in histories] == [0, 1, 2]
        for h in histories:
            assert h.algorithm == algorithm
            assert h.function == 'dejong1'
            assert h.config == small_config.to_dict()
            assert len(h.generations) == 5

    def test_seed_reproducibility(self, small_config):
        a = run_trials('simple_ga', small_config, Sphere(), 3, n_workers=1, seed=17)
        b = run_trials('simple_ga', small_config, Sphere(), 3, n_workers=1, seed=17)
        assert [h.generations for h in a] == [h.generations for h in b]

    def test_runs_use_independent_streams(self, small_config):
        histories = run_trials('simple_ga', small_config, Sphere(), 2, n_workers=1, seed=17)
        assert histories[0].generations != histories[1].generations

    def test_pool_matches_inline(self, small_config):
        inline = run_trials('chc', small_config, Sphere(), 4, n_workers=1, seed=5)
        pooled = run_trials('chc', small_config, Sphere(), 4, n_workers=2, seed=5)
        assert [h.run_index for h in pooled] == [0, 1, 2, 3]
        assert [h.generations for h in pooled] == [h.generations for h in inline]

    def test_progress_callback(self, small_config):
        calls = []
        run_trials('simple_ga', small_config, Sphere(), 3, n_workers=1, seed=0,
                   progress_callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_invalid_run_count(self, small_config):
        with pytest.raises(ConfigurationError):
            run_trials('simple_ga', small_config, Sphere(), 0)


class TestParameterSearch:
    """Tests for random hyperparameter search."""

    def test_first_run_uses_given_parameters(self, identity):
        config = AlgorithmConfig(6, 4, 0.7, 0.001, 8, 1)
        results = random_parameter_search(config, identity, n_runs=4, n_workers=1, seed=1)

        assert [r.run_index for r in results] == [0, 1, 2, 3]
        first = results[0]
        assert (first.population_size, first.num_generations) == (6, 4)
        assert (first.crossover_prob, first.mutation_prob) == (0.7, 0.001)

    def test_sampled_parameters_in_range(self, identity):
        config = AlgorithmConfig(6, 4, 0.7, 0.001, 8, 1)
        results = random_parameter_search(config, identity, n_runs=4, n_workers=1, seed=2)
        for r in results[1:]:
            assert POPULATION_RANGE[0] <= r.population_size <= POPULATION_RANGE[1]
            assert GENERATION_RANGE[0] <= r.num_generations <= GENERATION_RANGE[1]
            assert CROSSOVER_RANGE[0] <= r.crossover_prob < CROSSOVER_RANGE[1]
            assert MUTATION_RANGE[0] <= r.mutation_prob < MUTATION_RANGE[1]

    def test_results_describe_final_generation(self, identity):
        config = AlgorithmConfig(6, 4, 0.7, 0.001, 8, 1)
        for r in random_parameter_search(config, identity, n_runs=2, n_workers=1, seed=3):
            assert len(r.best_solution) == 1
            assert 0.0 <= r.best_solution[0] <= 15.0
            assert r.best_fitness == pytest.approx(15.0 - r.best_solution[0])

    def test_search_is_reproducible(self, identity):
        config = AlgorithmConfig(6, 4, 0.7, 0.001, 8, 1)
        a = random_parameter_search(config, identity, n_runs=3, n_workers=1, seed=8)
        b = random_parameter_search(config, identity, n_runs=3, n_workers=1, seed=8)
        assert a == b
