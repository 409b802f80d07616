"""
Batch execution of independent GA runs.

Uses Python multiprocessing to run replicate trials in parallel. Each run
owns its algorithm instance, its population and a random stream spawned
from one SeedSequence, so a batch is reproducible under a fixed seed
regardless of the number of workers.
"""

from dataclasses import dataclass, field, replace
from multiprocessing import Pool, cpu_count
from typing import Callable, Dict, List, Optional, Tuple, Type, Union
import numpy as np

from ..errors import ConfigurationError
from ..evolution.algorithm import Algorithm, AlgorithmConfig
from ..evolution.chc import CHC
from ..evolution.history import RunHistory, generate_run_id
from ..evolution.simple_ga import SimpleGA


ALGORITHMS: Dict[str, Type[Algorithm]] = {
    'simple_ga': SimpleGA,
    'chc': CHC,
}

# Hyperparameter ranges for random search
POPULATION_RANGE = (10, 200)
GENERATION_RANGE = (10, 200)
CROSSOVER_RANGE = (0.0, 1.0)
MUTATION_RANGE = (0.0, 0.1)

BatchProgress = Callable[[int, int], None]


@dataclass
class ParameterSearchResult:
    """Outcome of one parameter-search run."""
    run_index: int
    best_fitness: float
    best_solution: List[float]
    population_size: int
    num_generations: int
    crossover_prob: float
    mutation_prob: float
    run_id: Optional[str] = field(default=None, compare=False)


def get_algorithm(algorithm: Union[str, Type[Algorithm]]) -> Type[Algorithm]:
    """Resolve an algorithm key or class."""
    if isinstance(algorithm, str):
        if algorithm not in ALGORITHMS:
            raise ConfigurationError(
                f"Unknown algorithm: {algorithm}. Available: {list(ALGORITHMS.keys())}"
            )
        return ALGORITHMS[algorithm]
    return algorithm


def run_trial(args: Tuple) -> RunHistory:
    """
    Worker function for a single run.

    This function runs in a separate process. All inputs must be picklable.

    Args:
        args: Tuple of (algorithm_class, config, function, run_index, seed_sequence)

    Returns:
        RunHistory of the completed run
    """
    algorithm_cls, config, function, run_index, seed_sequence = args

    algorithm = algorithm_cls(config, function, rng=np.random.default_rng(seed_sequence))
    performance = algorithm.run()

    return RunHistory(
        run_id=generate_run_id(algorithm_cls.name),
        run_index=run_index,
        algorithm=algorithm_cls.name,
        function=getattr(function, 'name', type(function).__name__),
        config=config.to_dict(),
        generations=performance,
    )


def _execute(
    tasks: List[Tuple],
    n_workers: Optional[int],
    progress_callback: Optional[BatchProgress],
) -> List[RunHistory]:
    """Run tasks inline or in a pool; results come back in task order."""
    total = len(tasks)
    n_workers = n_workers or max(1, cpu_count() - 1)

    results = []
    if n_workers == 1 or total <= 1:
        for task in tasks:
            results.append(run_trial(task))
            if progress_callback:
                progress_callback(len(results), total)
        return results

    with Pool(min(n_workers, total)) as pool:
        for history in pool.imap(run_trial, tasks):
            results.append(history)
            if progress_callback:
                progress_callback(len(results), total)
    return results


def run_trials(
    algorithm: Union[str, Type[Algorithm]],
    config: AlgorithmConfig,
    function,
    n_runs: int,
    n_workers: Optional[int] = None,
    seed: Optional[int] = None,
    progress_callback: Optional[BatchProgress] = None,
) -> List[RunHistory]:
    """
    Run n_runs independent replicates of one configuration.

    Args:
        algorithm: 'simple_ga', 'chc' or an Algorithm subclass
        config: Configuration shared by every run
        function: Objective function instance (read-only, shared)
        n_runs: Number of replicates
        n_workers: Worker processes (default: CPU count - 1; 1 runs inline)
        seed: Root seed; None draws fresh entropy
        progress_callback: Optional callback(completed, total)

    Returns:
        One RunHistory per run, ordered by run index
    """
    if n_runs <= 0:
        raise ConfigurationError(f"n_runs must be positive, got {n_runs}")

    algorithm_cls = get_algorithm(algorithm)
    seeds = np.random.SeedSequence(seed).spawn(n_runs)
    tasks = [
        (algorithm_cls, config, function, run_index, seeds[run_index])
        for run_index in range(n_runs)
    ]
    return _execute(tasks, n_workers, progress_callback)


def sample_config(base: AlgorithmConfig, rng: np.random.Generator) -> AlgorithmConfig:
    """Draw random hyperparameters, keeping the encoding of `base`."""
    return replace(
        base,
        population_size=int(rng.integers(POPULATION_RANGE[0], POPULATION_RANGE[1] + 1)),
        num_generations=int(rng.integers(GENERATION_RANGE[0], GENERATION_RANGE[1] + 1)),
        crossover_prob=float(rng.uniform(*CROSSOVER_RANGE)),
        mutation_prob=float(rng.uniform(*MUTATION_RANGE)),
    )


def random_parameter_search(
    config: AlgorithmConfig,
    function,
    n_runs: int,
    algorithm: Union[str, Type[Algorithm]] = 'simple_ga',
    n_workers: Optional[int] = None,
    seed: Optional[int] = None,
    progress_callback: Optional[BatchProgress] = None,
) -> List[ParameterSearchResult]:
    """
    Random search over population size, generations and operator rates.

    Run 0 uses `config` as given. Every other run draws population size
    and generation count uniformly from {10..200}, crossover_prob from
    [0, 1) and mutation_prob from [0, 0.1).

    Returns:
        One ParameterSearchResult per run, ordered by run index
    """
    if n_runs <= 0:
        raise ConfigurationError(f"n_runs must be positive, got {n_runs}")

    algorithm_cls = get_algorithm(algorithm)
    param_seq, run_seq = np.random.SeedSequence(seed).spawn(2)
    param_rng = np.random.default_rng(param_seq)
    seeds = run_seq.spawn(n_runs)

    configs = [config] + [sample_config(config, param_rng) for _ in range(n_runs - 1)]
    tasks = [
        (algorithm_cls, configs[i], function, i, seeds[i])
        for i in range(n_runs)
    ]
    histories = _execute(tasks, n_workers, progress_callback)

    results = []
    for run_config, history in zip(configs, histories):
        final = history.final
        results.append(ParameterSearchResult(
            run_index=history.run_index,
            best_fitness=final.best_fitness,
            best_solution=list(final.best_solution),
            population_size=run_config.population_size,
            num_generations=run_config.num_generations,
            crossover_prob=run_config.crossover_prob,
            mutation_prob=run_config.mutation_prob,
            run_id=history.run_id,
        ))
    return results
