"""
Experiment presets for the De Jong study.

Each preset is a list of experiments, one per test function, with the
hyperparameters and replicate counts used in the study.
"""

from dataclasses import dataclass
from typing import Dict, List

from .errors import ConfigurationError
from .evolution.algorithm import AlgorithmConfig


@dataclass
class Experiment:
    """One (algorithm, function, configuration) batch and its report file."""
    algorithm: str
    function: str
    config: AlgorithmConfig
    n_runs: int
    filename: str
    kind: str = 'performance'  # 'performance' or 'parameter_search'


# (population, generations, crossover, mutation, variables) per function
GA_PERFORMANCE_PARAMS = {
    'dejong1': (180, 130, 0.66, 0.0064, 3),
    'dejong2': (130, 170, 0.6, 0.001, 2),
    'dejong3': (140, 140, 0.1085, 0.0025, 5),
    'dejong4': (180, 100, 0.68, 0.058, 10),
    'dejong5': (60, 30, 0.013, 0.0028, 2),
}

NUM_VARIABLES = {name: params[4] for name, params in GA_PERFORMANCE_PARAMS.items()}

BITS_PER_VARIABLE = 32


def ga_performance() -> List[Experiment]:
    return [
        Experiment(
            algorithm='simple_ga',
            function=name,
            config=AlgorithmConfig(pop, gens, cp, mp, BITS_PER_VARIABLE, n_vars),
            n_runs=30,
            filename=f'ga_performance_{name}.csv',
        )
        for name, (pop, gens, cp, mp, n_vars) in GA_PERFORMANCE_PARAMS.items()
    ]


def chc_performance() -> List[Experiment]:
    return [
        Experiment(
            algorithm='chc',
            function=name,
            config=AlgorithmConfig(50, 75, 0.95, 0.05, BITS_PER_VARIABLE, n_vars),
            n_runs=30,
            filename=f'chc_performance_{name}.csv',
        )
        for name, n_vars in NUM_VARIABLES.items()
    ]


def parameter_search() -> List[Experiment]:
    return [
        Experiment(
            algorithm='simple_ga',
            function=name,
            config=AlgorithmConfig(50, 100, 0.7, 0.001, BITS_PER_VARIABLE, n_vars),
            n_runs=1000,
            filename=f'{name}.csv',
            kind='parameter_search',
        )
        for name, n_vars in NUM_VARIABLES.items()
    ]


PRESETS = {
    'ga_performance': ga_performance,
    'chc_performance': chc_performance,
    'parameter_search': parameter_search,
}


def get_preset(name: str) -> List[Experiment]:
    """Get the experiments of a preset by name."""
    if name not in PRESETS:
        raise ConfigurationError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()
