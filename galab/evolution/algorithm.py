"""
Shared configuration and run contract for the generational algorithms.

Every algorithm is configured once and exposes a single `run()` that
returns exactly `num_generations` GenerationPerformance records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from ..errors import ConfigurationError
from .bitstring import MAX_BITS_PER_GROUP
from .history import GenerationPerformance, summarize_population
from .individual import Individual
from .population import create_initial_population


ProgressCallback = Callable[[int, int, GenerationPerformance], None]


@dataclass
class AlgorithmConfig:
    """Configuration for one evolutionary run."""
    # Population parameters
    population_size: int = 50
    num_generations: int = 100

    # Operator rates
    crossover_prob: float = 0.7
    mutation_prob: float = 0.001

    # Encoding
    bits_per_variable: int = 32
    num_variables: int = 3

    def __post_init__(self):
        if self.population_size <= 0:
            raise ConfigurationError(f"population_size must be positive, got {self.population_size}")
        if self.num_generations <= 0:
            raise ConfigurationError(f"num_generations must be positive, got {self.num_generations}")
        if not 0.0 <= self.crossover_prob <= 1.0:
            raise ConfigurationError(f"crossover_prob {self.crossover_prob} out of range [0, 1]")
        if not 0.0 <= self.mutation_prob <= 1.0:
            raise ConfigurationError(f"mutation_prob {self.mutation_prob} out of range [0, 1]")
        if not 0 < self.bits_per_variable <= MAX_BITS_PER_GROUP:
            raise ConfigurationError(
                f"bits_per_variable {self.bits_per_variable} out of range [1, {MAX_BITS_PER_GROUP}]"
            )
        if self.num_variables <= 0:
            raise ConfigurationError(f"num_variables must be positive, got {self.num_variables}")

    @property
    def chromosome_length(self) -> int:
        return self.bits_per_variable * self.num_variables

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AlgorithmConfig':
        return cls(**data)


class Algorithm(ABC):
    """
    Base class for generational algorithms.

    Subclasses implement `initialize_population()` and `run_generation()`;
    `run()` drives them and collects one record per generation.
    """

    name = 'algorithm'

    def __init__(
        self,
        config: AlgorithmConfig,
        function,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            config: Algorithm configuration
            function: Objective function; its variable count must match the config
            rng: Random stream owned by this run
            seed: Seed for a fresh stream when rng is not given
        """
        if function.num_variables() != config.num_variables:
            raise ConfigurationError(
                f"Function takes {function.num_variables()} variables, "
                f"config specifies {config.num_variables}"
            )
        self.config = config
        self.function = function
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.population: List[Individual] = []
        self.generation = 0
        self.total_evaluations = 0

    def _random_population(self) -> List[Individual]:
        return create_initial_population(
            population_size=self.config.population_size,
            bits_per_variable=self.config.bits_per_variable,
            num_variables=self.config.num_variables,
            function=self.function,
            rng=self.rng,
        )

    def summarize(self) -> GenerationPerformance:
        """Statistics of the current (evaluated) population."""
        return summarize_population(self.generation, self.population)

    @abstractmethod
    def initialize_population(self) -> None:
        """Create generation zero."""

    @abstractmethod
    def run_generation(self) -> GenerationPerformance:
        """Advance one generation and return its statistics."""

    def run(self, progress_callback: Optional[ProgressCallback] = None) -> List[GenerationPerformance]:
        """
        Run the full evolutionary loop.

        Args:
            progress_callback: Optional callback(generation, total, performance)

        Returns:
            Exactly num_generations records, in generation order
        """
        self.initialize_population()
        total = self.config.num_generations

        performance = []
        for _ in range(total):
            record = self.run_generation()
            performance.append(record)
            if progress_callback:
                progress_callback(record.generation, total, record)
        return performance
