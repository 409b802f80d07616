"""
Individuals: a chromosome plus a lazily computed fitness cache.

The cache holds (fitness, objective_value) and is cleared by every
operation that changes the chromosome. Reading fitness from a stale
individual is a programming error and raises EvaluationStateError.
"""

from typing import List, NamedTuple, Optional

import numpy as np

from ..errors import ConfigurationError, EvaluationStateError, FitnessRangeError
from .bitstring import Bitstring


class FitnessResult(NamedTuple):
    """Cached evaluation of an individual."""
    fitness: float
    value: float


class Individual:
    """
    One candidate solution.

    Fitness is ``function.max_y() - function.eval(decoded)``, so fitness
    grows as the raw objective value shrinks.
    """

    __slots__ = ('chromosome', 'function', 'rng', '_cache')

    def __init__(
        self,
        chromosome: Bitstring,
        function,
        rng: Optional[np.random.Generator] = None,
    ):
        self.chromosome = chromosome
        self.function = function
        self.rng = rng
        self._cache: Optional[FitnessResult] = None

    @classmethod
    def random(
        cls,
        bits_per_variable: int,
        num_variables: int,
        function,
        rng: np.random.Generator,
    ) -> 'Individual':
        """
        Create an individual with uniformly random bits.

        Args:
            bits_per_variable: Width of each encoded variable
            num_variables: Number of variables, must match the function
            function: Objective function providing bounds and evaluation
            rng: Random stream used for the bits and for later evaluations
        """
        if bits_per_variable <= 0:
            raise ConfigurationError(f"bits_per_variable must be positive, got {bits_per_variable}")
        if num_variables <= 0:
            raise ConfigurationError(f"num_variables must be positive, got {num_variables}")
        if function.num_variables() != num_variables:
            raise ConfigurationError(
                f"Function takes {function.num_variables()} variables, "
                f"configured for {num_variables}"
            )
        x_min, x_max = function.x_range()
        chromosome = Bitstring.random(bits_per_variable, x_min, x_max, num_variables, rng)
        return cls(chromosome, function, rng)

    def copy(self) -> 'Individual':
        """Independent copy with the same bits and the same cached fitness."""
        clone = Individual(self.chromosome.copy(), self.function, self.rng)
        clone._cache = self._cache
        return clone

    # ------------------------------------------------------------------
    # Chromosome access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.chromosome)

    def get_value(self, index: int) -> int:
        return self.chromosome[index]

    def set_value(self, index: int, bit: int) -> None:
        """Set one bit. Invalidates the cached fitness."""
        self._cache = None
        self.chromosome.set(index, bit)

    def flip(self, index: int) -> None:
        """Toggle one bit. Invalidates the cached fitness."""
        self._cache = None
        self.chromosome.flip(index)

    def randomize(self) -> None:
        """Redraw every bit from the individual's stream. Invalidates the cached fitness."""
        if self.rng is None:
            raise EvaluationStateError("Individual has no random stream to randomize from")
        self._cache = None
        self.chromosome.randomize(self.rng)

    def decode(self) -> List[float]:
        return self.chromosome.decode()

    # ------------------------------------------------------------------
    # Fitness
    # ------------------------------------------------------------------

    def evaluate(self) -> FitnessResult:
        """Decode, evaluate the objective and cache the result."""
        value = float(self.function.eval(self.chromosome.decode(), rng=self.rng))
        fitness = self.function.max_y() - value
        if fitness < 0:
            raise FitnessRangeError(
                f"Objective value {value} exceeds max_y {self.function.max_y()}"
            )
        self._cache = FitnessResult(fitness, value)
        return self._cache

    def get_fitness(self) -> FitnessResult:
        if self._cache is None:
            raise EvaluationStateError("Individual has not been evaluated")
        return self._cache

    def is_evaluated(self) -> bool:
        return self._cache is not None

    @property
    def fitness(self) -> float:
        return self.get_fitness().fitness

    @property
    def value(self) -> float:
        return self.get_fitness().value

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __lt__(self, other: 'Individual') -> bool:
        return self.fitness < other.fitness

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.chromosome == other.chromosome

    __hash__ = None

    def __repr__(self) -> str:
        fitness_str = f", fitness={self._cache.fitness:.4f}" if self._cache else ""
        return f"Individual({self.chromosome}{fitness_str})"
