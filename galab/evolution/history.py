"""
Per-generation statistics and whole-run histories.

Enables:
- Recording one immutable GenerationPerformance per generation
- Saving a complete run (config + records) to JSON and loading it back
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence, Tuple
import json
import uuid

from ..errors import ConfigurationError


@dataclass(frozen=True)
class GenerationPerformance:
    """
    Statistics for a single generation of a single run.

    Fitness extremes and solution vectors come from the best/worst
    individuals by fitness. Value extremes are the smallest (best) and
    largest (worst) raw objective values in the population.
    """
    generation: int
    best_fitness: float
    average_fitness: float
    worst_fitness: float
    best_value: float
    average_value: float
    worst_value: float
    best_solution: Tuple[float, ...]
    worst_solution: Tuple[float, ...]

    def __post_init__(self):
        # Frozen dataclass: normalize sequences through object.__setattr__
        object.__setattr__(self, 'best_solution', tuple(float(v) for v in self.best_solution))
        object.__setattr__(self, 'worst_solution', tuple(float(v) for v in self.worst_solution))
        if len(self.best_solution) != len(self.worst_solution):
            raise ConfigurationError(
                f"Best solution has {len(self.best_solution)} variables, "
                f"worst has {len(self.worst_solution)}"
            )
        if not self.best_solution:
            raise ConfigurationError("Solution vectors must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['best_solution'] = list(self.best_solution)
        d['worst_solution'] = list(self.worst_solution)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GenerationPerformance':
        return cls(**data)


def summarize_population(generation: int, population: Sequence) -> GenerationPerformance:
    """
    Build the GenerationPerformance of an evaluated population.

    Ties resolve to the first individual in population order.
    """
    fitnesses = [ind.fitness for ind in population]
    values = [ind.value for ind in population]

    best = max(population, key=lambda ind: ind.fitness)
    worst = min(population, key=lambda ind: ind.fitness)

    return GenerationPerformance(
        generation=generation,
        best_fitness=best.fitness,
        average_fitness=sum(fitnesses) / len(fitnesses),
        worst_fitness=worst.fitness,
        best_value=min(values),
        average_value=sum(values) / len(values),
        worst_value=max(values),
        best_solution=best.decode(),
        worst_solution=worst.decode(),
    )


def generate_run_id(algorithm: str = 'run') -> str:
    """Generate unique run identifier."""
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    short_uuid = uuid.uuid4().hex[:6]
    return f"{algorithm}_{timestamp}_{short_uuid}"


@dataclass
class RunHistory:
    """
    The complete record of one run of one algorithm.

    Attributes:
        run_id: Unique identifier
        run_index: Replicate number within a batch
        algorithm: Algorithm key ('simple_ga' or 'chc')
        function: Objective function key
        config: AlgorithmConfig as a dict
        generations: One record per generation, in order
    """
    run_id: str
    run_index: int
    algorithm: str
    function: str
    config: Dict[str, Any]
    generations: List[GenerationPerformance] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def final(self) -> Optional[GenerationPerformance]:
        return self.generations[-1] if self.generations else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'run_index': self.run_index,
            'algorithm': self.algorithm,
            'function': self.function,
            'config': dict(self.config),
            'generations': [g.to_dict() for g in self.generations],
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RunHistory':
        data = data.copy()
        data['generations'] = [
            GenerationPerformance.from_dict(g) for g in data.get('generations', [])
        ]
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save history to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'RunHistory':
        """Load history from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)
