"""
Objective-function interface consumed by the evolutionary engine.

Any object with this set of methods can be optimized; no base class is
required. Functions must carry no mutable per-call state so that one
instance can be shared by concurrent replicate runs.
"""

from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np


@runtime_checkable
class ObjectiveFunction(Protocol):
    """
    A black-box real-valued function to be minimized.

    Fitness is derived as ``max_y() - eval(x)``, so every decodable input
    must satisfy ``eval(x) <= max_y()``.
    """

    name: str

    def eval(self, x: Sequence[float], rng: Optional[np.random.Generator] = None) -> float:
        """Objective value at x. `rng` feeds stochastic terms, if any."""
        ...

    def x_range(self) -> Tuple[float, float]:
        """(min, max) bound shared by every variable."""
        ...

    def min_x(self) -> List[float]:
        """Location of the reference optimum."""
        ...

    def min_y(self) -> float:
        ...

    def max_y(self) -> float:
        ...

    def num_variables(self) -> int:
        ...
