"""
Fixed-width binary encoding of bounded real-valued variables.

A Bitstring packs G variables ("groups") into one flat bit vector. Every
group has the same width and decodes into the same [x_min, x_max] range:

    value = x_min + (x_max - x_min) * (unsigned(group) / (2**width - 1))

Groups are read most-significant bit first.
"""

from typing import Iterable, List, Sequence

import numpy as np

from ..errors import ConfigurationError, EvaluationStateError


# Group values are accumulated in an unsigned 64-bit integer.
MAX_BITS_PER_GROUP = 64


class Bitstring:
    """
    Chromosome made of `groups` equal-width bit groups.

    Attributes:
        x_min: Lower bound shared by every group
        x_max: Upper bound shared by every group
        groups: Number of encoded variables
    """

    __slots__ = ('_bits', 'x_min', 'x_max', 'groups')

    def __init__(
        self,
        bits: Iterable[int],
        x_min: float,
        x_max: float,
        groups: int,
    ):
        raw = np.asarray(list(bits))
        if raw.size and not np.all((raw == 0) | (raw == 1)):
            raise ConfigurationError("Bits must be 0 or 1")
        self._bits = raw.astype(np.uint8)
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.groups = int(groups)
        self._validate()

    def _validate(self) -> None:
        if self.groups <= 0:
            raise ConfigurationError(f"Group count must be positive, got {self.groups}")
        if not self.x_min < self.x_max:
            raise ConfigurationError(
                f"Lower bound {self.x_min} must be below upper bound {self.x_max}"
            )
        if len(self._bits) == 0:
            raise ConfigurationError("Bitstring must contain at least one bit")
        if len(self._bits) % self.groups != 0:
            raise ConfigurationError(
                f"Length {len(self._bits)} is not a multiple of {self.groups} groups"
            )
        if self.bits_per_group > MAX_BITS_PER_GROUP:
            raise ConfigurationError(
                f"Groups of {self.bits_per_group} bits exceed the "
                f"{MAX_BITS_PER_GROUP}-bit limit"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zeros(
        cls,
        bits_per_group: int,
        x_min: float,
        x_max: float,
        groups: int,
    ) -> 'Bitstring':
        """All-zero bitstring of groups * bits_per_group bits."""
        if bits_per_group <= 0:
            raise ConfigurationError(f"Group width must be positive, got {bits_per_group}")
        return cls([0] * (bits_per_group * groups), x_min, x_max, groups)

    @classmethod
    def random(
        cls,
        bits_per_group: int,
        x_min: float,
        x_max: float,
        groups: int,
        rng: np.random.Generator,
    ) -> 'Bitstring':
        """Bitstring with every bit drawn uniformly from {0, 1}."""
        bitstring = cls.zeros(bits_per_group, x_min, x_max, groups)
        bitstring.randomize(rng)
        return bitstring

    def copy(self) -> 'Bitstring':
        return Bitstring(self._bits, self.x_min, self.x_max, self.groups)

    # ------------------------------------------------------------------
    # Bit access
    # ------------------------------------------------------------------

    @property
    def bits_per_group(self) -> int:
        return len(self._bits) // self.groups

    def __len__(self) -> int:
        return len(self._bits)

    def __getitem__(self, index: int) -> int:
        return int(self._bits[index])

    def set(self, index: int, bit: int) -> None:
        if bit not in (0, 1):
            raise ConfigurationError(f"Bit value must be 0 or 1, got {bit}")
        self._bits[index] = bit

    def flip(self, index: int) -> None:
        """Toggle the bit at index."""
        self._bits[index] ^= 1

    def randomize(self, rng: np.random.Generator) -> None:
        self._bits[:] = rng.integers(0, 2, size=len(self._bits), dtype=np.uint8)

    def to_array(self) -> np.ndarray:
        """Copy of the raw bits as a uint8 array."""
        return self._bits.copy()

    def key(self) -> bytes:
        """Hashable snapshot of the bit contents."""
        return self._bits.tobytes()

    def hamming_distance(self, other: 'Bitstring') -> int:
        if len(self) != len(other):
            raise ConfigurationError(
                f"Cannot compare bitstrings of length {len(self)} and {len(other)}"
            )
        return int(np.count_nonzero(self._bits != other._bits))

    def differing_indices(self, other: 'Bitstring') -> List[int]:
        """Positions where the two bitstrings disagree, in ascending order."""
        if len(self) != len(other):
            raise ConfigurationError(
                f"Cannot compare bitstrings of length {len(self)} and {len(other)}"
            )
        return [int(i) for i in np.flatnonzero(self._bits != other._bits)]

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------

    def max_full_size(self) -> int:
        """Largest unsigned value of one group, 2**bits_per_group - 1."""
        return (1 << self.bits_per_group) - 1

    def decode_range(self, start: int, stop: int) -> float:
        """
        Decode bits[start:stop] as one variable.

        The range must be exactly one group wide.
        """
        width = stop - start
        if width != self.bits_per_group:
            raise EvaluationStateError(
                f"Range [{start}, {stop}) is {width} bits wide, "
                f"groups are {self.bits_per_group} bits"
            )
        if start < 0 or stop > len(self._bits):
            raise EvaluationStateError(
                f"Range [{start}, {stop}) outside bitstring of length {len(self._bits)}"
            )
        value = 0
        for bit in self._bits[start:stop]:
            value = (value << 1) | int(bit)
        return self.x_min + (self.x_max - self.x_min) * (value / self.max_full_size())

    def decode(self) -> List[float]:
        """Decode every group into a list of `groups` reals in [x_min, x_max]."""
        width = self.bits_per_group
        return [
            self.decode_range(start, start + width)
            for start in range(0, len(self._bits), width)
        ]

    def encode(self, values: Sequence[float]) -> None:
        """
        Overwrite the bits with the nearest encoding of `values`.

        Args:
            values: One value per group, each within [x_min, x_max]
        """
        if len(values) != self.groups:
            raise ConfigurationError(
                f"Expected {self.groups} values, got {len(values)}"
            )
        for v in values:
            if not self.x_min <= v <= self.x_max:
                raise ConfigurationError(
                    f"Value {v} outside [{self.x_min}, {self.x_max}]"
                )

        width = self.bits_per_group
        full = self.max_full_size()
        span = self.x_max - self.x_min
        for group, v in enumerate(values):
            quantized = min(int(round((v - self.x_min) / span * full)), full)
            offset = group * width
            for k in range(width):
                self._bits[offset + k] = (quantized >> (width - 1 - k)) & 1

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitstring):
            return NotImplemented
        return (
            self.x_min == other.x_min
            and self.x_max == other.x_max
            and self.groups == other.groups
            and np.array_equal(self._bits, other._bits)
        )

    __hash__ = None

    def __str__(self) -> str:
        return ''.join(str(int(b)) for b in self._bits)

    def __repr__(self) -> str:
        return (
            f"Bitstring({self}, range=[{self.x_min}, {self.x_max}], "
            f"groups={self.groups})"
        )


def from_string(
    text: str,
    x_min: float,
    x_max: float,
    groups: int,
) -> Bitstring:
    """Build a Bitstring from a '0'/'1' string such as '1010'."""
    return Bitstring([int(c) for c in text], x_min, x_max, groups)
