"""Lag configurations ("species") for the four-tap additive lagged Fibonacci family."""

from dataclasses import dataclass
from typing import Tuple


def _ceil2(value: int) -> int:
    """Smallest power of two that is >= value."""
    size = 1
    while size < value:
        size <<= 1
    return size


@dataclass(frozen=True)
class LagSpecies:
    bits: int
    a: int
    b: int
    c: int
    d: int

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"word width must be positive, got {self.bits}")
        if not 0 < self.a < self.b < self.c < self.d:
            raise ValueError(
                "lags must satisfy 0 < a < b < c < d, got "
                f"{self.a}, {self.b}, {self.c}, {self.d}"
            )

    @property
    def lags(self) -> Tuple[int, int, int, int]:
        return (self.a, self.b, self.c, self.d)

    @property
    def size(self) -> int:
        return _ceil2(self.d)

    @property
    def mask(self) -> int:
        return self.size - 1

    @property
    def word_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def name(self) -> str:
        return f"lagfib4plus_{self.bits}_{self.a}_{self.b}_{self.c}_{self.d}"

