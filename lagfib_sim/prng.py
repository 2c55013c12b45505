# Bit-source protocol and the minimal LCG used to expand integer seeds
# Source: Park & Miller "minimal standard" multiplicative generator
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

MINSTD_A = 16807
MINSTD_M = (1 << 31) - 1


@runtime_checkable
class BitSource(Protocol):
    """Anything callable for a raw integer draw with inclusive ``min``/``max``."""

    min: int
    max: int

    def __call__(self) -> int: ...


@dataclass
class Minstd:
    state: int = 0

    min = 1
    max = MINSTD_M - 1

    def __post_init__(self) -> None:
        # every integer lands in 1..m-1; zero would lock the sequence at zero
        self.state = self.state % (MINSTD_M - 1) + 1

    def __call__(self) -> int:
        self.state = (self.state * MINSTD_A) % MINSTD_M
        return self.state
