import math
from bisect import bisect_right
from typing import Sequence

from .prng import BitSource

_BELOW_ONE = math.nextafter(1.0, 0.0)


def uniformco(source: BitSource) -> float:
    """One raw draw from ``source`` mapped into the right-open interval [0, 1)."""
    span = source.max - source.min + 1
    # wide sources round their top values up to 1.0 in double precision
    return min((source() - source.min) / span, _BELOW_ONE)


def discrete(u: float, table: Sequence[float]) -> int:
    """Index of the first entry of the ascending ``table`` that exceeds ``u``."""
    return min(bisect_right(table, u), len(table) - 1)
