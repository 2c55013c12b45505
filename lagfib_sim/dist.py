"""Discrete distributions sampled by inversion of a cumulative table."""

import logging
import math
import numbers
from typing import List, Tuple

from .prng import BitSource
from .textio import TextReader
from .uniform import discrete, uniformco

logger = logging.getLogger(__name__)


def _check_p(p) -> float:
    if isinstance(p, bool) or not isinstance(p, numbers.Real):
        raise ValueError(f"p must be a real number, got {p!r}")
    p = float(p)
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must lie in [0, 1], got {p!r}")
    return p


def _check_n(n) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"n must be an integer, got {n!r}")
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return n


def binomial_table(p: float, n: int) -> List[float]:
    """Normalized cumulative probabilities P(X <= i) for i in 0..n."""
    table = []
    coeff = 1.0
    for i in range(n + 1):
        table.append(coeff * p ** i * (1.0 - p) ** (n - i))
        coeff *= n - i
        coeff /= i + 1
    for i in range(1, len(table)):
        table[i] += table[i - 1]
    total = table[-1]
    if not (math.isfinite(total) and total > 0.0):
        raise ValueError(f"binomial({p!r}, {n}) has no representable probability mass")
    return [value / total for value in table]


class BinomialParam:
    """Success probability ``p``, trial count ``n`` and the derived cumulative table.

    Changing ``p`` or ``n`` rebuilds the whole table before anything is
    committed, so a rejected value leaves the parameter as it was.  Updates
    are not synchronized; share one across threads only behind a lock.
    """

    __slots__ = ("_p", "_n", "_table")

    def __init__(self, p: float, n: int):
        self._commit(_check_p(p), _check_n(n))

    def _commit(self, p: float, n: int) -> None:
        table = binomial_table(p, n)
        logger.debug("rebuilt binomial table p=%r n=%d", p, n)
        self._p, self._n, self._table = p, n, table

    @property
    def p(self) -> float:
        return self._p

    @p.setter
    def p(self, value: float) -> None:
        self._commit(_check_p(value), self._n)

    @property
    def n(self) -> int:
        return self._n

    @n.setter
    def n(self, value: int) -> None:
        self._commit(self._p, _check_n(value))

    @property
    def table(self) -> Tuple[float, ...]:
        return tuple(self._table)

    def copy(self) -> "BinomialParam":
        clone = BinomialParam.__new__(BinomialParam)
        clone._p, clone._n, clone._table = self._p, self._n, self._table
        return clone

    def __eq__(self, other):
        if not isinstance(other, BinomialParam):
            return NotImplemented
        return self._p == other._p and self._n == other._n

    __hash__ = None

    def __repr__(self):
        return f"BinomialParam(p={self._p!r}, n={self._n})"

    def dumps(self) -> str:
        return f"({self._p!r} {self._n})"

    __str__ = dumps

    def read(self, reader: TextReader) -> bool:
        reader.expect("(")
        p = reader.read_float()
        reader.expect(" ")
        n = reader.read_int()
        reader.expect(")")
        if not reader:
            return False
        try:
            self._commit(_check_p(p), _check_n(n))
        except ValueError:
            reader.fail()
            return False
        return True

    def loads(self, text: str) -> bool:
        return self.read(TextReader(text))


class DiscreteDist:
    """Sampler over 0..max driven by a parameter object's cumulative ``table``.

    Subclasses set ``name`` and the parameter type; the sampler keeps no
    state of its own besides the parameter.
    """

    name = ""
    param_type = None

    def __init__(self, param):
        self._param = param

    @classmethod
    def from_param(cls, param) -> "DiscreteDist":
        dist = cls.__new__(cls)
        DiscreteDist.__init__(dist, param.copy())
        return dist

    @property
    def param(self):
        return self._param.copy()

    @param.setter
    def param(self, value) -> None:
        if not isinstance(value, self.param_type):
            raise TypeError(f"expected {self.param_type.__name__}, got {type(value).__name__}")
        self._param = value.copy()

    @property
    def min(self) -> int:
        return 0

    @property
    def max(self) -> int:
        return len(self._param._table) - 1

    def draw(self, source: BitSource, param=None) -> int:
        """Smallest outcome whose cumulative probability exceeds one uniform draw."""
        if param is None:
            param = self._param
        return discrete(uniformco(source), param._table)

    def pdf(self, x: int) -> float:
        table = self._param._table
        if x < 0 or x >= len(table):
            return 0.0
        if x == 0:
            return table[0]
        return table[x] - table[x - 1]

    def cdf(self, x: int) -> float:
        table = self._param._table
        if x < 0:
            return 0.0
        if x < len(table):
            return table[x]
        return 1.0

    def __eq__(self, other):
        if not isinstance(other, DiscreteDist):
            return NotImplemented
        return self.name == other.name and self._param == other._param

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self._param!r})"

    def dumps(self) -> str:
        return f"[{self.name} {self._param.dumps()}]"

    __str__ = dumps

    def read(self, reader: TextReader) -> bool:
        param = self._param.copy()
        reader.skip_spaces()
        reader.expect(f"[{self.name} ")
        param.read(reader)
        reader.expect("]")
        if not reader:
            return False
        self._param = param
        return True

    def loads(self, text: str) -> bool:
        return self.read(TextReader(text))


class BinomialDist(DiscreteDist):
    """Number of successes in ``n`` independent trials with probability ``p``."""

    name = "binomial"
    param_type = BinomialParam

    def __init__(self, p: float, n: int):
        super().__init__(BinomialParam(p, n))

    @property
    def p(self) -> float:
        return self._param.p

    @p.setter
    def p(self, value: float) -> None:
        self._param.p = value

    @property
    def n(self) -> int:
        return self._param.n

    @n.setter
    def n(self, value: int) -> None:
        self._param.n = value

    def mean(self) -> float:
        return self._param.n * self._param.p

    def variance(self) -> float:
        return self._param.n * self._param.p * (1.0 - self._param.p)
