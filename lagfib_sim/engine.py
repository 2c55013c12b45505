"""Four-tap additive lagged Fibonacci engines.

``x[i] = x[i-A] + x[i-B] + x[i-C] + x[i-D]  (mod 2**bits)``

Each concrete engine class is bound to one :class:`LagSpecies` by
:func:`lagfib4plus`.  The history lives in a circular buffer whose length is
the smallest power of two >= D, so every index is reduced with a bitmask.

Engines are plain mutable values: ``generate()`` updates the buffer in place
and must not be called concurrently on one instance.  Give each stream its
own engine, or guard a shared one externally.
"""

import logging
from typing import Dict, Iterator, List, Optional, Type, Union

from .prng import BitSource, Minstd
from .species import LagSpecies
from .textio import TextReader
from .uniform import uniformco

logger = logging.getLogger(__name__)


class Lagfib4Plus:
    """Base class for species-bound engines; use :func:`lagfib4plus` to get one."""

    __slots__ = ("_r", "_index")

    species: LagSpecies
    min = 0
    max = 0

    def __init__(self, seed=None):
        if not hasattr(type(self), "species"):
            raise TypeError("Lagfib4Plus has no lag configuration; use lagfib4plus()")
        self._r: List[int] = [0] * self.species.size
        self._index = 0
        self.seed(seed)

    @classmethod
    def _blank(cls) -> "Lagfib4Plus":
        engine = cls.__new__(cls)
        engine._r = [0] * cls.species.size
        engine._index = 0
        return engine

    @classmethod
    def name(cls) -> str:
        return cls.species.name

    @property
    def index(self) -> int:
        return self._index

    @property
    def state(self) -> List[int]:
        """Copy of the circular buffer, slot 0 first."""
        return list(self._r)

    def seed(self, source: Union[None, int, BitSource] = None) -> None:
        """Reseed from nothing (same as 0), an integer, or a bit source.

        Each of the first D slots is built one bit at a time, most significant
        bit first: a draw above the midpoint of the source's range is a 1.
        The index is left at D - 1 so the next step reads the seeded slots.
        """
        if source is None:
            source = 0
        if isinstance(source, int):
            logger.debug("seeding %s from integer %d", self.name(), source)
            source = Minstd(source)
        else:
            logger.debug("seeding %s from %s", self.name(), type(source).__name__)

        species = self.species
        threshold = (source.max - source.min) // 2
        r = [0] * species.size
        for i in range(species.d):
            word = 0
            for _ in range(species.bits):
                word <<= 1
                if source() - source.min > threshold:
                    word |= 1
            r[i] = word
        self._r = r
        self._index = species.d - 1

    def generate(self) -> int:
        mask = self._mask
        a, b, c, d = self._lags
        r = self._r
        i = (self._index + 1) & mask
        value = (
            r[(i - a) & mask] + r[(i - b) & mask] + r[(i - c) & mask] + r[(i - d) & mask]
        ) & self.max
        r[i] = value
        self._index = i
        return value

    __call__ = generate

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.generate()

    def below(self, bound: int) -> int:
        """Integer in [0, bound) from one draw."""
        return int(uniformco(self) * bound)

    def copy(self) -> "Lagfib4Plus":
        clone = self._blank()
        clone._r = list(self._r)
        clone._index = self._index
        return clone

    __copy__ = copy

    def __eq__(self, other):
        if not isinstance(other, Lagfib4Plus):
            return NotImplemented
        return (
            self.species == other.species
            and self._index == other._index
            and self._r == other._r
        )

    __hash__ = None

    def __repr__(self):
        return f"<{type(self).__name__} {self.name()} index={self._index}>"

    # text form: [<name> () (<index> <slot0> ... <slotN>)]

    def dumps(self) -> str:
        slots = " ".join(str(value) for value in self._r)
        return f"[{self.name()} () ({self._index} {slots})]"

    __str__ = dumps

    def read(self, reader: TextReader) -> bool:
        """Read a state from ``reader``; on any mismatch fail it and keep ours."""
        species = self.species
        reader.skip_spaces()
        reader.expect("[")
        reader.expect(species.name)
        reader.expect(" ()")
        reader.expect(" (")
        index = reader.read_uint()
        r = []
        for _ in range(species.size):
            reader.expect(" ")
            r.append(reader.read_uint())
            if not reader:
                break
        reader.expect(")]")
        if not reader:
            return False
        if index >= species.size or max(r) > species.word_mask:
            reader.fail()
            return False
        self._r = r
        self._index = index
        return True

    def loads(self, text: str) -> bool:
        return self.read(TextReader(text))


_ENGINES: Dict[LagSpecies, Type[Lagfib4Plus]] = {}


def lagfib4plus(bits: int, a: int, b: int, c: int, d: int) -> Type[Lagfib4Plus]:
    """Engine class for one lag configuration; repeated calls return the same class."""
    species = LagSpecies(bits, a, b, c, d)
    engine = _ENGINES.get(species)
    if engine is None:
        class_name = f"Lagfib4Plus{d}_{bits}"
        engine = type(
            class_name,
            (Lagfib4Plus,),
            {
                "__slots__": (),
                "__module__": __name__,
                "__qualname__": class_name,
                "species": species,
                "max": species.word_mask,
                "_mask": species.mask,
                "_lags": species.lags,
            },
        )
        _ENGINES[species] = engine
    return engine


Lagfib4Plus521_32 = lagfib4plus(32, 168, 205, 242, 521)
Lagfib4Plus521_64 = lagfib4plus(64, 168, 205, 242, 521)
Lagfib4Plus607_32 = lagfib4plus(32, 147, 239, 515, 607)
Lagfib4Plus607_64 = lagfib4plus(64, 147, 239, 515, 607)
Lagfib4Plus1279_32 = lagfib4plus(32, 418, 705, 992, 1279)
Lagfib4Plus1279_64 = lagfib4plus(64, 418, 705, 992, 1279)
Lagfib4Plus2281_32 = lagfib4plus(32, 305, 610, 915, 2281)
Lagfib4Plus2281_64 = lagfib4plus(64, 305, 610, 915, 2281)
Lagfib4Plus3217_32 = lagfib4plus(32, 576, 871, 1461, 3217)
Lagfib4Plus3217_64 = lagfib4plus(64, 576, 871, 1461, 3217)
Lagfib4Plus4423_32 = lagfib4plus(32, 1419, 1736, 2053, 4423)
Lagfib4Plus4423_64 = lagfib4plus(64, 1419, 1736, 2053, 4423)
Lagfib4Plus9689_32 = lagfib4plus(32, 471, 2032, 4064, 9689)
Lagfib4Plus9689_64 = lagfib4plus(64, 471, 2032, 4064, 9689)
Lagfib4Plus19937_32 = lagfib4plus(32, 3860, 7083, 11580, 19937)
Lagfib4Plus19937_64 = lagfib4plus(64, 3860, 7083, 11580, 19937)

SPECIES: Dict[str, Type[Lagfib4Plus]] = {
    engine.name(): engine for engine in _ENGINES.values()
}


def _engine_for_name(name: str) -> Optional[Type[Lagfib4Plus]]:
    # only classes already built by lagfib4plus(); text never creates one
    engine = SPECIES.get(name)
    if engine is not None:
        return engine
    for engine in _ENGINES.values():
        if engine.name() == name:
            return engine
    return None


def engine_from_text(text: str) -> Optional[Lagfib4Plus]:
    """Rebuild an engine of whichever known species ``text`` names, or None."""
    head = text.lstrip()
    if not head.startswith("["):
        return None
    engine_cls = _engine_for_name(head[1:].split(" ", 1)[0])
    if engine_cls is None:
        return None
    engine = engine_cls._blank()
    if not engine.loads(text):
        return None
    return engine
