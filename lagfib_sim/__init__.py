"""Public package surface for the lagfib4plus generators and binomial sampler."""

from .dist import BinomialDist, BinomialParam, DiscreteDist
from .engine import (
    SPECIES,
    Lagfib4Plus,
    Lagfib4Plus521_32,
    Lagfib4Plus521_64,
    Lagfib4Plus607_32,
    Lagfib4Plus607_64,
    Lagfib4Plus1279_32,
    Lagfib4Plus1279_64,
    Lagfib4Plus2281_32,
    Lagfib4Plus2281_64,
    Lagfib4Plus3217_32,
    Lagfib4Plus3217_64,
    Lagfib4Plus4423_32,
    Lagfib4Plus4423_64,
    Lagfib4Plus9689_32,
    Lagfib4Plus9689_64,
    Lagfib4Plus19937_32,
    Lagfib4Plus19937_64,
    engine_from_text,
    lagfib4plus,
)
from .prng import BitSource, Minstd
from .sim import SimConfig, run_binomial_sim
from .species import LagSpecies
from .textio import TextReader
from .uniform import discrete, uniformco

__all__ = [
    "BinomialDist",
    "BinomialParam",
    "BitSource",
    "DiscreteDist",
    "LagSpecies",
    "Lagfib4Plus",
    "Lagfib4Plus521_32",
    "Lagfib4Plus521_64",
    "Lagfib4Plus607_32",
    "Lagfib4Plus607_64",
    "Lagfib4Plus1279_32",
    "Lagfib4Plus1279_64",
    "Lagfib4Plus2281_32",
    "Lagfib4Plus2281_64",
    "Lagfib4Plus3217_32",
    "Lagfib4Plus3217_64",
    "Lagfib4Plus4423_32",
    "Lagfib4Plus4423_64",
    "Lagfib4Plus9689_32",
    "Lagfib4Plus9689_64",
    "Lagfib4Plus19937_32",
    "Lagfib4Plus19937_64",
    "Minstd",
    "SPECIES",
    "SimConfig",
    "TextReader",
    "discrete",
    "engine_from_text",
    "lagfib4plus",
    "run_binomial_sim",
    "uniformco",
]
