"""Deterministic binomial sampling run driven by a lagfib4plus engine."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .dist import BinomialDist
from .engine import SPECIES, Lagfib4Plus, engine_from_text

logger = logging.getLogger(__name__)

DEFAULT_SPECIES = "lagfib4plus_64_168_205_242_521"


@dataclass
class SimConfig:
    """Configuration for one sampling run."""

    seed: int = 0
    species: str = DEFAULT_SPECIES
    p: float = 0.5
    n: int = 10
    draws: int = 10_000
    resume_state: Optional[str] = None  # serialized engine; overrides seed/species


@dataclass
class HistogramBin:
    k: int
    count: int
    frequency: float
    pmf: float


def build_engine(cfg: SimConfig) -> Lagfib4Plus:
    if cfg.resume_state is not None:
        engine = engine_from_text(cfg.resume_state)
        if engine is None:
            raise ValueError("resume state is not a readable lagfib4plus engine state")
        return engine

    engine_cls = SPECIES.get(cfg.species)
    if engine_cls is None:
        raise ValueError(f"unknown species {cfg.species!r}")
    return engine_cls(cfg.seed)


def run_binomial_sim(cfg: SimConfig) -> Dict[str, Any]:
    """Draw ``cfg.draws`` binomial samples and compare them with the exact pmf."""

    if cfg.draws < 0:
        raise ValueError(f"draws must be >= 0, got {cfg.draws}")

    engine = build_engine(cfg)
    dist = BinomialDist(cfg.p, cfg.n)
    logger.info("drawing %d samples from %s with %s", cfg.draws, dist.dumps(), engine.name())

    counts = [0] * (dist.max + 1)
    for _ in range(cfg.draws):
        counts[dist.draw(engine)] += 1

    histogram: List[HistogramBin] = []
    mean = 0.0
    tv_distance = 0.0
    for k, count in enumerate(counts):
        frequency = count / cfg.draws if cfg.draws else 0.0
        pmf = dist.pdf(k)
        mean += k * frequency
        tv_distance += abs(frequency - pmf)
        histogram.append(
            HistogramBin(k=k, count=count, frequency=round(frequency, 6), pmf=round(pmf, 6))
        )
    tv_distance /= 2.0
    variance = 0.0
    if cfg.draws:
        variance = sum(count * (k - mean) ** 2 for k, count in enumerate(counts)) / cfg.draws

    logger.info("mean %.4f (expected %.4f), tv distance %.6f", mean, dist.mean(), tv_distance)

    config = asdict(cfg)
    config.pop("resume_state")
    return {
        "config": config,
        "final": {
            "species": engine.name(),
            "resumed": cfg.resume_state is not None,
            "mean": round(mean, 6),
            "variance": round(variance, 6),
            "expected_mean": round(dist.mean(), 6),
            "expected_variance": round(dist.variance(), 6),
            "tv_distance": round(tv_distance, 6),
        },
        "histogram": [asdict(entry) for entry in histogram],
        "distribution": dist.dumps(),
        "engine_state": engine.dumps(),
    }


if __name__ == "__main__":
    import json

    result = run_binomial_sim(SimConfig())
    result.pop("engine_state")
    print(json.dumps(result, indent=2))
