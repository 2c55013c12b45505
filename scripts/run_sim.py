"""Command line harness for deterministic lagfib4plus binomial sampling runs."""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_LOG_PATH = PROJECT_ROOT / "simulation_logs" / "latest_run.json"

if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from lagfib_sim import SPECIES, SimConfig, run_binomial_sim
from lagfib_sim.sim import DEFAULT_SPECIES


def _parse_probability(value: str) -> float:
    """Accept a float in [0, 1]."""

    try:
        p = float(value)
    except ValueError as exc:  # pragma: no cover - argparse surface ensures message
        raise argparse.ArgumentTypeError(f"Expected a probability, received '{value}'.") from exc
    if not 0.0 <= p <= 1.0:
        raise argparse.ArgumentTypeError("Probability must lie in [0, 1].")
    return p


def _parse_count(value: str) -> int:
    """Accept a non-negative integer."""

    try:
        count = int(value)
    except ValueError as exc:  # pragma: no cover - argparse surface ensures message
        raise argparse.ArgumentTypeError(f"Expected an integer, received '{value}'.") from exc
    if count < 0:
        raise argparse.ArgumentTypeError("Value must be a non-negative integer.")
    return count


def _resolve(path: Path) -> Path:
    if not path.is_absolute():
        path = (PROJECT_ROOT / path).resolve()
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a deterministic lagfib4plus binomial sampling run")
    parser.add_argument(
        "--seed",
        type=lambda value: int(value, 0),
        default=0,
        help="Engine seed (accepts decimal or 0x-prefixed hex)",
    )
    parser.add_argument(
        "--species",
        choices=sorted(SPECIES),
        default=DEFAULT_SPECIES,
        help="Lag configuration of the engine",
    )
    parser.add_argument("--p", type=_parse_probability, default=0.5, help="Success probability per trial")
    parser.add_argument("--n", type=_parse_count, default=10, help="Number of trials per sample")
    parser.add_argument("--draws", type=_parse_count, default=10_000, help="Number of samples to draw")
    parser.add_argument(
        "--resume",
        type=Path,
        help="Continue from an engine state file written by --save-state (ignores --seed/--species)",
    )
    parser.add_argument(
        "--save-state",
        dest="save_state",
        type=Path,
        help="Write the engine state after the run so a later run can resume it",
    )
    parser.add_argument(
        "--log",
        nargs="?",
        type=Path,
        const=DEFAULT_LOG_PATH,
        help=(
            "Persist the JSON report to disk. Provide a path or pass the flag alone to use "
            "simulation_logs/latest_run.json under the repository root."
        ),
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    resume_state = None
    if args.resume is not None:
        resume_path = _resolve(args.resume)
        if not resume_path.exists():
            parser.error(f"resume state file not found: {resume_path}")
        resume_state = resume_path.read_text()

    cfg = SimConfig(
        seed=args.seed,
        species=args.species,
        p=args.p,
        n=args.n,
        draws=args.draws,
        resume_state=resume_state,
    )
    try:
        result = run_binomial_sim(cfg)
    except ValueError as exc:
        parser.error(str(exc))

    engine_state = result.pop("engine_state")
    if args.save_state is not None:
        state_path = _resolve(args.save_state)
        state_path.parent.mkdir(parents=True, exist_ok=True)
        state_path.write_text(engine_state)

    log_path: Path | None = args.log
    if log_path is not None:
        log_path = _resolve(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        log_path.write_text(json.dumps(result, indent=2))

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
