#!/usr/bin/env python3
"""
Sample-size sweep over two fixed scenarios.

For every sample count 1, 10, ..., 10**6 the estimator is run REPEATS times
and the estimates are written one per line to ``<power>_<scenario>.out``:

- "ordered": a single interval, Interval(0, BOUND // 2)
- "random":  a union of BOUND // 2 points with random gaps of 1..4,
             starting at -BOUND
"""
from __future__ import annotations

import random
import sys
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from stateprob.estimator import ProbabilityEstimator
from stateprob.predicates import Interval, Predicate, points

BASE = 10        # base of the sample-count sweep
MAX_POWER = 6    # largest exponent, inclusive
REPEATS = 1000   # estimates per sample count
BOUND = 1000     # states are drawn from [-BOUND, BOUND]
MIN_STEP = 1     # gap between consecutive points of the random state
MAX_STEP = 4

ORDERED = "ordered"
RANDOM = "random"


def sample_counts(base: int = BASE, max_power: int = MAX_POWER) -> List[int]:
    return [base ** p for p in range(max_power + 1)]


def ordered_state(bound: int = BOUND) -> Interval:
    return Interval(0, bound // 2)


def random_state(
    bound: int = BOUND,
    seed: Optional[int] = None,
    min_step: int = MIN_STEP,
    max_step: int = MAX_STEP,
) -> Predicate:
    """
    Union of ``bound // 2`` points walking up from ``-bound`` in random
    steps.  Not uniform over the domain, but scattered.
    """
    rng = random.Random(seed)
    pos = -bound
    values = [pos]
    for _ in range(bound // 2 - 1):
        pos += rng.randint(min_step, max_step)
        values.append(pos)
    return points(values)


def output_path(directory: Path, power: int, scenario: str) -> Path:
    return Path(directory) / f"{power}_{scenario}.out"


def write_estimates(path: Path, estimates: Iterable[float]) -> None:
    with open(path, "w") as f:
        for value in estimates:
            f.write(f"{value}\n")


def read_estimates(path: Path) -> List[float]:
    with open(path) as f:
        return [float(line) for line in f if line.strip()]


def run_scenario(
    estimator: ProbabilityEstimator,
    predicate: Predicate,
    scenario: str,
    directory: Path,
    *,
    counts: Optional[List[int]] = None,
    repeats: int = REPEATS,
    seed_source: Callable[[], int] = time.perf_counter_ns,
) -> List[Path]:
    """
    Write ``repeats`` estimates for each sample count in ``counts``.

    Returns the files written, ordered by power.
    """
    if counts is None:
        counts = sample_counts()

    written = []
    for power, n in enumerate(counts):
        path = output_path(directory, power, scenario)
        write_estimates(
            path,
            (estimator.test(predicate, n, seed_source()) for _ in range(repeats)),
        )
        logger.info(f"{scenario}: wrote {repeats} estimates for n={n} to {path}")
        written.append(path)
    return written


def run_experiment(
    directory: Path = Path("."),
    *,
    bound: int = BOUND,
    base: int = BASE,
    max_power: int = MAX_POWER,
    repeats: int = REPEATS,
    seed_source: Callable[[], int] = time.perf_counter_ns,
) -> Dict[str, List[Path]]:
    """Run the "ordered" and "random" scenarios into ``directory``."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    estimator = ProbabilityEstimator(-bound, bound)
    counts = sample_counts(base, max_power)
    scenarios = {
        ORDERED: ordered_state(bound),
        RANDOM: random_state(bound, seed_source()),
    }

    results = {}
    for name, predicate in scenarios.items():
        logger.info(
            f"{name}: exact probability {estimator.exact(predicate):.6f}"
        )
        results[name] = run_scenario(
            estimator,
            predicate,
            name,
            directory,
            counts=counts,
            repeats=repeats,
            seed_source=seed_source,
        )
    return results


def main():
    logger.remove()
    logger.add(sys.stderr, format="[{level}] {message}", level="INFO")
    logger.enable("stateprob")
    run_experiment(Path.cwd())


if __name__ == "__main__":
    main()
