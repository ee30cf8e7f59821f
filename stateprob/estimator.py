# stateprob/estimator.py
"""
Monte Carlo estimate of the probability that a uniformly drawn state
belongs to a predicate.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

from loguru import logger

from stateprob.predicates import Predicate, State, exact_probability

# Result of an estimate over zero samples
UNDEFINED_ESTIMATE = math.nan


@dataclass(frozen=True)
class ProbabilityEstimator:
    """
    Uniform sampler over the inclusive integer range [e_min, e_max].

    Holds nothing but the bounds; every call to :meth:`test` builds its own
    generator, so one estimator can be shared freely.
    """

    e_min: State
    e_max: State

    def __post_init__(self):
        for name in ("e_min", "e_max"):
            bound = getattr(self, name)
            if not isinstance(bound, int) or isinstance(bound, bool):
                raise ValueError(f"{name} must be an integer state, got {bound!r}")
        if self.e_min > self.e_max:
            raise ValueError(
                f"Invalid sampling bounds: [{self.e_min}, {self.e_max}]"
            )

    @property
    def domain_size(self) -> int:
        return self.e_max - self.e_min + 1

    def count_hits(
        self,
        predicate: Predicate,
        sample_count: int,
        seed: int,
        *,
        discard_first: bool = False,
    ) -> int:
        """Number of ``sample_count`` uniform draws that fall in ``predicate``."""
        if sample_count < 0:
            raise ValueError(f"sample_count must be >= 0, got {sample_count}")

        rng = random.Random(seed)
        if discard_first:
            rng.randint(self.e_min, self.e_max)

        hits = 0
        for _ in range(sample_count):
            if predicate.contains(rng.randint(self.e_min, self.e_max)):
                hits += 1
        return hits

    def test(
        self,
        predicate: Predicate,
        sample_count: int,
        seed: int,
        *,
        discard_first: bool = False,
    ) -> float:
        """
        Estimate P(state in predicate) from ``sample_count`` draws.

        The draws are fully determined by ``seed``.  With ``sample_count == 0``
        there is nothing to estimate and ``UNDEFINED_ESTIMATE`` (NaN) is
        returned.  ``discard_first`` throws away the first draw of the fresh
        generator before sampling.
        """
        if sample_count == 0:
            logger.debug(f"no samples requested for {predicate}, estimate undefined")
            return UNDEFINED_ESTIMATE

        hits = self.count_hits(
            predicate, sample_count, seed, discard_first=discard_first
        )
        estimate = hits / sample_count
        logger.debug(f"estimate {estimate} ({hits}/{sample_count}, seed={seed})")
        return estimate

    def exact(self, predicate: Predicate) -> float:
        """The value :meth:`test` converges to."""
        return exact_probability(predicate, self.e_min, self.e_max)
