"""Monte Carlo probability estimates for integer state predicates."""

from loguru import logger

from stateprob.estimator import UNDEFINED_ESTIMATE, ProbabilityEstimator
from stateprob.predicates import (
    Intersection,
    Interval,
    InvalidPredicateError,
    Negation,
    Point,
    Predicate,
    State,
    Union,
    contains,
    depth,
    exact_probability,
    intersection_of,
    points,
    union_of,
)

__all__ = [
    "Intersection",
    "Interval",
    "InvalidPredicateError",
    "Negation",
    "Point",
    "Predicate",
    "ProbabilityEstimator",
    "State",
    "UNDEFINED_ESTIMATE",
    "Union",
    "contains",
    "depth",
    "exact_probability",
    "intersection_of",
    "points",
    "union_of",
]

# Silent unless an application opts in with logger.enable("stateprob")
logger.disable("stateprob")
