# stateprob/predicates.py
"""
State predicates over integer "energy" values.

A predicate is a decidable set of integer states, queried with a single
membership test.  The variant set is closed:

- Point:         exactly one state
- Interval:      every state in the inclusive range [low, high]
- Negation:      complement of another predicate
- Intersection:  states contained in both children
- Union:         states contained in either child

Predicates are frozen dataclasses.  Combinators hold their children by
value, so every tree is singly owned and immutable after construction;
"changing" a predicate means binding a name to a new tree.

Trees may be arbitrarily deep (a union grown one point at a time is a
left-deep chain), so every walk over a tree uses an explicit stack instead
of Python recursion.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Callable, Iterable, List, Tuple, TypeAlias

State: TypeAlias = int


class InvalidPredicateError(ValueError):
    """Raised when a predicate is built from invalid parts."""


def _check_state(name: str, value: object) -> None:
    # bool is an int subclass, but True/False are not energies
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidPredicateError(
            f"{name} must be an integer state, got {value!r}"
        )


def _check_child(name: str, child: object) -> None:
    if not isinstance(child, Predicate):
        raise InvalidPredicateError(
            f"{name} must be a predicate, got {child!r}"
        )


class Predicate:
    """
    Common surface of all predicate variants.

    Evaluation lives in :func:`contains`; the methods here forward to it,
    provide the ``~``, ``&`` and ``|`` builders, and give every variant
    structural equality, hashing and printing that work on deep trees.
    """

    __slots__ = ()

    def contains(self, state: State) -> bool:
        return contains(self, state)

    def __contains__(self, state: State) -> bool:
        return contains(self, state)

    def __invert__(self) -> "Negation":
        return Negation(self)

    def __and__(self, other: "Predicate") -> "Intersection":
        return Intersection(self, other)

    def __or__(self, other: "Predicate") -> "Union":
        return Union(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Predicate):
            return NotImplemented
        return _same_tree(self, other)

    def __hash__(self) -> int:
        return _fold(
            self,
            lambda node, hashes: hash((type(node).__name__, _parts(node)[0], *hashes)),
        )

    def __str__(self) -> str:
        return _fold(self, _render)

    def __repr__(self) -> str:
        return _fold(self, _render_repr)


# --- Atoms -------------------------------------------------------------------


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Point(Predicate):
    """A single state."""

    value: State

    def __post_init__(self):
        _check_state("value", self.value)


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Interval(Predicate):
    """
    Closed integer interval [low, high].

    An inverted interval (low > high) is rejected instead of being read as
    the empty set; use ``~Interval(...)`` or an intersection of disjoint
    intervals when an empty predicate is really wanted.
    """

    low: State
    high: State

    def __post_init__(self):
        _check_state("low", self.low)
        _check_state("high", self.high)
        if self.low > self.high:
            raise InvalidPredicateError(
                f"Invalid interval: [{self.low}, {self.high}]"
            )

    @classmethod
    def const(cls, n: State) -> "Interval":
        """Interval holding the single state n."""
        return cls(n, n)

    @property
    def size(self) -> int:
        """Number of integer states covered."""
        return self.high - self.low + 1


# --- Combinators -------------------------------------------------------------


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Negation(Predicate):
    base: Predicate

    def __post_init__(self):
        _check_child("base", self.base)


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Intersection(Predicate):
    first: Predicate
    second: Predicate

    def __post_init__(self):
        _check_child("first", self.first)
        _check_child("second", self.second)


@dataclass(frozen=True, eq=False, repr=False, slots=True)
class Union(Predicate):
    first: Predicate
    second: Predicate

    def __post_init__(self):
        _check_child("first", self.first)
        _check_child("second", self.second)


# --- Tree walks --------------------------------------------------------------


def _parts(predicate: object) -> Tuple[tuple, Tuple[Predicate, ...]]:
    """(atom values, children) of one node."""
    match predicate:
        case Point(value):
            return (value,), ()
        case Interval(low, high):
            return (low, high), ()
        case Negation(base):
            return (), (base,)
        case Intersection(first, second) | Union(first, second):
            return (), (first, second)
    raise TypeError(f"not a state predicate: {predicate!r}")


def _fold(predicate: Predicate, combine: Callable[[Predicate, List[Any]], Any]) -> Any:
    """
    Post-order fold: ``combine(node, child_results)`` is called once per
    node, children first.
    """
    results: dict[int, Any] = {}
    stack = [(predicate, False)]
    while stack:
        node, expanded = stack.pop()
        _, children = _parts(node)
        if expanded or not children:
            results[id(node)] = combine(node, [results[id(c)] for c in children])
        else:
            stack.append((node, True))
            stack.extend((c, False) for c in reversed(children))
    return results[id(predicate)]


def _same_tree(a: Predicate, b: Predicate) -> bool:
    pairs = [(a, b)]
    while pairs:
        x, y = pairs.pop()
        if x is y:
            continue
        if type(x) is not type(y):
            return False
        x_atoms, x_children = _parts(x)
        y_atoms, y_children = _parts(y)
        if x_atoms != y_atoms:
            return False
        pairs.extend(zip(x_children, y_children))
    return True


def _render(node: Predicate, children: List[str]) -> str:
    match node:
        case Point(value):
            return f"{{{value}}}"
        case Interval(low, high):
            return f"[{low}, {high}]"
        case Negation():
            return f"¬{children[0]}"
        case Intersection():
            return f"({children[0]} ∩ {children[1]})"
        case Union():
            return f"({children[0]} ∪ {children[1]})"
    raise TypeError(f"not a state predicate: {node!r}")


def _render_repr(node: Predicate, children: List[str]) -> str:
    atoms, _ = _parts(node)
    values = [repr(v) for v in atoms] + children
    args = ", ".join(f"{f.name}={v}" for f, v in zip(fields(node), values))
    return f"{type(node).__name__}({args})"


class _Step(Enum):
    AND = auto()
    OR = auto()
    NOT = auto()


def contains(predicate: Predicate, state: State) -> bool:
    """Membership test: is ``state`` in the set described by ``predicate``?"""
    # Pending work is either a subtree to evaluate or a step that consumes
    # the value of the subtree evaluated just before it.
    todo: list = [predicate]
    values: List[bool] = []
    while todo:
        item = todo.pop()
        match item:
            case Point(value):
                values.append(state == value)
            case Interval(low, high):
                values.append(low <= state <= high)
            case Negation(base):
                todo.append(_Step.NOT)
                todo.append(base)
            case Intersection(first, second):
                todo.append((_Step.AND, second))
                todo.append(first)
            case Union(first, second):
                todo.append((_Step.OR, second))
                todo.append(first)
            case _Step.NOT:
                values.append(not values.pop())
            case (_Step.AND, second):
                # first was False: the intersection is False, skip second
                if values[-1]:
                    values.pop()
                    todo.append(second)
            case (_Step.OR, second):
                # first was True: the union is True, skip second
                if not values[-1]:
                    values.pop()
                    todo.append(second)
            case _:
                raise TypeError(f"not a state predicate: {item!r}")
    return values.pop()


def depth(predicate: Predicate) -> int:
    """Height of the predicate tree; atoms have depth 1."""
    deepest = 0
    stack = [(predicate, 1)]
    while stack:
        node, level = stack.pop()
        _, children = _parts(node)
        deepest = max(deepest, level)
        stack.extend((c, level + 1) for c in children)
    return deepest


def exact_probability(predicate: Predicate, low: State, high: State) -> float:
    """
    Exact measure of ``predicate`` under the uniform distribution on the
    integers of [low, high], by enumerating the domain.
    """
    if low > high:
        raise ValueError(f"Invalid domain: [{low}, {high}]")
    hits = sum(1 for s in range(low, high + 1) if contains(predicate, s))
    return hits / (high - low + 1)


# --- Builders ----------------------------------------------------------------


def _balanced(kind: type, items: list[Predicate]) -> Predicate:
    # Split in halves so long chains stay O(log n) deep
    if len(items) == 1:
        return items[0]
    mid = len(items) // 2
    return kind(_balanced(kind, items[:mid]), _balanced(kind, items[mid:]))


def union_of(predicates: Iterable[Predicate]) -> Predicate:
    """Union of all given predicates as a balanced tree."""
    items = list(predicates)
    if not items:
        raise InvalidPredicateError("union_of() needs at least one predicate")
    for i, item in enumerate(items):
        _check_child(f"predicates[{i}]", item)
    return _balanced(Union, items)


def intersection_of(predicates: Iterable[Predicate]) -> Predicate:
    """Intersection of all given predicates as a balanced tree."""
    items = list(predicates)
    if not items:
        raise InvalidPredicateError(
            "intersection_of() needs at least one predicate"
        )
    for i, item in enumerate(items):
        _check_child(f"predicates[{i}]", item)
    return _balanced(Intersection, items)


def points(values: Iterable[State]) -> Predicate:
    """Union of one Point per value."""
    return union_of(Point(v) for v in values)
