"""The pattern vocabulary used to describe what a value is expected to look like."""

from __future__ import annotations

import operator
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from structassert.like import Like

__all__ = [
    "ComparisonOp",
    "Pattern",
    "Simple",
    "Struct",
    "Variant",
    "Tuple",
    "Slice",
    "Comparison",
    "Range",
    "Regex",
    "LikePattern",
    "Rest",
    "to_pattern",
    "lt",
    "le",
    "gt",
    "ge",
    "eq",
    "ne",
    "matches",
    "some",
]


class ComparisonOp(Enum):
    """A comparison operator usable as a pattern."""

    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="

    def evaluate(self, left: Any, right: Any) -> bool:
        """Return the result of ``left <op> right``."""
        return bool(_OPERATORS[self](left, right))

    @property
    def description(self) -> str:
        """The kind of check this operator performs, for failure messages."""
        if self is ComparisonOp.EQUAL:
            return "equality"
        if self is ComparisonOp.NOT_EQUAL:
            return "inequality"
        return "comparison"


_OPERATORS: dict[ComparisonOp, Callable[[Any, Any], Any]] = {
    ComparisonOp.LESS: operator.lt,
    ComparisonOp.LESS_EQUAL: operator.le,
    ComparisonOp.GREATER: operator.gt,
    ComparisonOp.GREATER_EQUAL: operator.ge,
    ComparisonOp.EQUAL: operator.eq,
    ComparisonOp.NOT_EQUAL: operator.ne,
}


class Pattern:
    """Base class of every pattern."""

    __slots__ = ()


def _is_rest(value: Any) -> bool:
    return value is ... or isinstance(value, Rest)


@dataclass
class Rest(Pattern):
    """Partial matching: ignore remaining fields or elements (``...``)."""


@dataclass
class Simple(Pattern):
    """The value must equal ``expected``."""

    expected: Any


@dataclass
class Comparison(Pattern):
    """The value must satisfy ``value <op> expected``."""

    op: ComparisonOp
    expected: Any

    def __post_init__(self) -> None:
        if not isinstance(self.op, ComparisonOp):
            raise TypeError(f"expected a ComparisonOp, got {self.op!r}")
        if _is_rest(self.expected) or isinstance(self.expected, Pattern):
            raise TypeError(
                f"'{self.op.value}' needs a complete value, not a pattern: "
                f"{self.expected!r}"
            )


@dataclass
class Range(Pattern):
    """The value must lie in a range; a missing bound is unbounded."""

    start: Any = None
    end: Any = None
    inclusive: bool = False

    def __post_init__(self) -> None:
        if self.start is None and self.end is None:
            raise ValueError("a range needs at least one bound")
        if self.inclusive and self.end is None:
            raise ValueError("an inclusive range needs an end bound")

    def contains(self, value: Any) -> bool:
        """Return True if ``value`` lies within this range."""
        if self.start is not None and not value >= self.start:
            return False
        if self.end is None:
            return True
        return value <= self.end if self.inclusive else value < self.end


@dataclass
class Regex(Pattern):
    """The value must be a string matched by a regular expression."""

    pattern: str
    compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str):
            raise TypeError(f"regex pattern must be a string, got {self.pattern!r}")
        try:
            self.compiled = re.compile(self.pattern)
        except re.error as exc:
            raise ValueError(f"Invalid regex pattern: {self.pattern}") from exc


@dataclass
class LikePattern(Pattern):
    """The value must be ``like`` the given pattern object."""

    pattern: Any

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, (Like, re.Pattern, str)):
            raise TypeError(
                f"unsupported pattern type: {type(self.pattern).__name__}"
            )


def _convert_all(elements: tuple[Any, ...]) -> tuple[Pattern, ...]:
    return tuple(to_pattern(element) for element in elements)


@dataclass(init=False)
class Tuple(Pattern):
    """A plain tuple, matched element by element."""

    elements: tuple[Pattern, ...]

    def __init__(self, *elements: Any) -> None:
        self.elements = _convert_all(elements)


@dataclass(init=False)
class Slice(Pattern):
    """A sequence, matched element by element; one ``...`` absorbs any run."""

    elements: tuple[Pattern, ...]

    def __init__(self, *elements: Any) -> None:
        converted = _convert_all(elements)
        if sum(isinstance(element, Rest) for element in converted) > 1:
            raise ValueError("a slice pattern may hold at most one rest pattern '...'")
        self.elements = converted

    @property
    def has_rest(self) -> bool:
        """True if the pattern holds a rest pattern."""
        return any(isinstance(element, Rest) for element in self.elements)

    @property
    def head(self) -> tuple[Pattern, ...]:
        """The patterns before the rest pattern, or all of them if there is none."""
        for position, element in enumerate(self.elements):
            if isinstance(element, Rest):
                return self.elements[:position]
        return self.elements

    @property
    def tail(self) -> tuple[Pattern, ...]:
        """The patterns after the rest pattern, empty if there is none."""
        for position, element in enumerate(self.elements):
            if isinstance(element, Rest):
                return self.elements[position + 1 :]
        return ()


@dataclass(init=False)
class Struct(Pattern):
    """An object of type ``kind`` whose named fields match their patterns.

    Fields come as keyword arguments or as a mapping. Without ``...`` every
    field of the object must be given; with it the others are ignored. A
    ``kind`` of None accepts an object of any type.
    """

    kind: Any
    fields: dict[str, Pattern]
    rest: bool

    def __init__(self, kind: Any, *parts: Any, **fields: Any) -> None:
        if kind is not None and not isinstance(kind, type):
            raise TypeError(f"struct pattern needs a type, got {kind!r}")
        collected: dict[str, Pattern] = {}
        rest = False

        def add(name: Any, value: Any) -> None:
            if not isinstance(name, str) or not name.isidentifier():
                raise ValueError(f"invalid field name: {name!r}")
            if name in collected:
                raise ValueError(f"field '{name}' given more than once")
            collected[name] = to_pattern(value)

        for part in parts:
            if _is_rest(part):
                if rest:
                    raise ValueError("rest pattern '...' given more than once")
                rest = True
            elif isinstance(part, Mapping):
                for name, value in part.items():
                    add(name, value)
            else:
                raise TypeError(f"unexpected struct pattern part: {part!r}")
        for name, value in fields.items():
            add(name, value)

        self.kind = kind
        self.fields = collected
        self.rest = rest


@dataclass(init=False)
class Variant(Pattern):
    """A variant: ``kind`` with positional element patterns.

    ``kind`` is a class whose instances are unpacked positionally, or, with no
    elements, a value such as an enum member that must be matched exactly.
    A ``kind`` of None stands for "any value but None" and takes exactly one
    element.
    """

    kind: Any
    elements: tuple[Pattern, ...]

    def __init__(self, kind: Any, *elements: Any) -> None:
        if kind is None and len(elements) != 1:
            raise ValueError("a 'some' variant takes exactly one element")
        self.kind = kind
        self.elements = _convert_all(elements)


def to_pattern(value: Any) -> Pattern:
    """Turn a plain value into the pattern it stands for.

    Patterns pass through, ``...`` is a rest pattern, lists become slice
    patterns, tuples become tuple patterns, unit-step ranges become range
    patterns, compiled regexes and :class:`Like` objects become like
    patterns, and anything else must be equal.
    """
    if isinstance(value, Pattern):
        return value
    if value is ...:
        return Rest()
    if isinstance(value, (Like, re.Pattern)):
        return LikePattern(value)
    if type(value) is list:
        return Slice(*value)
    if type(value) is tuple:
        return Tuple(*value)
    if isinstance(value, range) and value.step == 1:
        return Range(value.start, value.stop)
    return Simple(value)


def lt(expected: Any) -> Comparison:
    """The value must be less than ``expected``."""
    return Comparison(ComparisonOp.LESS, expected)


def le(expected: Any) -> Comparison:
    """The value must be at most ``expected``."""
    return Comparison(ComparisonOp.LESS_EQUAL, expected)


def gt(expected: Any) -> Comparison:
    """The value must be greater than ``expected``."""
    return Comparison(ComparisonOp.GREATER, expected)


def ge(expected: Any) -> Comparison:
    """The value must be at least ``expected``."""
    return Comparison(ComparisonOp.GREATER_EQUAL, expected)


def eq(expected: Any) -> Comparison:
    """The value must equal ``expected``."""
    return Comparison(ComparisonOp.EQUAL, expected)


def ne(expected: Any) -> Comparison:
    """The value must differ from ``expected``."""
    return Comparison(ComparisonOp.NOT_EQUAL, expected)


def matches(pattern: Any) -> Regex | LikePattern:
    """The value must match ``pattern``: a regex string or a like-able object."""
    if isinstance(pattern, str):
        return Regex(pattern)
    if isinstance(pattern, Pattern):
        raise TypeError(f"cannot match against a pattern: {pattern!r}")
    return LikePattern(pattern)


def some(pattern: Any) -> Variant:
    """The value must not be None and must match ``pattern``."""
    return Variant(None, pattern)