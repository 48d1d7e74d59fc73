"""Checking values against patterns, with descriptive failures."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, NoReturn

from structassert.like import like
from structassert.patterns import (
    Comparison,
    LikePattern,
    Pattern,
    Range,
    Regex,
    Rest,
    Simple,
    Slice,
    Struct,
    Tuple,
    Variant,
    to_pattern,
)

__all__ = ["StructMismatch", "assert_struct"]

_MISSING = object()


class StructMismatch(AssertionError):
    """Raised when a value does not match the pattern it is checked against.

    ``path`` names the failing part of the value, such as ``address.city``
    or ``items[2]``; it is empty when the root value itself failed.
    """

    def __init__(self, detail: str, path: str = "") -> None:
        self.detail = detail
        self.path = path
        super().__init__(f"at {path}: {detail}" if path else detail)


def assert_struct(value: Any, pattern: Any) -> Any:
    """Check that ``value`` matches ``pattern`` and return ``value``.

    ``pattern`` is a :class:`~structassert.patterns.Pattern` or any plain
    value that :func:`~structassert.patterns.to_pattern` accepts. Raises
    :class:`StructMismatch` at the first part of the value that does not match.
    """
    _check(value, to_pattern(pattern), "")
    return value


def _fail(detail: str, path: str) -> NoReturn:
    raise StructMismatch(detail, path)


def _attr(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _index(path: str, position: int) -> str:
    return f"{path}[{position}]"


def _describe(kind: Any) -> str:
    if isinstance(kind, Enum):
        return f"{type(kind).__name__}.{kind.name}"
    if isinstance(kind, type):
        return kind.__name__
    return repr(kind)


def _check(value: Any, pattern: Pattern, path: str) -> None:
    match pattern:
        case Rest():
            return
        case Simple():
            _check_simple(value, pattern.expected, path)
        case Comparison():
            _check_comparison(value, pattern, path)
        case Range():
            _check_range(value, pattern, path)
        case Regex():
            _check_regex(value, pattern, path)
        case LikePattern():
            _check_like(value, pattern, path)
        case Tuple():
            _check_tuple(value, pattern, path)
        case Slice():
            _check_slice(value, pattern, path)
        case Struct():
            _check_struct(value, pattern, path)
        case Variant():
            _check_variant(value, pattern, path)
        case _:
            raise TypeError(f"unsupported pattern: {pattern!r}")


def _check_simple(value: Any, expected: Any, path: str) -> None:
    if expected is None and value is not None:
        _fail("Expected None, got Some", path)
    if not value == expected:
        _fail(
            f"assertion `left == right` failed\n  left: {value!r}\n right: {expected!r}",
            path,
        )


def _check_comparison(value: Any, pattern: Comparison, path: str) -> None:
    op = pattern.op
    if not op.evaluate(value, pattern.expected):
        _fail(
            f"Failed {op.description}: {value!r} {op.value} {pattern.expected!r}",
            path,
        )


def _range_text(pattern: Range) -> str:
    start = "" if pattern.start is None else repr(pattern.start)
    end = "" if pattern.end is None else repr(pattern.end)
    return f"{start}{'..=' if pattern.inclusive else '..'}{end}"


def _check_range(value: Any, pattern: Range, path: str) -> None:
    if not pattern.contains(value):
        _fail(
            f"Value not in range: {value!r} not matching pattern {_range_text(pattern)}",
            path,
        )


def _check_regex(value: Any, pattern: Regex, path: str) -> None:
    if not like(value, pattern.compiled):
        _fail(
            f"Value does not match regex pattern `{pattern.pattern}`\n  value: {value!r}",
            path,
        )


def _check_like(value: Any, pattern: LikePattern, path: str) -> None:
    if not like(value, pattern.pattern):
        _fail(
            f"Value does not match pattern\n  value: {value!r}\n  pattern: {pattern.pattern!r}",
            path,
        )


def _check_tuple(value: Any, pattern: Tuple, path: str) -> None:
    elements = pattern.elements
    if not isinstance(value, tuple) or len(value) != len(elements):
        _fail(f"Expected a tuple of {len(elements)} elements, got {value!r}", path)
    for position, (item, element) in enumerate(zip(value, elements)):
        _check(item, element, _index(path, position))


def _check_slice(value: Any, pattern: Slice, path: str) -> None:
    mismatch = f"Pattern mismatch: {value!r} doesn't match expected pattern"
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        _fail(mismatch, path)
    head, tail = pattern.head, pattern.tail
    if pattern.has_rest:
        fits = len(value) >= len(head) + len(tail)
    else:
        fits = len(value) == len(head)
    if not fits:
        _fail(mismatch, path)
    for position, element in enumerate(head):
        _check(value[position], element, _index(path, position))
    offset = len(value) - len(tail)
    for position, element in enumerate(tail, start=offset):
        _check(value[position], element, _index(path, position))


def _field_names(value: Any) -> list[str] | None:
    if isinstance(value, Mapping):
        return list(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [f.name for f in dataclasses.fields(value)]
    named = getattr(type(value), "_fields", None)
    if isinstance(value, tuple) and named is not None:
        return list(named)
    try:
        attributes = vars(value)
    except TypeError:
        return None
    return [name for name in attributes if not name.startswith("_")]


def _get_field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name, _MISSING)
    return getattr(value, name, _MISSING)


def _check_struct(value: Any, pattern: Struct, path: str) -> None:
    kind = pattern.kind
    if kind is not None and not isinstance(value, kind):
        _fail(f"Expected {_describe(kind)}, got {value!r}", path)
    type_name = type(value).__name__
    names = _field_names(value)
    if names is not None:
        unknown = [name for name in pattern.fields if name not in names]
        if unknown:
            _fail(f"no field named {', '.join(unknown)} on {type_name}", path)
        if not pattern.rest:
            missing = [name for name in names if name not in pattern.fields]
            if missing:
                _fail(
                    f"pattern for {type_name} is missing fields: {', '.join(missing)}",
                    path,
                )
    for name, sub_pattern in pattern.fields.items():
        item = _get_field(value, name)
        if item is _MISSING:
            _fail(f"no field named {name} on {type_name}", path)
        _check(item, sub_pattern, _attr(path, name))


def _positional(value: Any) -> tuple[Any, ...] | None:
    names = getattr(type(value), "__match_args__", None)
    if names is not None:
        return tuple(getattr(value, name) for name in names)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return tuple(getattr(value, f.name) for f in dataclasses.fields(value))
    if isinstance(value, tuple):
        return value
    return None


def _check_variant(value: Any, pattern: Variant, path: str) -> None:
    kind = pattern.kind
    elements = pattern.elements
    if kind is None:
        if value is None:
            _fail("Expected Some(...), got None", path)
        _check(value, elements[0], path)
        return
    name = _describe(kind)
    if isinstance(kind, type):
        if not isinstance(value, kind):
            _fail(f"Expected {name}, got {value!r}", path)
        items = _positional(value)
        if items is None:
            if elements:
                _fail(f"{name} value cannot be unpacked positionally: {value!r}", path)
            return
        if len(items) != len(elements):
            _fail(f"Expected {name} with {len(elements)} elements, got {value!r}", path)
        for position, (item, element) in enumerate(zip(items, elements)):
            _check(item, element, _index(path, position))
        return
    if elements:
        raise TypeError(f"variant {kind!r} is not a type and cannot hold elements")
    if not (value is kind or value == kind):
        _fail(f"Expected {name}, got {value!r}", path)