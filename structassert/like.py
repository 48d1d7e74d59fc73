"""Flexible matching of values against patterns, beyond plain equality."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

__all__ = ["Like", "like"]


class Like(ABC):
    """A pattern object that decides for itself whether a value matches it.

    Subclass this to give custom matching rules to the ``=~``-style
    assertions and to :func:`like`.
    """

    @abstractmethod
    def like(self, value: Any) -> bool:
        """Return True if ``value`` matches this pattern."""


def _search(value: Any, compiled: re.Pattern) -> bool:
    if not isinstance(value, str):
        raise TypeError(
            f"regex patterns match strings only, got {type(value).__name__}"
        )
    return compiled.search(value) is not None


def like(value: Any, pattern: Any) -> bool:
    """Return True if ``value`` matches ``pattern``.

    ``pattern`` may be a :class:`Like` object, a compiled regular expression,
    or a string holding a regular expression. A regex matches anywhere in the
    value unless it is anchored. A string that is not a valid regular
    expression matches nothing.
    """
    if isinstance(pattern, Like):
        return bool(pattern.like(value))
    if isinstance(pattern, re.Pattern):
        return _search(value, pattern)
    if isinstance(pattern, str):
        if not isinstance(value, str):
            raise TypeError(
                f"regex patterns match strings only, got {type(value).__name__}"
            )
        try:
            compiled = re.compile(pattern)
        except re.error:
            return False
        return _search(value, compiled)
    raise TypeError(f"unsupported pattern type: {type(pattern).__name__}")