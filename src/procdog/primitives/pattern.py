"""
Pattern matching for selective receive.

A pattern is one of:
  - ANY: matches anything, value is captured
  - IGNORE: matches anything, value is dropped
  - a type: matches instances of that type, value is captured
  - a tuple: matches a tuple of the same length element-wise
  - a callable: matches when it returns true for the value, nothing is captured
  - anything else: matches by equality, nothing is captured

Captured values are handed to the receive handler positionally.
"""

from typing import Any


class _Wildcard:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name


ANY = _Wildcard("ANY")
IGNORE = _Wildcard("IGNORE")


def match(pattern: Any, value: Any) -> list[Any] | None:
    """Return the captured values if `value` matches `pattern`, else None."""
    if pattern is ANY:
        return [value]
    if pattern is IGNORE:
        return []
    if isinstance(pattern, type):
        return [value] if isinstance(value, pattern) else None
    if isinstance(pattern, tuple):
        if not isinstance(value, tuple) or len(value) != len(pattern):
            return None
        captures: list[Any] = []
        for sub_pattern, sub_value in zip(pattern, value):
            sub = match(sub_pattern, sub_value)
            if sub is None:
                return None
            captures.extend(sub)
        return captures
    if callable(pattern):
        # Predicate: matches when it returns true, captures nothing.
        return [] if pattern(value) else None
    return [] if pattern == value else None
