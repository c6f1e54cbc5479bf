"""Predicate factories for numeric elements."""

from __future__ import annotations

from numbers import Number

from .base import Predicate, named


def gt(threshold: Number) -> Predicate:
    """Return a predicate that keeps values greater than ``threshold``."""

    @named(f"gt({threshold})")
    def _predicate(value, /) -> bool:
        return value > threshold

    return _predicate


def lt(threshold: Number) -> Predicate:
    """Return a predicate that keeps values less than ``threshold``."""

    @named(f"lt({threshold})")
    def _predicate(value, /) -> bool:
        return value < threshold

    return _predicate


def even() -> Predicate:
    @named("even")
    def _predicate(value, /) -> bool:
        return value % 2 == 0

    return _predicate


def odd() -> Predicate:
    # Python's modulo is non-negative for a positive divisor, so -3 % 2 == 1.
    @named("odd")
    def _predicate(value, /) -> bool:
        return value % 2 != 0

    return _predicate


__all__ = ["gt", "lt", "even", "odd"]
