"""Arithmetic transform factories."""

from __future__ import annotations

import math
from numbers import Number

from .base import Transform, named


def add(amount: Number) -> Transform:
    """Return a transform that adds ``amount``."""

    @named(f"add({amount})")
    def _transform(value, /):
        return value + amount

    return _transform


def sub(amount: Number) -> Transform:
    """Return a transform that subtracts ``amount``."""

    @named(f"sub({amount})")
    def _transform(value, /):
        return value - amount

    return _transform


def mul(factor: Number) -> Transform:
    """Return a transform that multiplies by ``factor``."""

    @named(f"mul({factor})")
    def _transform(value, /):
        return value * factor

    return _transform


def _div_trunc(value, divisor):
    if isinstance(value, int) and isinstance(divisor, int):
        quotient = abs(value) // abs(divisor)
        return quotient if (value >= 0) == (divisor > 0) else -quotient
    return type(value)(math.trunc(value / divisor))


def div(divisor: Number) -> Transform:
    """Return a transform that divides by ``divisor``, truncating toward zero.

    Integer inputs stay integers (``div(2)(-7) == -3``). Other numeric types
    are truncated and converted back to the input type.
    """

    if divisor == 0:
        raise ValueError("div() requires a non-zero divisor")

    @named(f"div({divisor})")
    def _transform(value, /):
        return _div_trunc(value, divisor)

    return _transform


__all__ = ["add", "sub", "mul", "div"]
