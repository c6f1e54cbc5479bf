"""Transform and predicate building blocks."""

from .arithmetic import add, div, mul, sub
from .base import Predicate, Transform, compose, describe
from .predicates import even, gt, lt, odd

__all__ = [
    "Predicate",
    "Transform",
    "compose",
    "describe",
    "add",
    "sub",
    "mul",
    "div",
    "gt",
    "lt",
    "even",
    "odd",
]
