"""Core transform and predicate protocols and helpers."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class Transform(Protocol[T]):
    """A pure callable that maps a ``T`` value to another ``T`` value."""

    def __call__(self, value: T, /) -> T:
        ...


class Predicate(Protocol[T]):
    """A pure callable that tests a ``T`` value."""

    def __call__(self, value: T, /) -> bool:
        ...


def compose(*transforms: Transform[T]) -> Transform[T]:
    """Compose ``transforms`` into a single transform applied left to right."""

    def _composed(value: T, /) -> T:
        current = value
        for func in transforms:
            current = func(current)
        return current

    _composed.__name__ = " >> ".join(describe(func) for func in transforms) or "identity"
    return _composed


def describe(func: Callable[..., Any]) -> str:
    """Return a short human readable label for ``func``."""

    return getattr(func, "__name__", func.__class__.__name__)


def named(label: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that sets the label reported by :func:`describe`."""

    def _wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        func.__name__ = label
        func.__qualname__ = label
        return func

    return _wrapper


__all__ = ["Predicate", "Transform", "compose", "describe", "named"]
