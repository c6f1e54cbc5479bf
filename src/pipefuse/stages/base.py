"""Stage descriptors that make up a pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from ..functions.base import Predicate, Transform, describe


class StageKind(enum.Enum):
    MAP = "map"
    FILTER = "filter"
    TAKE = "take"


def _ensure_callable(func: Any, role: str) -> None:
    if not callable(func):
        raise TypeError(f"{role} must be callable, got {type(func).__name__}")


@dataclass(frozen=True, slots=True)
class MapStage:
    """Replace each element with the result of ``transforms`` applied in order."""

    transforms: tuple[Transform, ...]
    kind: StageKind = field(default=StageKind.MAP, init=False)

    @classmethod
    def of(cls, transform: Transform | Iterable[Transform]) -> "MapStage":
        if callable(transform):
            transforms: tuple[Transform, ...] = (transform,)
        elif isinstance(transform, Iterable) and not isinstance(transform, (str, bytes)):
            transforms = tuple(transform)
        else:
            raise TypeError(
                f"map() expects a callable or a sequence of callables, got {type(transform).__name__}"
            )
        for func in transforms:
            _ensure_callable(func, "transform")
        return cls(transforms=transforms)

    def apply(self, value: Any) -> Any:
        for func in self.transforms:
            value = func(value)
        return value

    def __str__(self) -> str:
        return f"map({', '.join(describe(func) for func in self.transforms)})"


@dataclass(frozen=True, slots=True)
class FilterStage:
    """Drop elements for which ``predicate`` is false."""

    predicate: Predicate
    kind: StageKind = field(default=StageKind.FILTER, init=False)

    @classmethod
    def of(cls, predicate: Predicate) -> "FilterStage":
        _ensure_callable(predicate, "predicate")
        return cls(predicate=predicate)

    def __str__(self) -> str:
        return f"filter({describe(self.predicate)})"


@dataclass(frozen=True, slots=True)
class TakeStage:
    """Admit at most ``limit`` elements through this stage position."""

    limit: int
    kind: StageKind = field(default=StageKind.TAKE, init=False)

    @classmethod
    def of(cls, limit: int) -> "TakeStage":
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"take() expects an int, got {type(limit).__name__}")
        if limit < 0:
            raise ValueError(f"take() limit must be non-negative, got {limit}")
        return cls(limit=limit)

    def __str__(self) -> str:
        return f"take({self.limit})"


Stage = Union[MapStage, FilterStage, TakeStage]


__all__ = ["FilterStage", "MapStage", "Stage", "StageKind", "TakeStage"]
