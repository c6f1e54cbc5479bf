"""Immutable pipeline composed of stages and evaluated in a single pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Generic, Iterable, Sequence, TypeVar

from ..functions.base import Predicate, Transform
from ..memory import HeapResource, MemoryResource, OutputBuffer
from ..stages import FilterStage, MapStage, Stage, StageKind, TakeStage

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)

INITIAL_CAPACITY = 16


@dataclass(frozen=True, slots=True)
class Pipeline(Generic[T]):
    """Ordered stages over a borrowed ``source``, evaluated by :meth:`collect`.

    Builder methods never mutate the receiver. Each returns a new pipeline
    whose stage tuple is the receiver's with one stage appended, so a
    pipeline can be branched and every branch collected independently.
    """

    source: Sequence[T]
    resource: MemoryResource = field(default_factory=HeapResource, compare=False)
    stages: tuple[Stage, ...] = ()

    def _with_stage(self, stage: Stage) -> "Pipeline[T]":
        return replace(self, stages=self.stages + (stage,))

    def map(self, transform: Transform[T] | Iterable[Transform[T]]) -> "Pipeline[T]":
        """Append a map stage; a list of transforms is applied left to right."""

        return self._with_stage(MapStage.of(transform))

    def filter(self, predicate: Predicate[T]) -> "Pipeline[T]":
        return self._with_stage(FilterStage.of(predicate))

    def take(self, count: int) -> "Pipeline[T]":
        return self._with_stage(TakeStage.of(count))

    def collect(self) -> list[T]:
        """Run every stage over ``source`` in one traversal.

        Returns a new list owned by the caller. Raises
        :class:`~pipefuse.memory.AllocationError` when the resource cannot
        hold the output; nothing stays reserved in that case.
        """

        if not self.stages:
            self.resource.reserve(len(self.source))
            return list(self.source)

        LOGGER.debug(
            "Collecting %d element(s) through %d stage(s): %s",
            len(self.source),
            len(self.stages),
            ", ".join(str(stage) for stage in self.stages),
        )
        buffer: OutputBuffer[T] = OutputBuffer(self.resource)
        try:
            buffer.ensure_exact_capacity(min(len(self.source), INITIAL_CAPACITY))
            take_counts = [0] * len(self.stages)
            for item in self.source:
                if not self._process(item, take_counts, buffer):
                    break
            result = buffer.to_owned()
        except BaseException:
            buffer.discard()
            raise
        LOGGER.debug("Collected %d element(s)", len(result))
        return result

    def _process(self, item: T, take_counts: list[int], buffer: OutputBuffer[T]) -> bool:
        """Push ``item`` through the stages; return False once a take is exhausted."""

        current = item
        for index, stage in enumerate(self.stages):
            if stage.kind is StageKind.MAP:
                current = stage.apply(current)
            elif stage.kind is StageKind.FILTER:
                if not stage.predicate(current):
                    return True
            else:
                if take_counts[index] >= stage.limit:
                    LOGGER.debug("Stage %d (%s) exhausted; stopping traversal", index, stage)
                    return False
                take_counts[index] += 1
        buffer.append(current)
        return True

    def __bool__(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self.stages)

    def __repr__(self) -> str:
        stage_names = [str(stage) for stage in self.stages]
        return f"Pipeline(stages={stage_names})"


@dataclass(frozen=True, slots=True)
class PipelineBuilder:
    """Entry point that binds a memory resource before a source is known."""

    resource: MemoryResource

    def from_(self, source: Sequence[T]) -> Pipeline[T]:
        return Pipeline(source=source, resource=self.resource)


def pipeline(resource: MemoryResource | None = None) -> PipelineBuilder:
    return PipelineBuilder(resource=resource if resource is not None else HeapResource())


def from_source(source: Sequence[T], resource: MemoryResource | None = None) -> Pipeline[T]:
    """Create a zero-stage pipeline over ``source``."""

    return pipeline(resource).from_(source)


__all__ = ["INITIAL_CAPACITY", "Pipeline", "PipelineBuilder", "from_source", "pipeline"]
