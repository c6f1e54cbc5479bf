"""Memory resources used to materialize pipeline output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Protocol, Sized, TypeVar

T = TypeVar("T")

LOGGER = logging.getLogger(__name__)


class AllocationError(MemoryError):
    """Raised when a memory resource refuses to hand out more slots."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"cannot reserve {requested} slot(s); {available} available")
        self.requested = requested
        self.available = available


class MemoryResource(Protocol):
    """Protocol for the accounting object that backs output buffers."""

    def reserve(self, count: int) -> None: ...

    def release(self, count: int) -> None: ...


@dataclass(slots=True)
class HeapResource:
    """Unbounded resource that only keeps track of how many slots are in use."""

    in_use: int = 0
    peak: int = 0

    def reserve(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must be non-negative")
        self.in_use += count
        self.peak = max(self.peak, self.in_use)

    def release(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must be non-negative")
        if count > self.in_use:
            msg = f"cannot release {count} slot(s); only {self.in_use} in use"
            raise ValueError(msg)
        self.in_use -= count

    def free(self, items: Sized) -> None:
        """Return the slots held by a collected result."""

        self.release(len(items))


@dataclass(slots=True)
class BoundedResource(HeapResource):
    """Resource that fails once more than ``limit`` slots are reserved."""

    limit: int = 0

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")

    def reserve(self, count: int) -> None:
        available = self.limit - self.in_use
        if count > available:
            LOGGER.debug("Refusing reservation of %d slot(s); %d available", count, available)
            raise AllocationError(requested=count, available=available)
        HeapResource.reserve(self, count)


@dataclass(slots=True)
class OutputBuffer(Generic[T]):
    """Growable buffer whose capacity is reserved from a :class:`MemoryResource`."""

    resource: MemoryResource
    items: list[T] = field(default_factory=list)
    capacity: int = 0

    def ensure_capacity(self, minimum: int) -> None:
        if minimum <= self.capacity:
            return
        new_capacity = self.capacity
        while new_capacity < minimum:
            new_capacity += new_capacity // 2 + 8
        self.resource.reserve(new_capacity - self.capacity)
        self.capacity = new_capacity

    def ensure_exact_capacity(self, minimum: int) -> None:
        if minimum > self.capacity:
            self.resource.reserve(minimum - self.capacity)
            self.capacity = minimum

    def append(self, item: T) -> None:
        self.ensure_capacity(len(self.items) + 1)
        self.items.append(item)

    def to_owned(self) -> list[T]:
        """Shrink to the current length and hand the items to the caller."""

        self.resource.release(self.capacity - len(self.items))
        owned = self.items
        self.items = []
        self.capacity = 0
        return owned

    def discard(self) -> None:
        """Release everything this buffer reserved."""

        self.resource.release(self.capacity)
        self.items = []
        self.capacity = 0


__all__ = [
    "AllocationError",
    "BoundedResource",
    "HeapResource",
    "MemoryResource",
    "OutputBuffer",
]
