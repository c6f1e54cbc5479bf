"""Composable map/filter/take pipelines evaluated in a single fused pass."""

from .memory import AllocationError, BoundedResource, HeapResource, MemoryResource
from .pipelines import Pipeline, PipelineBuilder, from_source, pipeline

__all__ = [
    "AllocationError",
    "BoundedResource",
    "HeapResource",
    "MemoryResource",
    "Pipeline",
    "PipelineBuilder",
    "from_source",
    "pipeline",
]
