"""Pipeline construction and evaluation."""

from .base import Pipeline, PipelineBuilder, from_source, pipeline

__all__ = ["Pipeline", "PipelineBuilder", "from_source", "pipeline"]
