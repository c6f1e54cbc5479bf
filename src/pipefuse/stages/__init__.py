"""Pipeline stage descriptors."""

from .base import FilterStage, MapStage, Stage, StageKind, TakeStage

__all__ = ["FilterStage", "MapStage", "Stage", "StageKind", "TakeStage"]
