"""Configuration helpers for pipefuse."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .memory import BoundedResource, HeapResource, MemoryResource

CONFIG_ENV_VAR = "PIPEFUSE_CONFIG"
LOG_LEVELS = ("ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(slots=True)
class EngineConfig:
    """Simple configuration container for pipeline evaluation."""

    raw: Mapping[str, Any]

    @property
    def max_elements(self) -> int | None:
        """Upper bound on output slots, or ``None`` for an unbounded resource."""

        value = self.raw.get("max_elements")
        if value is None:
            return None
        try:
            limit = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"max_elements must be an integer, got {value!r}") from exc
        if limit < 0:
            raise ValueError(f"max_elements must be non-negative, got {limit}")
        return limit

    @property
    def log_level(self) -> str:
        level = str(self.raw.get("log_level", "INFO")).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
        return level

    def validate(self) -> "EngineConfig":
        """Raise :class:`ValueError` if any setting is unusable."""

        self.max_elements
        self.log_level
        return self

    def resource(self) -> MemoryResource:
        limit = self.max_elements
        if limit is None:
            return HeapResource()
        return BoundedResource(limit=limit)


def load_config(overrides: Mapping[str, Any] | None = None, path: Path | None = None) -> EngineConfig:
    """Load configuration from a JSON file and apply ``overrides`` on top.

    The file is taken from ``path`` or, when that is not given, from the
    ``PIPEFUSE_CONFIG`` environment variable. Keys whose override value is
    ``None`` are left as loaded. Invalid values raise :class:`ValueError`.
    """

    raw: dict[str, Any] = {}
    if path is None and os.environ.get(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
    if path is not None:
        loaded = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(loaded, Mapping):
            raise ValueError(f"Configuration file {path} must contain a JSON object")
        raw.update(loaded)
    for key, value in (overrides or {}).items():
        if value is not None:
            raw[key] = value
    return EngineConfig(raw=raw).validate()


__all__ = ["CONFIG_ENV_VAR", "LOG_LEVELS", "EngineConfig", "load_config"]
