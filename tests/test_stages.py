from __future__ import annotations

import pytest

from pipefuse import from_source
from pipefuse.functions import add, odd
from pipefuse.stages import FilterStage, MapStage, StageKind, TakeStage


def test_stage_kinds_match_payload() -> None:
    assert MapStage.of(add(1)).kind is StageKind.MAP
    assert FilterStage.of(odd()).kind is StageKind.FILTER
    assert TakeStage.of(2).kind is StageKind.TAKE


def test_map_stage_wraps_single_transform_in_tuple() -> None:
    transform = add(1)
    assert MapStage.of(transform).transforms == (transform,)
    assert MapStage.of([transform, transform]).apply(0) == 2


def test_stages_are_immutable() -> None:
    stage = TakeStage.of(3)
    with pytest.raises(AttributeError):
        stage.limit = 4  # type: ignore[misc]


@pytest.mark.parametrize("limit", [-1, -10])
def test_take_rejects_negative_limit(limit: int) -> None:
    with pytest.raises(ValueError):
        from_source([1]).take(limit)


@pytest.mark.parametrize("limit", [1.5, "2", True])
def test_take_rejects_non_integer_limit(limit: object) -> None:
    with pytest.raises(TypeError):
        from_source([1]).take(limit)  # type: ignore[arg-type]


def test_map_and_filter_reject_non_callables() -> None:
    with pytest.raises(TypeError):
        from_source([1]).map(5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        from_source([1]).map([add(1), "nope"])  # type: ignore[list-item]
    with pytest.raises(TypeError):
        from_source([1]).filter(None)  # type: ignore[arg-type]
