from __future__ import annotations

import pytest

from canvas_engine.api.errors import CanvasError, UnknownLayerError
from canvas_engine.api.geometry import Rect
from canvas_engine.api.layers import DYNAMIC_LAYER, LAYER_ORDER, STATIC_LAYER, require_layer


def test_layer_order_is_static_then_dynamic() -> None:
    assert LAYER_ORDER == (STATIC_LAYER, DYNAMIC_LAYER)
    assert require_layer("static") == "static"
    assert require_layer("dynamic") == "dynamic"


def test_require_layer_rejects_unknown_names() -> None:
    with pytest.raises(UnknownLayerError) as info:
        require_layer("overlay")
    assert info.value.name == "overlay"
    assert isinstance(info.value, CanvasError)
    assert isinstance(info.value, ValueError)


def test_rect_edges_and_containment_are_inclusive() -> None:
    rect = Rect(10.0, 20.0, 30.0, 40.0)
    assert rect.right == 40.0
    assert rect.bottom == 60.0
    assert rect.contains(10.0, 20.0)
    assert rect.contains(40.0, 60.0)
    assert not rect.contains(40.5, 30.0)


def test_rect_translated_returns_new_rect() -> None:
    rect = Rect(0.0, 0.0, 5.0, 5.0)
    moved = rect.translated(3.0, -2.0)
    assert moved == Rect(3.0, -2.0, 5.0, 5.0)
    assert rect == Rect(0.0, 0.0, 5.0, 5.0)
