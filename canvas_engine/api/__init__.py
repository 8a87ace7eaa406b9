"""Public canvas API contracts."""

from canvas_engine.api.errors import CanvasError, DuplicateNodeError, UnknownLayerError
from canvas_engine.api.events import (
    CameraChanged,
    EventBus,
    LayerDrawn,
    Subscription,
    create_event_bus,
)
from canvas_engine.api.geometry import Rect
from canvas_engine.api.input_events import KeyEvent, PointerEvent, ResizeEvent, WheelEvent
from canvas_engine.api.layers import (
    DYNAMIC_LAYER,
    LAYER_ORDER,
    STATIC_LAYER,
    LayerName,
    require_layer,
)
from canvas_engine.api.logging import LoggingConfig
from canvas_engine.api.surface import FrameCallback, FrameSource, RenderSurface

__all__ = [
    "CameraChanged",
    "CanvasError",
    "DYNAMIC_LAYER",
    "DuplicateNodeError",
    "EventBus",
    "FrameCallback",
    "FrameSource",
    "KeyEvent",
    "LAYER_ORDER",
    "LayerDrawn",
    "LayerName",
    "LoggingConfig",
    "PointerEvent",
    "Rect",
    "RenderSurface",
    "ResizeEvent",
    "STATIC_LAYER",
    "Subscription",
    "UnknownLayerError",
    "WheelEvent",
    "create_event_bus",
    "require_layer",
]
