"""Pointer, wheel, key and resize input mapped onto camera operations."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from canvas_engine.api.input_events import KeyEvent, PointerEvent, ResizeEvent, WheelEvent
from canvas_engine.api.layers import DYNAMIC_LAYER
from canvas_engine.rendering.scene_viewport import extract_resize_dimensions
from canvas_engine.runtime.config import InputConfig
from canvas_engine.runtime.rate_limit import Debouncer, Throttler
from canvas_engine.runtime.render_scheduler import RenderScheduler
from canvas_engine.scene.culling import VisibilityCuller
from canvas_engine.scene.graph import SceneGraph
from canvas_engine.viewport.controller import ViewportController

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 1
ZOOM_IN_KEYS = frozenset({"+", "="})
ZOOM_OUT_KEYS = frozenset({"-", "_"})

InputEvent = PointerEvent | KeyEvent | WheelEvent | ResizeEvent


@dataclass(slots=True)
class DragSession:
    """Transient drag state; `target_id` is None when the stage itself is dragged."""

    target_id: str | None
    last_x: float
    last_y: float
    active: bool = True


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class InputEventAdapter:
    """Translate raw input into viewport and render scheduler calls.

    The host event source is expected to suppress its own default wheel
    scrolling before events reach `handle_wheel`.
    """

    def __init__(
        self,
        *,
        controller: ViewportController,
        graph: SceneGraph,
        culler: VisibilityCuller,
        render_scheduler: RenderScheduler,
        config: InputConfig | None = None,
    ) -> None:
        self._controller = controller
        self._graph = graph
        self._culler = culler
        self._render_scheduler = render_scheduler
        self._config = config or InputConfig()
        self._drag: DragSession | None = None
        self._resize: Debouncer = render_scheduler.schedule_resize(self._apply_resize)
        self._wheel_throttle: Throttler | None = None
        if self._config.wheel_throttle_ms > 0.0:
            self._wheel_throttle = render_scheduler.throttle(
                self._apply_wheel, self._config.wheel_throttle_ms
            )

    @property
    def drag_session(self) -> DragSession | None:
        return self._drag

    @property
    def resize_pending(self) -> bool:
        return self._resize.pending

    def bind(self, canvas: Any) -> None:
        """Attach listeners to a rendercanvas-style canvas."""
        if not hasattr(canvas, "add_event_handler"):
            raise RuntimeError("Canvas does not support event handlers.")
        canvas.add_event_handler(self._on_pointer_down, "pointer_down")
        canvas.add_event_handler(self._on_pointer_move, "pointer_move")
        canvas.add_event_handler(self._on_pointer_up, "pointer_up")
        canvas.add_event_handler(self._on_wheel, "wheel")
        canvas.add_event_handler(self._on_resize, "resize")
        canvas.add_event_handler(self._on_char, "char")

    def consume(self, events: Iterable[InputEvent]) -> None:
        """Dispatch already-normalized input events in order."""
        for event in events:
            if isinstance(event, WheelEvent):
                self.handle_wheel(event.x, event.y, event.dy)
            elif isinstance(event, PointerEvent):
                if event.event_type == "pointer_down":
                    self.handle_pointer_down(event.x, event.y, event.button)
                elif event.event_type == "pointer_move":
                    self.handle_pointer_move(event.x, event.y)
                elif event.event_type == "pointer_up":
                    self.handle_pointer_up(event.x, event.y, event.button)
            elif isinstance(event, ResizeEvent):
                self.handle_resize(event.width, event.height)
            elif isinstance(event, KeyEvent) and event.event_type in {"key_down", "char"}:
                self.handle_key(event.value)

    def handle_wheel(self, x: float | None, y: float | None, dy: float) -> None:
        """Zoom out for positive deltas, in for negative ones, around the pointer."""
        if x is None or y is None or not _is_number(x) or not _is_number(y):
            logger.debug("wheel_ignored reason=no_pointer")
            return
        if not _is_number(dy) or dy == 0:
            return
        if self._wheel_throttle is not None:
            self._wheel_throttle(float(x), float(y), float(dy))
            return
        self._apply_wheel(float(x), float(y), float(dy))

    def handle_pointer_down(self, x: float, y: float, button: int) -> None:
        if button != PRIMARY_BUTTON or self._drag is not None:
            return
        if not _is_number(x) or not _is_number(y):
            return
        scene_x, scene_y = self._controller.to_scene(x, y)
        node = self._graph.hit_test(DYNAMIC_LAYER, scene_x, scene_y)
        if node is not None:
            self._drag = DragSession(target_id=node.node_id, last_x=x, last_y=y)
        elif self._config.stage_draggable:
            self._drag = DragSession(target_id=None, last_x=x, last_y=y)
        else:
            return
        logger.debug("drag_start target=%s x=%.1f y=%.1f", self._drag.target_id, x, y)

    def handle_pointer_move(self, x: float, y: float) -> None:
        drag = self._drag
        if drag is None or not drag.active:
            return
        if not _is_number(x) or not _is_number(y):
            return
        dx = x - drag.last_x
        dy = y - drag.last_y
        drag.last_x = x
        drag.last_y = y
        if dx == 0 and dy == 0:
            return
        if drag.target_id is None:
            self._controller.pan_by(dx, dy)
            return
        node = self._graph.get(drag.target_id)
        if node is None:
            logger.debug("drag_target_removed id=%s", drag.target_id)
            self._drag = None
            return
        scale = self._controller.scale
        self._graph.move_node(node.node_id, dx / scale, dy / scale)
        self._culler.cull_node(node, self._controller.visible_rect())
        self._render_scheduler.request_redraw(node.layer or DYNAMIC_LAYER)

    def handle_pointer_up(self, x: float, y: float, button: int) -> None:
        _ = (x, y)
        drag = self._drag
        if drag is None or button not in {PRIMARY_BUTTON, 0}:
            return
        drag.active = False
        self._drag = None
        logger.debug("drag_end target=%s", drag.target_id)
        self._render_scheduler.flush(DYNAMIC_LAYER)

    def handle_resize(self, width: float, height: float) -> None:
        if not _is_number(width) or not _is_number(height):
            return
        self._resize(float(width), float(height))

    def handle_key(self, key: str) -> None:
        if key in ZOOM_IN_KEYS:
            self._controller.zoom_in()
        elif key in ZOOM_OUT_KEYS:
            self._controller.zoom_out()

    def close(self) -> None:
        """Cancel pending resize/wheel timers and drop any drag session."""
        self._resize.cancel()
        if self._wheel_throttle is not None:
            self._wheel_throttle.cancel()
        self._drag = None

    def _apply_wheel(self, x: float, y: float, dy: float) -> None:
        direction = "out" if dy > 0 else "in"
        self._controller.zoom(
            direction, (x, y), step=self._controller.config.wheel_zoom_step
        )
        self._render_scheduler.request_redraw(DYNAMIC_LAYER)

    def _apply_resize(self, width: float, height: float) -> None:
        logger.debug("resize_applied size=(%.0f,%.0f)", width, height)
        self._controller.resize(width, height)

    def _on_pointer_down(self, event: dict[str, Any]) -> None:
        if event.get("event_type") != "pointer_down":
            return
        x, y, button = event.get("x"), event.get("y"), event.get("button")
        if not _is_number(x) or not _is_number(y) or not isinstance(button, int):
            return
        self.handle_pointer_down(float(x), float(y), button)

    def _on_pointer_move(self, event: dict[str, Any]) -> None:
        if event.get("event_type") != "pointer_move":
            return
        x, y = event.get("x"), event.get("y")
        if not _is_number(x) or not _is_number(y):
            return
        self.handle_pointer_move(float(x), float(y))

    def _on_pointer_up(self, event: dict[str, Any]) -> None:
        if event.get("event_type") != "pointer_up":
            return
        x, y, button = event.get("x"), event.get("y"), event.get("button")
        if not isinstance(button, int):
            button = 0
        self.handle_pointer_up(
            float(x) if _is_number(x) else 0.0,
            float(y) if _is_number(y) else 0.0,
            button,
        )

    def _on_wheel(self, event: dict[str, Any]) -> None:
        if event.get("event_type") != "wheel":
            return
        x, y, dy = event.get("x"), event.get("y"), event.get("dy")
        if not _is_number(dy):
            return
        self.handle_wheel(
            float(x) if _is_number(x) else None,
            float(y) if _is_number(y) else None,
            float(dy),
        )

    def _on_resize(self, event: dict[str, Any]) -> None:
        width, height = extract_resize_dimensions(event)
        if width is None or height is None:
            return
        self.handle_resize(width, height)

    def _on_char(self, event: dict[str, Any]) -> None:
        if event.get("event_type") != "char":
            return
        data = event.get("data")
        if isinstance(data, str):
            self.handle_key(data)


__all__ = ["DragSession", "InputEvent", "InputEventAdapter"]
