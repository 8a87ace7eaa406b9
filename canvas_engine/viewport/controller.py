"""Camera state and the zoom/pan/resize transitions that mutate it."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal

from canvas_engine.api.events import CameraChanged, EventBus
from canvas_engine.api.geometry import Rect
from canvas_engine.api.layers import DYNAMIC_LAYER, LAYER_ORDER, LayerName
from canvas_engine.rendering.scene_viewport import (
    clamp_scale,
    to_scene_space,
    to_screen_space,
    visible_rect,
    zoom_translation,
)
from canvas_engine.runtime.config import ViewportConfig
from canvas_engine.runtime.render_scheduler import RenderScheduler
from canvas_engine.scene.culling import VisibilityCuller
from canvas_engine.scene.graph import SceneGraph

ZoomDirection = Literal["in", "out"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Camera:
    """Immutable camera snapshot: `screen = scene * scale + translation`."""

    scale: float
    translation_x: float
    translation_y: float
    width: float
    height: float

    def visible_rect(self) -> Rect:
        return visible_rect(
            scale=self.scale,
            translation_x=self.translation_x,
            translation_y=self.translation_y,
            width=self.width,
            height=self.height,
        )


def _finite(*values: float) -> bool:
    return all(math.isfinite(value) for value in values)


class ViewportController:
    """Single owner of the camera.

    Every mutation clamps the scale into the configured bounds, re-culls the
    dynamic layer synchronously against the new visible rectangle, and asks the
    render scheduler for a coalesced redraw.
    """

    def __init__(
        self,
        *,
        width: float,
        height: float,
        graph: SceneGraph,
        culler: VisibilityCuller,
        render_scheduler: RenderScheduler,
        config: ViewportConfig | None = None,
        events: EventBus | None = None,
    ) -> None:
        cfg = config or ViewportConfig()
        if cfg.min_scale <= 0.0 or cfg.max_scale < cfg.min_scale:
            raise ValueError(
                f"invalid zoom bounds min_scale={cfg.min_scale} max_scale={cfg.max_scale}"
            )
        self._config = cfg
        self._graph = graph
        self._culler = culler
        self._render_scheduler = render_scheduler
        self._events = events
        self._scale = clamp_scale(cfg.initial_scale, cfg.min_scale, cfg.max_scale)
        self._translation_x = 0.0
        self._translation_y = 0.0
        self._width = self._sanitize_size(width, 1.0)
        self._height = self._sanitize_size(height, 1.0)

    @property
    def config(self) -> ViewportConfig:
        return self._config

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def translation(self) -> tuple[float, float]:
        return self._translation_x, self._translation_y

    @property
    def size(self) -> tuple[float, float]:
        return self._width, self._height

    @property
    def camera(self) -> Camera:
        return Camera(
            scale=self._scale,
            translation_x=self._translation_x,
            translation_y=self._translation_y,
            width=self._width,
            height=self._height,
        )

    @property
    def zoom_percent(self) -> int:
        """Zoom level as shown to users, e.g. 91 for a scale of 1/1.1."""
        return int(math.floor(self._scale * 100.0 + 0.5))

    def visible_rect(self) -> Rect:
        return self.camera.visible_rect()

    def to_scene(self, x: float, y: float) -> tuple[float, float]:
        return to_scene_space(
            x=x,
            y=y,
            scale=self._scale,
            translation_x=self._translation_x,
            translation_y=self._translation_y,
        )

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return to_screen_space(
            x=x,
            y=y,
            scale=self._scale,
            translation_x=self._translation_x,
            translation_y=self._translation_y,
        )

    def zoom(
        self,
        direction: ZoomDirection,
        focal_point: tuple[float, float] | None = None,
        *,
        step: float | None = None,
    ) -> bool:
        """Zoom by one step around `focal_point` (viewport center when omitted).

        Returns False when the scale is already saturated at a bound; the
        dynamic layer is still re-culled and redrawn, but no event is published.
        """
        if direction not in ("in", "out"):
            raise ValueError(f"unknown zoom direction: {direction!r}")
        k = self._config.button_zoom_step
        if step is not None and _finite(step) and step > 1.0:
            k = step
        factor = k if direction == "in" else 1.0 / k
        old_scale = self._scale
        new_scale = clamp_scale(old_scale * factor, self._config.min_scale, self._config.max_scale)
        if new_scale == old_scale:
            logger.debug("viewport_zoom_saturated scale=%.4f direction=%s", old_scale, direction)
            self._refresh((DYNAMIC_LAYER,))
            return False
        focal_x, focal_y = self._resolve_focal_point(focal_point)
        translation_x, translation_y = zoom_translation(
            focal_x=focal_x,
            focal_y=focal_y,
            old_scale=old_scale,
            new_scale=new_scale,
            translation_x=self._translation_x,
            translation_y=self._translation_y,
        )
        self._scale = new_scale
        self._translation_x = translation_x
        self._translation_y = translation_y
        self._after_change("zoom", (DYNAMIC_LAYER,))
        return True

    def zoom_in(self) -> bool:
        return self.zoom("in")

    def zoom_out(self) -> bool:
        return self.zoom("out")

    def pan_by(self, dx: float, dy: float) -> bool:
        """Move the camera by a screen-space delta; panning is unbounded."""
        if not _finite(dx, dy) or (dx == 0.0 and dy == 0.0):
            return False
        self._translation_x += dx
        self._translation_y += dy
        self._after_change("pan", (DYNAMIC_LAYER,))
        return True

    def set_translation(self, translation_x: float, translation_y: float) -> bool:
        if not _finite(translation_x, translation_y):
            return False
        self._translation_x = translation_x
        self._translation_y = translation_y
        self._after_change("pan", (DYNAMIC_LAYER,))
        return True

    def resize(self, width: float, height: float) -> bool:
        """Update viewport pixel size; scale and translation are untouched."""
        if not _finite(width, height):
            return False
        self._width = self._sanitize_size(width, self._width)
        self._height = self._sanitize_size(height, self._height)
        self._after_change("resize", LAYER_ORDER)
        return True

    def _resolve_focal_point(self, focal_point: tuple[float, float] | None) -> tuple[float, float]:
        if focal_point is not None:
            x, y = focal_point
            if _finite(x, y):
                return float(x), float(y)
        return self._width / 2.0, self._height / 2.0

    @staticmethod
    def _sanitize_size(value: float, fallback: float) -> float:
        if not math.isfinite(value):
            return fallback
        return max(1.0, float(value))

    def _refresh(self, layers: tuple[LayerName, ...]) -> None:
        self._culler.cull_layer(self._graph, DYNAMIC_LAYER, self.visible_rect())
        for layer in layers:
            self._render_scheduler.request_redraw(layer)

    def _after_change(self, reason: str, layers: tuple[LayerName, ...]) -> None:
        self._refresh(layers)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "viewport_%s scale=%.4f translation=(%.2f,%.2f) size=(%.0f,%.0f)",
                reason,
                self._scale,
                self._translation_x,
                self._translation_y,
                self._width,
                self._height,
            )
        if self._events is not None:
            self._events.publish(
                CameraChanged(
                    scale=self._scale,
                    translation_x=self._translation_x,
                    translation_y=self._translation_y,
                    width=self._width,
                    height=self._height,
                    reason=reason,
                )
            )


__all__ = ["Camera", "ViewportController", "ZoomDirection"]
