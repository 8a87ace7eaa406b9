"""Per-layer redraw coalescing and input rate limiting."""

from __future__ import annotations

import logging

from canvas_engine.api.events import EventBus, LayerDrawn
from canvas_engine.api.layers import LAYER_ORDER, LayerName, require_layer
from canvas_engine.api.surface import FrameSource, RenderSurface
from canvas_engine.runtime.rate_limit import Debouncer, RateLimitedCallback, Throttler
from canvas_engine.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_RESIZE_DEBOUNCE_MS = 100.0


class RenderScheduler:
    """Collapse redraw requests into at most one draw per layer per frame."""

    def __init__(
        self,
        surface: RenderSurface,
        frames: FrameSource,
        scheduler: Scheduler,
        *,
        resize_debounce_ms: float = DEFAULT_RESIZE_DEBOUNCE_MS,
        events: EventBus | None = None,
    ) -> None:
        self._surface = surface
        self._frames = frames
        self._scheduler = scheduler
        self._resize_debounce_seconds = max(0.0, resize_debounce_ms) / 1000.0
        self._events = events
        self._pending: dict[LayerName, bool] = {layer: False for layer in LAYER_ORDER}
        self._frame_registered = False
        self._frame_index = 0
        self._draw_counts: dict[LayerName, int] = {layer: 0 for layer in LAYER_ORDER}
        self._request_count = 0

    @property
    def frame_registered(self) -> bool:
        return self._frame_registered

    @property
    def request_count(self) -> int:
        """Total redraw requests received, coalesced or not."""
        return self._request_count

    def is_pending(self, layer: LayerName) -> bool:
        return self._pending[require_layer(layer)]

    def draw_count(self, layer: LayerName) -> int:
        return self._draw_counts[require_layer(layer)]

    def request_redraw(self, layer: LayerName) -> None:
        """Mark `layer` dirty and make sure one frame callback is registered."""
        name = require_layer(layer)
        self._request_count += 1
        self._pending[name] = True
        if self._frame_registered:
            return
        self._frame_registered = True
        self._frames.request_frame(self._on_frame)

    def flush(self, layer: LayerName) -> None:
        """Draw `layer` immediately and clear its pending flag."""
        name = require_layer(layer)
        self._pending[name] = False
        self._draw(name)

    def schedule_resize(self, callback: RateLimitedCallback) -> Debouncer:
        """Wrap `callback` so resize bursts run it once after the quiet period."""
        return Debouncer(callback, self._resize_debounce_seconds, scheduler=self._scheduler)

    def throttle(self, callback: RateLimitedCallback, interval_ms: float) -> Throttler:
        """Wrap `callback` so it runs at most once per `interval_ms`."""
        return Throttler(callback, max(0.0, interval_ms) / 1000.0, scheduler=self._scheduler)

    def _on_frame(self) -> None:
        self._frame_registered = False
        self._frame_index += 1
        drawn = 0
        for layer in LAYER_ORDER:
            if not self._pending[layer]:
                continue
            self._pending[layer] = False
            self._draw(layer)
            drawn += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("render_frame index=%d layers_drawn=%d", self._frame_index, drawn)

    def _draw(self, layer: LayerName) -> None:
        self._surface.draw(layer)
        self._draw_counts[layer] += 1
        if self._events is not None:
            self._events.publish(LayerDrawn(layer=layer, frame_index=self._frame_index))


__all__ = ["DEFAULT_RESIZE_DEBOUNCE_MS", "RenderScheduler"]
