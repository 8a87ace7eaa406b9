"""Boundary contracts for the external rendering surface."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from canvas_engine.api.layers import LayerName

FrameCallback = Callable[[], None]


class RenderSurface(Protocol):
    """Opaque sink that flushes one layer's pending visual changes."""

    def draw(self, layer: LayerName) -> None:
        """Draw one layer."""


class FrameSource(Protocol):
    """Display-refresh callback registration."""

    def request_frame(self, callback: FrameCallback) -> None:
        """Run `callback` once on the next display refresh."""


__all__ = ["FrameCallback", "FrameSource", "RenderSurface"]
