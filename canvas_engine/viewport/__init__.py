"""Camera model and transitions."""

from canvas_engine.viewport.controller import Camera, ViewportController, ZoomDirection

__all__ = ["Camera", "ViewportController", "ZoomDirection"]
