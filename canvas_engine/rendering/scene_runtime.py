"""Runtime helpers for rendercanvas-backed canvases."""

from __future__ import annotations

import logging
from typing import Any

from canvas_engine.runtime.config import RenderConfig
from canvas_engine.runtime.errors import BACKEND_WINDOW_ERRORS, log_recoverable

logger = logging.getLogger(__name__)


def load_backend() -> Any:
    """Import `rendercanvas.auto`, raising a readable error without a GUI backend."""
    try:
        import rendercanvas.auto as rc_auto
    except Exception as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw or pyside6."
        ) from exc
    return rc_auto


def create_render_canvas(config: RenderConfig, *, rc_auto: Any) -> Any:
    """Create an on-demand canvas; frames are only drawn when requested."""
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    try:
        return canvas_cls(
            size=(int(config.width), int(config.height)),
            title=config.title,
            update_mode="ondemand",
            min_fps=0.0,
            max_fps=float(config.max_fps),
        )
    except TypeError:
        return canvas_cls(size=(int(config.width), int(config.height)), title=config.title)


def get_canvas_logical_size(canvas: Any) -> tuple[float, float] | None:
    """Read logical canvas size from backend in a tolerant way."""
    get_logical_size = getattr(canvas, "get_logical_size", None)
    if not callable(get_logical_size):
        return None
    try:
        size = get_logical_size()
    except BACKEND_WINDOW_ERRORS:
        log_recoverable(logger, "canvas_logical_size_unavailable")
        return None
    if not (isinstance(size, (tuple, list)) and len(size) >= 2):
        return None
    width, height = size[0], size[1]
    if not isinstance(width, (int, float)) or not isinstance(height, (int, float)):
        return None
    return float(width), float(height)


def set_canvas_title(canvas: Any, title: str) -> None:
    setter = getattr(canvas, "set_title", None)
    if not callable(setter):
        return
    try:
        setter(title)
    except BACKEND_WINDOW_ERRORS:
        log_recoverable(logger, "canvas_set_title_failed")


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas loop entrypoint."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")
