"""Interactive 2D canvas viewport with camera, culling and redraw coalescing."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from canvas_engine.runtime.config import CanvasConfig


def run(config: "CanvasConfig | None" = None) -> None:
    """Open the interactive canvas window and block until it closes."""
    from canvas_engine.runtime.bootstrap import run_canvas_app

    run_canvas_app(config)


__all__ = ["run"]
