"""Input translation."""

from canvas_engine.input.input_adapter import DragSession, InputEventAdapter

__all__ = ["DragSession", "InputEventAdapter"]
