"""Viewport and resize math helpers for scene rendering."""

from __future__ import annotations

from canvas_engine.api.geometry import Rect


def extract_resize_dimensions(event: dict[str, object]) -> tuple[float | None, float | None]:
    """Extract width/height from heterogeneous resize payloads."""
    width = event.get("width")
    height = event.get("height")
    if isinstance(width, (int, float)) and isinstance(height, (int, float)):
        return float(width), float(height)

    size = event.get("size")
    if isinstance(size, (tuple, list)) and len(size) >= 2:
        w = size[0]
        h = size[1]
        if isinstance(w, (int, float)) and isinstance(h, (int, float)):
            return float(w), float(h)

    logical_size = event.get("logical_size")
    if isinstance(logical_size, (tuple, list)) and len(logical_size) >= 2:
        w = logical_size[0]
        h = logical_size[1]
        if isinstance(w, (int, float)) and isinstance(h, (int, float)):
            return float(w), float(h)
    return None, None


def visible_rect(
    *,
    scale: float,
    translation_x: float,
    translation_y: float,
    width: float,
    height: float,
) -> Rect:
    """Return the scene-space rectangle currently shown on screen."""
    return Rect(
        x=-translation_x / scale,
        y=-translation_y / scale,
        width=width / scale,
        height=height / scale,
    )


def to_scene_space(
    *,
    x: float,
    y: float,
    scale: float,
    translation_x: float,
    translation_y: float,
) -> tuple[float, float]:
    """Convert screen coordinates to scene coordinates."""
    return (x - translation_x) / scale, (y - translation_y) / scale


def to_screen_space(
    *,
    x: float,
    y: float,
    scale: float,
    translation_x: float,
    translation_y: float,
) -> tuple[float, float]:
    """Convert scene coordinates to screen coordinates."""
    return x * scale + translation_x, y * scale + translation_y


def zoom_translation(
    *,
    focal_x: float,
    focal_y: float,
    old_scale: float,
    new_scale: float,
    translation_x: float,
    translation_y: float,
) -> tuple[float, float]:
    """Return the translation that keeps the focal point fixed across a scale change."""
    scene_x, scene_y = to_scene_space(
        x=focal_x,
        y=focal_y,
        scale=old_scale,
        translation_x=translation_x,
        translation_y=translation_y,
    )
    return focal_x - scene_x * new_scale, focal_y - scene_y * new_scale


def clamp_scale(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))
