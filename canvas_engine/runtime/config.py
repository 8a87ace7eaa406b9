"""Canvas runtime configuration sourced from environment variables."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ViewportConfig:
    min_scale: float = 0.5
    max_scale: float = 3.0
    initial_scale: float = 1.0
    button_zoom_step: float = 1.1
    wheel_zoom_step: float = 1.1


@dataclass(frozen=True, slots=True)
class InputConfig:
    wheel_throttle_ms: float = 0.0
    stage_draggable: bool = True


@dataclass(frozen=True, slots=True)
class RenderConfig:
    width: int = 1200
    height: int = 720
    title: str = "Canvas"
    max_fps: float = 60.0
    background_color: str = "#ffffff"
    resize_debounce_ms: float = 100.0


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    input: InputConfig = field(default_factory=InputConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if not math.isfinite(value):
        value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _zoom_step(name: str, default: float, *, env: Mapping[str, str] | None = None) -> float:
    value = _float(name, default, env=env)
    return value if value > 1.0 else float(default)


def load_viewport_config(*, env: Mapping[str, str] | None = None) -> ViewportConfig:
    defaults = ViewportConfig()
    min_scale = _float("CANVAS_MIN_ZOOM", defaults.min_scale, env=env)
    max_scale = _float("CANVAS_MAX_ZOOM", defaults.max_scale, env=env)
    if min_scale <= 0.0 or max_scale < min_scale:
        min_scale, max_scale = defaults.min_scale, defaults.max_scale
    initial_scale = _float("CANVAS_INITIAL_ZOOM", defaults.initial_scale, env=env)
    return ViewportConfig(
        min_scale=min_scale,
        max_scale=max_scale,
        initial_scale=min(max_scale, max(min_scale, initial_scale)),
        button_zoom_step=_zoom_step("CANVAS_BUTTON_ZOOM_STEP", defaults.button_zoom_step, env=env),
        wheel_zoom_step=_zoom_step("CANVAS_WHEEL_ZOOM_STEP", defaults.wheel_zoom_step, env=env),
    )


def load_canvas_config(*, env: Mapping[str, str] | None = None) -> CanvasConfig:
    """Load immutable canvas configuration; invalid values fall back to defaults."""
    render_defaults = RenderConfig()
    input_defaults = InputConfig()
    return CanvasConfig(
        viewport=load_viewport_config(env=env),
        input=InputConfig(
            wheel_throttle_ms=_float(
                "CANVAS_WHEEL_THROTTLE_MS", input_defaults.wheel_throttle_ms, minimum=0.0, env=env
            ),
            stage_draggable=_flag(
                "CANVAS_STAGE_DRAGGABLE", input_defaults.stage_draggable, env=env
            ),
        ),
        render=RenderConfig(
            width=_int("CANVAS_WIDTH", render_defaults.width, minimum=1, env=env),
            height=_int("CANVAS_HEIGHT", render_defaults.height, minimum=1, env=env),
            title=_text("CANVAS_TITLE", render_defaults.title, env=env),
            max_fps=_float("CANVAS_MAX_FPS", render_defaults.max_fps, minimum=1.0, env=env),
            background_color=_text(
                "CANVAS_BACKGROUND_COLOR", render_defaults.background_color, env=env
            ),
            resize_debounce_ms=_float(
                "CANVAS_RESIZE_DEBOUNCE_MS",
                render_defaults.resize_debounce_ms,
                minimum=0.0,
                env=env,
            ),
        ),
    )


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with canvas-prefixed override."""
    value = _raw("CANVAS_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


__all__ = [
    "CanvasConfig",
    "InputConfig",
    "RenderConfig",
    "ViewportConfig",
    "load_canvas_config",
    "load_viewport_config",
    "resolve_log_level_name",
]
