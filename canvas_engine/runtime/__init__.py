"""Canvas runtime modules."""

from canvas_engine.api.events import Subscription
from canvas_engine.runtime.config import (
    CanvasConfig,
    InputConfig,
    RenderConfig,
    ViewportConfig,
    load_canvas_config,
)
from canvas_engine.runtime.events import EventBus, RuntimeEventBus
from canvas_engine.runtime.logging import configure_logging, setup_logging, shutdown_logging
from canvas_engine.runtime.rate_limit import Debouncer, Throttler
from canvas_engine.runtime.render_scheduler import RenderScheduler
from canvas_engine.runtime.scheduler import Scheduler

__all__ = [
    "CanvasConfig",
    "Debouncer",
    "EventBus",
    "InputConfig",
    "RenderConfig",
    "RenderScheduler",
    "RuntimeEventBus",
    "Scheduler",
    "Subscription",
    "Throttler",
    "ViewportConfig",
    "configure_logging",
    "load_canvas_config",
    "setup_logging",
    "shutdown_logging",
]
