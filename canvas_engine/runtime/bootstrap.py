"""Composition root for the canvas engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import monotonic

from canvas_engine.api.events import CameraChanged
from canvas_engine.api.geometry import Rect
from canvas_engine.api.layers import DYNAMIC_LAYER, LAYER_ORDER, STATIC_LAYER, LayerName
from canvas_engine.api.surface import FrameSource, RenderSurface
from canvas_engine.input.input_adapter import InputEventAdapter
from canvas_engine.runtime.config import CanvasConfig, load_canvas_config
from canvas_engine.runtime.events import RuntimeEventBus
from canvas_engine.runtime.logging import setup_logging, shutdown_logging
from canvas_engine.runtime.render_scheduler import RenderScheduler
from canvas_engine.runtime.scheduler import Scheduler
from canvas_engine.scene.culling import VisibilityCuller
from canvas_engine.scene.graph import Node, SceneGraph
from canvas_engine.viewport.controller import Camera, ViewportController

logger = logging.getLogger(__name__)

BACKGROUND_NODE_ID = "background"
SQUARE_NODE_ID = "square"
SQUARE_SIZE = 100.0


@dataclass(slots=True)
class CanvasRuntime:
    """Explicitly owned canvas components, wired once."""

    config: CanvasConfig
    scheduler: Scheduler
    events: RuntimeEventBus
    graph: SceneGraph
    culler: VisibilityCuller
    render_scheduler: RenderScheduler
    controller: ViewportController
    input: InputEventAdapter

    def add_shape(self, layer: LayerName, node: Node) -> Node:
        """Insert a node, cull it against the current view and schedule a redraw."""
        self.graph.add_node(layer, node)
        if node.layer == DYNAMIC_LAYER:
            self.culler.cull_node(node, self.controller.visible_rect())
        self.render_scheduler.request_redraw(layer)
        return node

    def remove_shape(self, layer: LayerName, node_id: str) -> Node:
        node = self.graph.remove_node(layer, node_id)
        self.render_scheduler.request_redraw(layer)
        return node

    def redraw_all(self) -> None:
        for layer in LAYER_ORDER:
            self.render_scheduler.request_redraw(layer)

    def pump_timers(self) -> bool:
        """Run due timers; True while more timers are queued."""
        self.scheduler.pump()
        return self.scheduler.queued_task_count > 0

    def close(self) -> None:
        self.input.close()


def create_canvas_runtime(
    *,
    surface: RenderSurface,
    frames: FrameSource,
    graph: SceneGraph | None = None,
    config: CanvasConfig | None = None,
    scheduler: Scheduler | None = None,
    events: RuntimeEventBus | None = None,
    size: tuple[float, float] | None = None,
) -> CanvasRuntime:
    """Build the canvas object graph around an existing surface and frame source."""
    cfg = config or CanvasConfig()
    timer_scheduler = scheduler or Scheduler()
    bus = events or RuntimeEventBus()
    scene_graph = graph or SceneGraph()
    culler = VisibilityCuller()
    render_scheduler = RenderScheduler(
        surface,
        frames,
        timer_scheduler,
        resize_debounce_ms=cfg.render.resize_debounce_ms,
        events=bus,
    )
    width, height = size or (float(cfg.render.width), float(cfg.render.height))
    controller = ViewportController(
        width=width,
        height=height,
        graph=scene_graph,
        culler=culler,
        render_scheduler=render_scheduler,
        config=cfg.viewport,
        events=bus,
    )
    adapter = InputEventAdapter(
        controller=controller,
        graph=scene_graph,
        culler=culler,
        render_scheduler=render_scheduler,
        config=cfg.input,
    )
    return CanvasRuntime(
        config=cfg,
        scheduler=timer_scheduler,
        events=bus,
        graph=scene_graph,
        culler=culler,
        render_scheduler=render_scheduler,
        controller=controller,
        input=adapter,
    )


def seed_default_scene(runtime: CanvasRuntime) -> None:
    """Full-window background plus one square centered in the viewport."""
    width, height = runtime.controller.size
    runtime.add_shape(
        STATIC_LAYER,
        Node(
            BACKGROUND_NODE_ID,
            Rect(0.0, 0.0, width, height),
            payload={"color": runtime.config.render.background_color},
        ),
    )
    half = SQUARE_SIZE / 2.0
    runtime.add_shape(
        DYNAMIC_LAYER,
        Node(
            SQUARE_NODE_ID,
            Rect(width / 2.0 - half, height / 2.0 - half, SQUARE_SIZE, SQUARE_SIZE),
            payload={"color": "#0000ff"},
        ),
    )


def track_window_size(runtime: CanvasRuntime) -> None:
    """Keep the static background sized to the viewport after resizes."""

    def _on_camera_changed(event: CameraChanged) -> None:
        if event.reason != "resize":
            return
        background = runtime.graph.get(BACKGROUND_NODE_ID)
        if background is not None:
            background.bounds = Rect(0.0, 0.0, event.width, event.height)

    runtime.events.subscribe(CameraChanged, _on_camera_changed)


def format_title(title: str, zoom_percent: int) -> str:
    return f"{title} - {zoom_percent}%"


def run_canvas_app(config: CanvasConfig | None = None) -> None:
    """Open a pygfx window and run the interactive canvas until it closes."""
    from canvas_engine.rendering.pygfx_surface import PygfxSurface
    from canvas_engine.rendering.scene_runtime import (
        create_render_canvas,
        get_canvas_logical_size,
        load_backend,
        run_backend_loop,
        set_canvas_title,
    )

    setup_logging()
    cfg = config or load_canvas_config()
    rc_auto = load_backend()
    canvas = create_render_canvas(cfg.render, rc_auto=rc_auto)
    width, height = get_canvas_logical_size(canvas) or (
        float(cfg.render.width),
        float(cfg.render.height),
    )

    def camera_source() -> Camera:
        return runtime.controller.camera

    graph = SceneGraph()
    surface = PygfxSurface(
        graph=graph,
        camera_source=camera_source,
        canvas=canvas,
        width=width,
        height=height,
    )
    runtime = create_canvas_runtime(
        surface=surface,
        frames=surface,
        graph=graph,
        config=cfg,
        scheduler=Scheduler(time_source=monotonic),
        size=(width, height),
    )
    seed_default_scene(runtime)
    track_window_size(runtime)
    runtime.events.subscribe(
        CameraChanged,
        lambda _event: set_canvas_title(
            canvas, format_title(cfg.render.title, runtime.controller.zoom_percent)
        ),
    )
    set_canvas_title(canvas, format_title(cfg.render.title, runtime.controller.zoom_percent))
    surface.add_tick_hook(runtime.pump_timers)
    runtime.input.bind(canvas)
    runtime.redraw_all()
    logger.info("canvas_started size=(%.0f,%.0f) scale=%.2f", width, height, runtime.controller.scale)
    try:
        run_backend_loop(rc_auto)
    finally:
        runtime.close()
        surface.close()
        shutdown_logging()


__all__ = [
    "BACKGROUND_NODE_ID",
    "CanvasRuntime",
    "SQUARE_NODE_ID",
    "create_canvas_runtime",
    "format_title",
    "run_canvas_app",
    "seed_default_scene",
    "track_window_size",
]
