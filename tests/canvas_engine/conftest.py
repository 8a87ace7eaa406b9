from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

from canvas_engine.api.layers import LayerName
from canvas_engine.runtime.events import RuntimeEventBus
from canvas_engine.runtime.render_scheduler import RenderScheduler
from canvas_engine.runtime.scheduler import Scheduler
from canvas_engine.scene.culling import VisibilityCuller
from canvas_engine.scene.graph import SceneGraph


class FakeSurface:
    def __init__(self) -> None:
        self.draws: list[LayerName] = []

    def draw(self, layer: LayerName) -> None:
        self.draws.append(layer)


class FakeFrameSource:
    def __init__(self) -> None:
        self.callbacks: list[Callable[[], None]] = []

    def request_frame(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)

    def tick(self) -> int:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()
        return len(callbacks)


class FakeCanvas:
    def __init__(self, size: tuple[float, float] = (800.0, 600.0)) -> None:
        self.handlers: dict[str, list[Callable[[dict[str, Any]], None]]] = {}
        self.draw_function: Callable[[], None] | None = None
        self.draw_requests = 0
        self.title: str | None = None
        self.closed = False
        self._size = size

    def add_event_handler(self, handler: Callable[[dict[str, Any]], None], event_type: str) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: dict[str, Any]) -> None:
        for handler in self.handlers.get(str(event["event_type"]), []):
            handler(event)

    def request_draw(self, draw_function: Callable[[], None] | None = None) -> None:
        if draw_function is not None:
            self.draw_function = draw_function
            return
        self.draw_requests += 1

    def get_logical_size(self) -> tuple[float, float]:
        return self._size

    def set_title(self, title: str) -> None:
        self.title = title

    def close(self) -> None:
        self.closed = True


class ManualClock:
    def __init__(self, start: float = 0.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value


class Harness:
    def __init__(self) -> None:
        self.scheduler = Scheduler()
        self.surface = FakeSurface()
        self.frames = FakeFrameSource()
        self.events = RuntimeEventBus()
        self.graph = SceneGraph()
        self.culler = VisibilityCuller()
        self.render_scheduler = RenderScheduler(
            self.surface,
            self.frames,
            self.scheduler,
            events=self.events,
        )


class _Local:
    def __init__(self) -> None:
        self.position = (0.0, 0.0, 0.0)
        self.scale = (1.0, 1.0, 1.0)
        self.scale_y = 1.0


class _Group:
    def __init__(self) -> None:
        self.children: list[Any] = []
        self.local = _Local()

    def add(self, node: Any) -> None:
        self.children.append(node)

    def remove(self, node: Any) -> None:
        self.children.remove(node)


class _Scene(_Group):
    pass


class _Mesh:
    def __init__(self, geometry: Any, material: Any) -> None:
        self.geometry = geometry
        self.material = material
        self.local = SimpleNamespace(position=(0.0, 0.0, 0.0))
        self.visible = True


class _MeshBasicMaterial:
    def __init__(self, color: Any) -> None:
        self.color = color


class _OrthographicCamera:
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.local = _Local()


class _Renderer:
    def __init__(self, canvas: Any) -> None:
        self.canvas = canvas
        self.renders: list[tuple[Any, Any]] = []

    def render(self, scene: Any, camera: Any) -> None:
        self.renders.append((scene, camera))


class FakeGfx:
    Group = _Group
    Scene = _Scene
    Mesh = _Mesh
    MeshBasicMaterial = _MeshBasicMaterial
    OrthographicCamera = _OrthographicCamera
    WgpuRenderer = _Renderer

    @staticmethod
    def plane_geometry(w: float, h: float) -> tuple[str, float, float]:
        return ("plane", w, h)
