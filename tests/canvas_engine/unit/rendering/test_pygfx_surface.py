from __future__ import annotations

import logging

import pytest

from canvas_engine.api.errors import UnknownLayerError
from canvas_engine.api.geometry import Rect
from canvas_engine.rendering.pygfx_surface import DEFAULT_NODE_COLOR, PygfxSurface
from canvas_engine.scene.graph import Node, SceneGraph
from canvas_engine.viewport.controller import Camera
from tests.canvas_engine.conftest import FakeCanvas, FakeGfx


class _CameraBox:
    def __init__(self) -> None:
        self.camera = Camera(scale=1.0, translation_x=0.0, translation_y=0.0, width=800.0, height=600.0)

    def __call__(self) -> Camera:
        return self.camera


def _surface(graph: SceneGraph | None = None) -> tuple[PygfxSurface, FakeCanvas, _CameraBox]:
    canvas = FakeCanvas()
    camera = _CameraBox()
    surface = PygfxSurface(
        graph=graph or SceneGraph(),
        camera_source=camera,
        canvas=canvas,
        width=800.0,
        height=600.0,
        gfx_module=FakeGfx,
    )
    return surface, canvas, camera


def test_surface_builds_one_group_per_layer_and_screen_projection() -> None:
    surface, canvas, _ = _surface()

    assert len(surface.scene.children) == 2
    assert canvas.draw_function is not None
    assert (surface.camera.width, surface.camera.height) == (800.0, 600.0)
    assert surface.camera.local.position == (400.0, 300.0, 0.0)
    assert surface.camera.local.scale_y == -1.0


def test_draw_creates_retained_meshes_for_layer_nodes() -> None:
    graph = SceneGraph()
    graph.add_node("dynamic", Node("a", Rect(10.0, 20.0, 100.0, 50.0), payload={"color": "#ff0000"}))
    hidden = graph.add_node("dynamic", Node("b", Rect(500.0, 500.0, 10.0, 10.0)))
    hidden.visible = False
    surface, canvas, _ = _surface(graph)

    surface.draw("dynamic")

    mesh = surface.mesh_for("a")
    assert mesh is not None
    assert mesh.geometry == ("plane", 100.0, 50.0)
    assert mesh.material.color == "#ff0000"
    assert mesh.local.position == (60.0, 45.0, 0.0)
    assert mesh.visible is True
    other = surface.mesh_for("b")
    assert other is not None
    assert other.visible is False
    assert other.material.color == DEFAULT_NODE_COLOR
    assert canvas.draw_requests == 1

    surface.draw("dynamic")
    assert surface.mesh_for("a") is mesh


def test_static_meshes_sit_behind_dynamic_ones() -> None:
    graph = SceneGraph()
    graph.add_node("static", Node("bg", Rect(0.0, 0.0, 800.0, 600.0)))
    surface, _, _ = _surface(graph)

    surface.draw("static")

    mesh = surface.mesh_for("bg")
    assert mesh is not None
    assert mesh.local.position[2] < 0.0


def test_mesh_updates_only_changed_properties() -> None:
    graph = SceneGraph()
    node = graph.add_node("dynamic", Node("a", Rect(0.0, 0.0, 10.0, 10.0), payload={"color": "#000000"}))
    surface, _, _ = _surface(graph)
    surface.draw("dynamic")
    mesh = surface.mesh_for("a")
    geometry = mesh.geometry

    graph.move_node("a", 5.0, 5.0)
    surface.draw("dynamic")
    assert mesh.geometry is geometry
    assert mesh.local.position == (10.0, 10.0, 0.0)

    node.bounds = Rect(5.0, 5.0, 20.0, 10.0)
    node.payload = {"color": "#00ff00"}
    surface.draw("dynamic")
    assert mesh.geometry == ("plane", 20.0, 10.0)
    assert mesh.material.color == "#00ff00"


def test_removed_nodes_drop_their_meshes() -> None:
    graph = SceneGraph()
    graph.add_node("dynamic", Node("a", Rect(0.0, 0.0, 10.0, 10.0)))
    surface, _, _ = _surface(graph)
    surface.draw("dynamic")
    mesh = surface.mesh_for("a")

    graph.remove_node("dynamic", "a")
    surface.draw("dynamic")

    assert surface.mesh_for("a") is None
    assert all(mesh not in group.children for group in surface.scene.children)


def test_dynamic_group_carries_camera_transform() -> None:
    surface, _, camera = _surface()
    camera.camera = Camera(scale=2.0, translation_x=-30.0, translation_y=15.0, width=800.0, height=600.0)

    surface.draw("dynamic")
    static_group, dynamic_group = surface.scene.children

    assert dynamic_group.local.position == (-30.0, 15.0, 0.0)
    assert dynamic_group.local.scale == (2.0, 2.0, 1.0)
    assert static_group.local.scale == (1.0, 1.0, 1.0)


def test_projection_follows_viewport_size() -> None:
    surface, _, camera = _surface()
    camera.camera = Camera(scale=1.0, translation_x=0.0, translation_y=0.0, width=1024.0, height=768.0)

    surface.draw("static")

    assert (surface.camera.width, surface.camera.height) == (1024.0, 768.0)
    assert surface.camera.local.position == (512.0, 384.0, 0.0)


def test_draw_rejects_unknown_layer() -> None:
    surface, _, _ = _surface()
    with pytest.raises(UnknownLayerError):
        surface.draw("overlay")  # type: ignore[arg-type]


def test_frame_runs_callbacks_then_renders() -> None:
    surface, canvas, _ = _surface()
    calls: list[str] = []
    surface.request_frame(lambda: calls.append("frame"))
    assert canvas.draw_requests == 1

    assert canvas.draw_function is not None
    canvas.draw_function()

    assert calls == ["frame"]
    assert len(surface.renderer.renders) == 1
    assert surface.frame_count == 1


def test_tick_hooks_keep_frames_alive_while_busy() -> None:
    surface, canvas, _ = _surface()
    busy = [True, False]
    surface.add_tick_hook(lambda: busy.pop(0))
    assert canvas.draw_function is not None

    canvas.draw_function()
    assert canvas.draw_requests == 1
    canvas.draw_function()
    assert canvas.draw_requests == 1


def test_draw_requests_inside_frame_are_not_repeated() -> None:
    graph = SceneGraph()
    surface, canvas, _ = _surface(graph)
    surface.request_frame(lambda: surface.draw("dynamic"))
    requests = canvas.draw_requests
    assert canvas.draw_function is not None

    canvas.draw_function()

    assert canvas.draw_requests == requests


def test_frame_failure_is_logged_and_closes_surface(caplog) -> None:
    surface, canvas, _ = _surface()

    def boom() -> None:
        raise RuntimeError("boom")

    surface.request_frame(boom)
    assert canvas.draw_function is not None
    with caplog.at_level(logging.ERROR):
        canvas.draw_function()

    assert surface.is_closed
    assert canvas.closed
    assert "unhandled_exception_in_draw_loop" in caplog.text
    canvas.draw_function()
    assert surface.frame_count == 0
