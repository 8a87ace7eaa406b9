"""Two-layer retained pygfx surface driven by rendercanvas frames."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from canvas_engine.api.layers import (
    DYNAMIC_LAYER,
    LAYER_ORDER,
    STATIC_LAYER,
    LayerName,
    require_layer,
)
from canvas_engine.api.surface import FrameCallback
from canvas_engine.scene.graph import Node, SceneGraph

if TYPE_CHECKING:
    from canvas_engine.viewport.controller import Camera

_gfx_import_error: Exception | None
try:
    import pygfx as gfx
except Exception as exc:  # pragma: no cover - import guard for environments without graphics deps
    gfx = None
    _gfx_import_error = exc
else:
    _gfx_import_error = None

logger = logging.getLogger(__name__)

DEFAULT_NODE_COLOR = "#3b82f6"
TickHook = Callable[[], bool]

# Static content sits behind dynamic content.
_LAYER_Z: dict[LayerName, float] = {STATIC_LAYER: -10.0, DYNAMIC_LAYER: 0.0}


class PygfxSurface:
    """Render surface and frame source over a pygfx scene.

    Each layer maps to one `gfx.Group`. The static group lives in screen space;
    the dynamic group carries the camera transform. Nodes map to retained
    meshes that are only rebuilt when their bounds or color change.
    """

    def __init__(
        self,
        *,
        graph: SceneGraph,
        camera_source: Callable[[], Camera],
        canvas: Any,
        width: float,
        height: float,
        gfx_module: Any | None = None,
    ) -> None:
        gfx_api = gfx_module if gfx_module is not None else gfx
        if gfx_api is None:
            raise RuntimeError(
                f"pygfx dependency unavailable: {_gfx_import_error!r}. Install 'pygfx' and 'wgpu'."
            )
        self._gfx = gfx_api
        self._graph = graph
        self._camera_source = camera_source
        self.canvas = canvas
        self.renderer = gfx_api.WgpuRenderer(canvas)
        self.scene = gfx_api.Scene()
        self._groups: dict[LayerName, Any] = {}
        for layer in LAYER_ORDER:
            group = gfx_api.Group()
            self.scene.add(group)
            self._groups[layer] = group
        self.camera = gfx_api.OrthographicCamera(width, height)
        self._camera_size: tuple[float, float] | None = None
        self._meshes: dict[str, Any] = {}
        self._mesh_props: dict[str, tuple[float, float, float, float, str]] = {}
        self._layer_keys: dict[LayerName, set[str]] = {layer: set() for layer in LAYER_ORDER}
        self._frame_callbacks: list[FrameCallback] = []
        self._tick_hooks: list[TickHook] = []
        self._in_frame = False
        self._draw_failed = False
        self._is_closed = False
        self.frame_count = 0
        self._apply_projection(float(width), float(height))
        self.canvas.request_draw(self._draw_frame)

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    def mesh_for(self, node_id: str) -> Any | None:
        return self._meshes.get(node_id)

    def add_tick_hook(self, hook: TickHook) -> None:
        """Run `hook` every frame; a True result keeps frames coming."""
        self._tick_hooks.append(hook)

    def request_frame(self, callback: FrameCallback) -> None:
        self._frame_callbacks.append(callback)
        self._request_canvas_draw()

    def draw(self, layer: LayerName) -> None:
        """Sync one layer's retained meshes with the scene graph."""
        name = require_layer(layer)
        self._sync_layer(name)
        self._update_camera_projection()
        if name == DYNAMIC_LAYER:
            self._apply_camera_transform()
        self._request_canvas_draw()

    def close(self) -> None:
        if self._is_closed:
            return
        self._is_closed = True
        self._frame_callbacks.clear()
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()

    def _sync_layer(self, layer: LayerName) -> None:
        group = self._groups[layer]
        seen: set[str] = set()
        for node in self._graph.nodes_of(layer):
            seen.add(node.node_id)
            mesh = self._upsert_mesh(group, node, _LAYER_Z[layer])
            mesh.visible = node.visible
        stale = self._layer_keys[layer] - seen
        for key in stale:
            mesh = self._meshes.pop(key, None)
            self._mesh_props.pop(key, None)
            if mesh is not None:
                group.remove(mesh)
        self._layer_keys[layer] = seen

    def _upsert_mesh(self, group: Any, node: Node, z: float) -> Any:
        gfx_api = self._gfx
        bounds = node.bounds
        color = str(node.payload.get("color", DEFAULT_NODE_COLOR))
        props = (bounds.x, bounds.y, bounds.width, bounds.height, color)
        mesh = self._meshes.get(node.node_id)
        if mesh is None:
            mesh = gfx_api.Mesh(
                gfx_api.plane_geometry(bounds.width, bounds.height),
                gfx_api.MeshBasicMaterial(color=color),
            )
            group.add(mesh)
            self._meshes[node.node_id] = mesh
        elif self._mesh_props.get(node.node_id) == props:
            return mesh
        else:
            previous = self._mesh_props.get(node.node_id)
            if previous is None or previous[2:4] != props[2:4]:
                mesh.geometry = gfx_api.plane_geometry(bounds.width, bounds.height)
            mesh.material.color = color
        mesh.local.position = (bounds.x + bounds.width / 2.0, bounds.y + bounds.height / 2.0, z)
        self._mesh_props[node.node_id] = props
        return mesh

    def _apply_camera_transform(self) -> None:
        camera = self._camera_source()
        group = self._groups[DYNAMIC_LAYER]
        group.local.position = (camera.translation_x, camera.translation_y, 0.0)
        group.local.scale = (camera.scale, camera.scale, 1.0)

    def _update_camera_projection(self) -> None:
        camera = self._camera_source()
        if (camera.width, camera.height) != self._camera_size:
            self._apply_projection(camera.width, camera.height)

    def _apply_projection(self, width: float, height: float) -> None:
        # Screen-space orthographic projection with y pointing down.
        self.camera.width = width
        self.camera.height = height
        self.camera.local.position = (width / 2.0, height / 2.0, 0.0)
        self.camera.local.scale_y = -1.0
        self._camera_size = (width, height)

    def _request_canvas_draw(self) -> None:
        if self._in_frame or self._is_closed:
            return
        request_draw = getattr(self.canvas, "request_draw", None)
        if callable(request_draw):
            request_draw()

    def _draw_frame(self) -> None:
        if self._draw_failed or self._is_closed:
            return
        self._in_frame = True
        try:
            keep_alive = False
            for hook in tuple(self._tick_hooks):
                if hook():
                    keep_alive = True
            callbacks, self._frame_callbacks = self._frame_callbacks, []
            for callback in callbacks:
                callback()
            self.renderer.render(self.scene, self.camera)
            self.frame_count += 1
        except Exception:  # pylint: disable=broad-exception-caught
            self._draw_failed = True
            logger.exception("unhandled_exception_in_draw_loop")
            self.close()
            return
        finally:
            self._in_frame = False
        if keep_alive or self._frame_callbacks:
            self._request_canvas_draw()


__all__ = ["DEFAULT_NODE_COLOR", "PygfxSurface"]
