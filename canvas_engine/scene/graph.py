"""Layered node membership for the canvas scene."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from canvas_engine.api.errors import DuplicateNodeError
from canvas_engine.api.geometry import Rect
from canvas_engine.api.layers import LAYER_ORDER, LayerName, require_layer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Node:
    """Positioned shape in scene coordinates.

    `visible` is written by the visibility culler only; `payload` is opaque to
    the engine and interpreted by the rendering surface.
    """

    node_id: str
    bounds: Rect
    payload: Mapping[str, Any] = field(default_factory=dict)
    visible: bool = True
    layer: LayerName | None = None


class SceneGraph:
    """Owns node lifetime and the ordered static/dynamic layers."""

    def __init__(self) -> None:
        self._layers: dict[LayerName, list[Node]] = {layer: [] for layer in LAYER_ORDER}
        self._index: dict[str, Node] = {}

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __iter__(self) -> Iterator[Node]:
        for layer in LAYER_ORDER:
            yield from self._layers[layer]

    def add_node(self, layer: LayerName, node: Node) -> Node:
        """Append `node` on top of `layer`."""
        name = require_layer(layer)
        existing = self._index.get(node.node_id)
        if existing is not None:
            raise DuplicateNodeError(node.node_id, str(existing.layer))
        node.layer = name
        self._layers[name].append(node)
        self._index[node.node_id] = node
        logger.debug("scene_node_added id=%s layer=%s", node.node_id, name)
        return node

    def remove_node(self, layer: LayerName, node_id: str) -> Node:
        """Remove and return the node; raises `KeyError` if `layer` does not own it."""
        name = require_layer(layer)
        node = self._index.get(node_id)
        if node is None or node.layer != name:
            raise KeyError(node_id)
        self._layers[name].remove(node)
        del self._index[node_id]
        node.layer = None
        logger.debug("scene_node_removed id=%s layer=%s", node_id, name)
        return node

    def nodes_of(self, layer: LayerName) -> tuple[Node, ...]:
        """Return the layer's nodes back-to-front."""
        return tuple(self._layers[require_layer(layer)])

    def get(self, node_id: str) -> Node | None:
        return self._index.get(node_id)

    def layer_of(self, node_id: str) -> LayerName | None:
        node = self._index.get(node_id)
        return None if node is None else node.layer

    def move_node(self, node_id: str, dx: float, dy: float) -> Node:
        """Translate a node's bounds by a scene-space delta."""
        node = self._index[node_id]
        node.bounds = node.bounds.translated(dx, dy)
        return node

    def hit_test(self, layer: LayerName, x: float, y: float) -> Node | None:
        """Return the topmost visible node of `layer` containing the scene point."""
        for node in reversed(self._layers[require_layer(layer)]):
            if node.visible and node.bounds.contains(x, y):
                return node
        return None


__all__ = ["Node", "SceneGraph"]
