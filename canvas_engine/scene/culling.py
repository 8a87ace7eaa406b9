"""Visibility culling against the visible scene rectangle."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from canvas_engine.api.geometry import Rect
from canvas_engine.api.layers import LayerName, require_layer
from canvas_engine.scene.graph import Node, SceneGraph

logger = logging.getLogger(__name__)


def intersects(bounds: Rect, rect: Rect) -> bool:
    """Open overlap test; boxes that only share an edge do not intersect."""
    return (
        bounds.x + bounds.width > rect.x
        and bounds.x < rect.x + rect.width
        and bounds.y + bounds.height > rect.y
        and bounds.y < rect.y + rect.height
    )


class VisibilityCuller:
    """Writes `Node.visible` from a rectangle intersection test."""

    def __init__(self) -> None:
        self.last_visible_count = 0
        self.last_culled_count = 0

    def cull_node(self, node: Node, rect: Rect) -> bool:
        node.visible = intersects(node.bounds, rect)
        return node.visible

    def cull(self, rect: Rect, nodes: Iterable[Node]) -> int:
        """Update every node's flag and return how many are visible."""
        visible = 0
        total = 0
        for node in nodes:
            total += 1
            if self.cull_node(node, rect):
                visible += 1
        self.last_visible_count = visible
        self.last_culled_count = total - visible
        return visible

    def cull_layer(self, graph: SceneGraph, layer: LayerName, rect: Rect) -> int:
        name = require_layer(layer)
        visible = self.cull(rect, graph.nodes_of(name))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "cull_layer layer=%s visible=%d culled=%d rect=(%.2f,%.2f,%.2f,%.2f)",
                name,
                visible,
                self.last_culled_count,
                rect.x,
                rect.y,
                rect.width,
                rect.height,
            )
        return visible


__all__ = ["VisibilityCuller", "intersects"]
