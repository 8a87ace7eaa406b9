"""Public error types."""

from __future__ import annotations


class CanvasError(Exception):
    """Base class for canvas engine wiring errors."""


class UnknownLayerError(CanvasError, ValueError):
    """Raised when a layer name outside the known layers is used."""

    def __init__(self, name: object) -> None:
        super().__init__(f"unknown layer: {name!r}")
        self.name = name


class DuplicateNodeError(CanvasError, ValueError):
    """Raised when a node id is inserted while already owned by a layer."""

    def __init__(self, node_id: str, layer: str) -> None:
        super().__init__(f"node {node_id!r} already belongs to layer {layer!r}")
        self.node_id = node_id
        self.layer = layer


__all__ = ["CanvasError", "DuplicateNodeError", "UnknownLayerError"]
