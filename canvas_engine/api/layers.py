"""Layer names and validation."""

from __future__ import annotations

from typing import Literal, cast

from canvas_engine.api.errors import UnknownLayerError

LayerName = Literal["static", "dynamic"]

STATIC_LAYER: LayerName = "static"
DYNAMIC_LAYER: LayerName = "dynamic"

# Composite order: back to front.
LAYER_ORDER: tuple[LayerName, ...] = (STATIC_LAYER, DYNAMIC_LAYER)


def require_layer(name: object) -> LayerName:
    """Return `name` as a layer name or raise `UnknownLayerError`."""
    if name not in LAYER_ORDER:
        raise UnknownLayerError(name)
    return cast(LayerName, name)


__all__ = ["DYNAMIC_LAYER", "LAYER_ORDER", "LayerName", "STATIC_LAYER", "require_layer"]
