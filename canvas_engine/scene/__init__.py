"""Scene membership and visibility."""

from canvas_engine.scene.culling import VisibilityCuller, intersects
from canvas_engine.scene.graph import Node, SceneGraph

__all__ = ["Node", "SceneGraph", "VisibilityCuller", "intersects"]
