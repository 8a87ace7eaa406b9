from __future__ import annotations

from canvas_engine.api.geometry import Rect
from canvas_engine.scene.culling import VisibilityCuller, intersects
from canvas_engine.scene.graph import Node, SceneGraph


def test_intersects_excludes_shared_edges() -> None:
    view = Rect(0.0, 0.0, 100.0, 100.0)

    assert not intersects(Rect(100.0, 0.0, 10.0, 10.0), view)
    assert not intersects(Rect(0.0, -10.0, 10.0, 10.0), view)
    assert intersects(Rect(99.0, 0.0, 10.0, 10.0), view)
    assert intersects(Rect(-9.0, -9.0, 10.0, 10.0), view)


def test_containing_and_contained_boxes_intersect() -> None:
    view = Rect(0.0, 0.0, 100.0, 100.0)

    assert intersects(Rect(40.0, 40.0, 10.0, 10.0), view)
    assert intersects(Rect(-50.0, -50.0, 500.0, 500.0), view)


def test_cull_updates_every_node_and_counts() -> None:
    culler = VisibilityCuller()
    inside = Node("inside", Rect(10.0, 10.0, 10.0, 10.0))
    outside = Node("outside", Rect(500.0, 500.0, 10.0, 10.0))

    visible = culler.cull(Rect(0.0, 0.0, 100.0, 100.0), [inside, outside])

    assert visible == 1
    assert inside.visible is True
    assert outside.visible is False
    assert culler.last_visible_count == 1
    assert culler.last_culled_count == 1


def test_cull_layer_is_idempotent_and_restores_visibility() -> None:
    graph = SceneGraph()
    node = graph.add_node("dynamic", Node("a", Rect(200.0, 0.0, 10.0, 10.0)))
    culler = VisibilityCuller()

    assert culler.cull_layer(graph, "dynamic", Rect(0.0, 0.0, 100.0, 100.0)) == 0
    assert culler.cull_layer(graph, "dynamic", Rect(0.0, 0.0, 100.0, 100.0)) == 0
    assert node.visible is False

    assert culler.cull_layer(graph, "dynamic", Rect(150.0, 0.0, 100.0, 100.0)) == 1
    assert node.visible is True


def test_cull_layer_leaves_other_layer_untouched() -> None:
    graph = SceneGraph()
    background = graph.add_node("static", Node("bg", Rect(900.0, 900.0, 10.0, 10.0)))
    culler = VisibilityCuller()

    culler.cull_layer(graph, "dynamic", Rect(0.0, 0.0, 100.0, 100.0))

    assert background.visible is True
