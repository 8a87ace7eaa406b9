from __future__ import annotations

import pytest

from canvas_engine.api.errors import DuplicateNodeError, UnknownLayerError
from canvas_engine.api.geometry import Rect
from canvas_engine.scene.graph import Node, SceneGraph


def _node(node_id: str, x: float = 0.0, y: float = 0.0, size: float = 10.0) -> Node:
    return Node(node_id, Rect(x, y, size, size))


def test_add_node_assigns_layer_and_keeps_insertion_order() -> None:
    graph = SceneGraph()
    graph.add_node("dynamic", _node("a"))
    graph.add_node("dynamic", _node("b"))
    graph.add_node("static", _node("bg"))

    assert [node.node_id for node in graph.nodes_of("dynamic")] == ["a", "b"]
    assert graph.layer_of("bg") == "static"
    assert len(graph) == 3
    assert "a" in graph
    assert [node.node_id for node in graph] == ["bg", "a", "b"]


def test_node_belongs_to_at_most_one_layer() -> None:
    graph = SceneGraph()
    graph.add_node("static", _node("a"))

    with pytest.raises(DuplicateNodeError):
        graph.add_node("dynamic", _node("a"))
    assert graph.nodes_of("dynamic") == ()


def test_remove_node_requires_owning_layer() -> None:
    graph = SceneGraph()
    node = graph.add_node("dynamic", _node("a"))

    with pytest.raises(KeyError):
        graph.remove_node("static", "a")

    removed = graph.remove_node("dynamic", "a")
    assert removed is node
    assert removed.layer is None
    assert graph.get("a") is None
    graph.add_node("static", node)
    assert graph.layer_of("a") == "static"


def test_unknown_layer_is_rejected() -> None:
    graph = SceneGraph()
    with pytest.raises(UnknownLayerError):
        graph.add_node("overlay", _node("a"))  # type: ignore[arg-type]
    with pytest.raises(UnknownLayerError):
        graph.nodes_of("overlay")  # type: ignore[arg-type]


def test_move_node_translates_bounds() -> None:
    graph = SceneGraph()
    graph.add_node("dynamic", _node("a", 5.0, 5.0))

    moved = graph.move_node("a", 2.5, -1.0)

    assert moved.bounds == Rect(7.5, 4.0, 10.0, 10.0)


def test_hit_test_returns_topmost_visible_node() -> None:
    graph = SceneGraph()
    lower = graph.add_node("dynamic", _node("lower", 0.0, 0.0, 20.0))
    upper = graph.add_node("dynamic", _node("upper", 5.0, 5.0, 20.0))

    assert graph.hit_test("dynamic", 10.0, 10.0) is upper
    upper.visible = False
    assert graph.hit_test("dynamic", 10.0, 10.0) is lower
    assert graph.hit_test("dynamic", 100.0, 100.0) is None
