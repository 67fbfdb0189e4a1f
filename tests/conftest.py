"""Pytest fixtures for template graph tests."""

import pytest

from template_graph.graph import Link, Node, TemplateGraph


def _graph(names: list[str], pairs: list[tuple[str, str]]) -> TemplateGraph:
    """Template nodes keyed by name, linked parent -> child."""
    nodes = [Node(id=name, name=name, type="template") for name in names]
    links = [Link(source=s, target=t) for s, t in pairs]
    return TemplateGraph(nodes=nodes, links=links)


@pytest.fixture
def simple_chain() -> TemplateGraph:
    """Simple chain: A -> B -> C (levels 0, 1, 2)."""
    return _graph(["A", "B", "C"], [("A", "B"), ("B", "C")])


@pytest.fixture
def diamond_graph() -> TemplateGraph:
    """Diamond: A -> B, A -> C, B -> D, C -> D (D at level 2)."""
    return _graph(
        ["A", "B", "C", "D"],
        [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")],
    )


@pytest.fixture
def uneven_diamond() -> TemplateGraph:
    """A -> D directly and A -> B -> C -> D; the longer path places D at 3."""
    return _graph(
        ["A", "B", "C", "D"],
        [("A", "D"), ("A", "B"), ("B", "C"), ("C", "D")],
    )


@pytest.fixture
def multiple_roots() -> TemplateGraph:
    """Two roots A and B sharing descendants."""
    return _graph(
        ["A", "B", "C", "D"],
        [("A", "C"), ("B", "C"), ("C", "D")],
    )


@pytest.fixture
def back_edge_graph() -> TemplateGraph:
    """Root R leads into a cycle: R -> A -> B -> C -> A."""
    return _graph(
        ["R", "A", "B", "C"],
        [("R", "A"), ("A", "B"), ("B", "C"), ("C", "A")],
    )


@pytest.fixture
def complex_graph() -> TemplateGraph:
    """Multiple levels with a skip link; X has no links and is its own root."""
    return _graph(
        ["A", "B", "C", "D", "E", "F", "G", "X"],
        [
            ("A", "B"),
            ("A", "C"),
            ("B", "D"),
            ("B", "E"),
            ("C", "E"),
            ("C", "F"),
            ("D", "G"),
            ("E", "G"),
            ("F", "G"),
            ("A", "G"),  # Skip link
        ],
    )


@pytest.fixture
def typed_example() -> TemplateGraph:
    """One template with two fields hanging off it."""
    nodes = [
        Node(id=1, name="Root", type="template"),
        Node(id=2, name="Leaf A", type="field", section=1),
        Node(id=3, name="Leaf B", type="field", section=1),
    ]
    links = [Link(source=1, target=2), Link(source=1, target=3)]
    return TemplateGraph(nodes=nodes, links=links)


@pytest.fixture
def typed_graph_data() -> dict:
    """JSON document mixing every node type."""
    return {
        "nodes": [
            {"id": 1, "name": "Base Template", "type": "template"},
            {"id": 2, "name": "Child Template", "type": "template", "rootId": 1},
            {"id": 3, "name": "Header", "type": "section", "bases": [1, 2]},
            {"id": 4, "name": "Is Active?", "type": "branch", "rootId": 2},
            {"id": 5, "name": "Title", "type": "field", "section": 3},
            {"id": 6, "name": "Custom", "type": "widget", "rootId": 2},
        ],
        "links": [
            {"source": 1, "target": 2},
            {"source": 2, "target": 3},
            {"source": 2, "target": 4},
            {"source": 3, "target": 5},
            {"source": 2, "target": 6},
        ],
    }
