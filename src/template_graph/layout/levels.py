"""Longest-path level assignment from root nodes."""

from typing import Any

import networkx as nx

from ..graph import Adjacency, Node

_EXHAUSTED = object()


class CyclicGraphError(ValueError):
    """Raised when level assignment finds a path back to one of its ancestors."""

    def __init__(self, cycle: list):
        self.cycle = cycle
        super().__init__("Cycle detected: " + " -> ".join(str(n) for n in cycle))


def find_roots(nodes: list[Node], adjacency: Adjacency) -> list:
    """Ids of nodes with no incoming link, in node order.

    An empty parent list counts as no parent, since indexing the
    ``defaultdict`` maps leaves empty entries behind.
    """
    return [node.id for node in nodes if not adjacency.parents.get(node.id)]


def _walk(root: Any, adjacency: Adjacency, known: set, levels: dict[Any, int]) -> None:
    """Depth-first walk from one root, raising levels to the longest path seen.

    The walk keeps its own stack of child iterators and the set of ids on the
    current path; reaching one of those again is a cycle.
    """
    levels.setdefault(root, 0)
    path = [root]
    on_path = {root}
    stack = [iter(adjacency.children.get(root, ()))]

    while stack:
        child = next(stack[-1], _EXHAUSTED)
        if child is _EXHAUSTED:
            stack.pop()
            on_path.discard(path.pop())
            continue
        if child not in known:
            continue
        if child in on_path:
            raise CyclicGraphError(path[path.index(child):] + [child])

        depth = len(path)
        if levels.get(child, -1) >= depth:
            continue
        levels[child] = depth
        path.append(child)
        on_path.add(child)
        stack.append(iter(adjacency.children.get(child, ())))


def _check_unreached(unreached: set, adjacency: Adjacency) -> None:
    """Reject cycles among nodes that no root leads to (e.g. A -> B -> A)."""
    G = nx.DiGraph()
    G.add_nodes_from(unreached)
    for source in unreached:
        for target in adjacency.children.get(source, ()):
            if target in unreached:
                G.add_edge(source, target)
    try:
        cycle = nx.find_cycle(G)
    except nx.NetworkXNoCycle:
        return
    raise CyclicGraphError([source for source, _ in cycle] + [cycle[0][0]])


def assign_levels(nodes: list[Node], adjacency: Adjacency) -> dict[Any, int]:
    """Assign every reachable node its longest distance from any root.

    A node reached again at a greater depth than its recorded level is
    descended into again, so in a diamond A -> B -> D, A -> C -> D the deeper
    path decides D's level. Children that are not in ``nodes`` are skipped.

    Args:
        nodes: Node set, in input order.
        adjacency: Indexes built from the links.

    Returns:
        Mapping from node id to level, in first-visit order. Nodes that no
        root reaches are absent.

    Raises:
        CyclicGraphError: If the links contain a cycle.
    """
    known = {node.id for node in nodes}
    levels: dict[Any, int] = {}

    for root in find_roots(nodes, adjacency):
        _walk(root, adjacency, known, levels)

    unreached = known - set(levels)
    if unreached:
        _check_unreached(unreached, adjacency)

    return levels


def group_by_level(levels: dict[Any, int], node_map: dict[Any, Node]) -> dict[int, list[Node]]:
    """Group nodes into rings, keeping level-map iteration order within a ring."""
    rings: dict[int, list[Node]] = {}
    for node_id, level in levels.items():
        if level not in rings:
            rings[level] = []
        rings[level].append(node_map[node_id])
    return rings
