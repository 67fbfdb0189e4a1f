"""Link classification based on level relationships."""

from enum import Enum
from typing import Any

from ..graph import Link


class EdgeType(Enum):
    """Classification of links based on the levels of their endpoints."""

    TREE = "tree"  # child_level == parent_level + 1
    FORWARD_SKIP = "skip"  # child_level > parent_level + 1
    UNPLACED = "unplaced"  # an endpoint has no level


def classify_edges(
    links: list[Link],
    levels: dict[Any, int],
) -> dict[EdgeType, list[tuple[Any, Any]]]:
    """Classify all links by level relationship.

    With longest-path levels on an acyclic graph every placed link points
    outward, so only tree and skip links exist between placed nodes.

    Args:
        links: Directed links (parent -> child).
        levels: Mapping from node id to its level.

    Returns:
        Dictionary mapping EdgeType to list of (parent, child) tuples.
    """
    classified: dict[EdgeType, list[tuple[Any, Any]]] = {
        EdgeType.TREE: [],
        EdgeType.FORWARD_SKIP: [],
        EdgeType.UNPLACED: [],
    }

    for link in links:
        parent_level = levels.get(link.source)
        child_level = levels.get(link.target)
        if parent_level is None or child_level is None:
            classified[EdgeType.UNPLACED].append((link.source, link.target))
        elif child_level == parent_level + 1:
            classified[EdgeType.TREE].append((link.source, link.target))
        else:
            classified[EdgeType.FORWARD_SKIP].append((link.source, link.target))

    return classified
