"""Concentric ring placement from node levels."""

import math
from dataclasses import dataclass, field
from typing import Any

from ..graph import Adjacency, Node, TemplateGraph, build_adjacency
from .levels import assign_levels, group_by_level

# Reference distance scale between rings, in layout units
DEFAULT_RADIUS_STEP = 3200.0


@dataclass
class LayoutConfig:
    """Canvas size and ring spacing used for placement."""

    width: float = 1600
    height: float = 800
    radius_step: float = DEFAULT_RADIUS_STEP

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass
class LayoutResult:
    """Everything one layout pass produced, passed on to the renderers."""

    graph: TemplateGraph
    adjacency: Adjacency
    levels: dict[Any, int]
    rings: dict[int, list[Node]]
    config: LayoutConfig
    unplaced: list[Node] = field(default_factory=list)


def ring_radius(level: int, radius_step: float = DEFAULT_RADIUS_STEP) -> float:
    """Radius of a ring: ln(level + 2) * radius_step.

    Logarithmic spacing keeps outer rings from drifting far apart while still
    growing strictly with the level.
    """
    return math.log(level + 2) * radius_step


def ring_angles(count: int) -> list[float]:
    """Evenly spaced angles over [0, 2π), starting at 0."""
    if count <= 0:
        return []
    step = 2 * math.pi / count
    return [i * step for i in range(count)]


def assign_positions(
    levels: dict[Any, int],
    node_map: dict[Any, Node],
    config: LayoutConfig,
) -> dict[int, list[Node]]:
    """Attach ``x``/``y`` to every node that has a level.

    Nodes are mutated in place; running this again with the same levels and
    config yields the same coordinates.

    Args:
        levels: Mapping from node id to level.
        node_map: Mapping from node id to node.
        config: Canvas size and ring spacing.

    Returns:
        The ring grouping (level -> nodes) that was placed.
    """
    rings = group_by_level(levels, node_map)
    center_x, center_y = config.center

    for level, ring in rings.items():
        radius = ring_radius(level, config.radius_step)
        for node, angle in zip(ring, ring_angles(len(ring))):
            node.x = center_x + radius * math.cos(angle)
            node.y = center_y + radius * math.sin(angle)

    return rings


def compute_layout(graph: TemplateGraph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the full pass: adjacency, levels, then ring placement.

    Raises:
        CyclicGraphError: If the links contain a cycle.
    """
    config = config or LayoutConfig()
    adjacency = build_adjacency(graph.links)
    levels = assign_levels(graph.nodes, adjacency)
    rings = assign_positions(levels, graph.node_map, config)
    unplaced = [node for node in graph.nodes if node.id not in levels]
    return LayoutResult(
        graph=graph,
        adjacency=adjacency,
        levels=levels,
        rings=rings,
        config=config,
        unplaced=unplaced,
    )
