"""Radial layout module for template hierarchies.

Nodes are placed on concentric rings by their longest-path level from a root.
"""

from .classify import EdgeType, classify_edges
from .levels import CyclicGraphError, assign_levels, find_roots, group_by_level
from .radial import (
    LayoutConfig,
    LayoutResult,
    assign_positions,
    compute_layout,
    ring_angles,
    ring_radius,
)
from .render import render_graph

__all__ = [
    "CyclicGraphError",
    "find_roots",
    "assign_levels",
    "group_by_level",
    "EdgeType",
    "classify_edges",
    "LayoutConfig",
    "LayoutResult",
    "ring_radius",
    "ring_angles",
    "assign_positions",
    "compute_layout",
    "render_graph",
]
