"""Template graph data model and adjacency indexes."""

import json
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import networkx as nx


class GraphFormatError(ValueError):
    """Raised when an input document is not a valid node/link graph."""


@dataclass
class Node:
    """A template node. ``x``/``y`` are attached by the radial layout."""

    id: Any
    name: str
    type: str
    root_id: Any = None
    section: Any = None
    bases: list = field(default_factory=list)
    x: float | None = None
    y: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        """Build a node from its JSON form (``rootId``, ``section``, ``bases``)."""
        if not isinstance(data, dict) or "id" not in data:
            raise GraphFormatError(f"Node entry without an id: {data!r}")
        return cls(
            id=data["id"],
            name=str(data.get("name") or ""),
            type=str(data.get("type") or ""),
            root_id=data.get("rootId"),
            section=data.get("section"),
            bases=list(data.get("bases") or []),
            x=data.get("x"),
            y=data.get("y"),
        )

    def to_dict(self) -> dict:
        data = {"id": self.id, "name": self.name, "type": self.type}
        if self.root_id is not None:
            data["rootId"] = self.root_id
        if self.section is not None:
            data["section"] = self.section
        if self.bases:
            data["bases"] = list(self.bases)
        if self.x is not None and self.y is not None:
            data["x"] = self.x
            data["y"] = self.y
        return data


@dataclass
class Link:
    """Directed layout edge: ``target`` is a child of ``source``."""

    source: Any
    target: Any

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        if not isinstance(data, dict) or "source" not in data or "target" not in data:
            raise GraphFormatError(f"Link entry needs source and target: {data!r}")
        return cls(source=data["source"], target=data["target"])


@dataclass
class Adjacency:
    """Forward and reverse lookup tables built from a link list."""

    children: dict[Any, list] = field(default_factory=lambda: defaultdict(list))
    parents: dict[Any, list] = field(default_factory=lambda: defaultdict(list))


@dataclass
class TemplateGraph:
    """Nodes in input order plus the flat link list."""

    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @property
    def node_map(self) -> dict[Any, Node]:
        return {node.id: node for node in self.nodes}


def build_adjacency(links: list[Link]) -> Adjacency:
    """Index links by source and by target in one pass.

    Duplicate links are kept, so a neighbour can appear more than once. Links
    pointing at unknown ids are recorded as-is; consumers decide what to skip.

    Args:
        links: Directed links (source -> target).

    Returns:
        Adjacency with ``children`` and ``parents`` mappings.
    """
    adjacency = Adjacency()
    for link in links:
        adjacency.children[link.source].append(link.target)
        adjacency.parents[link.target].append(link.source)
    return adjacency


def parse_graph(data: Any) -> TemplateGraph:
    """Build a TemplateGraph from a decoded JSON document.

    Accepts either ``{"nodes": [...], "links": [...]}`` or a bare list of
    nodes (no links).

    Raises:
        GraphFormatError: If the document does not have that shape.
    """
    if isinstance(data, list):
        raw_nodes, raw_links = data, []
    elif isinstance(data, dict):
        raw_nodes = data.get("nodes", [])
        raw_links = data.get("links", [])
    else:
        raise GraphFormatError(f"Expected an object or a list, got {type(data).__name__}")

    if not isinstance(raw_nodes, list) or not isinstance(raw_links, list):
        raise GraphFormatError("'nodes' and 'links' must be lists")

    return TemplateGraph(
        nodes=[Node.from_dict(n) for n in raw_nodes],
        links=[Link.from_dict(link) for link in raw_links],
    )


def load_graph(path: Path) -> TemplateGraph:
    """Load a template graph from a JSON file."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as err:
            raise GraphFormatError(f"{path} is not valid JSON: {err}") from err
    return parse_graph(data)


def find_nodes(graph: TemplateGraph, term: str) -> list[Node]:
    """Find nodes by name, case-insensitively.

    Exact name matches win; if there are none, every node whose name contains
    ``term`` is returned.
    """
    term = term.strip().lower()
    if not term:
        return []
    exact = [n for n in graph.nodes if n.name.lower() == term]
    if exact:
        return exact
    return [n for n in graph.nodes if term in n.name.lower()]


def to_digraph(graph: TemplateGraph) -> nx.DiGraph:
    """Convert to a networkx DiGraph, skipping links with unknown endpoints."""
    G = nx.DiGraph()
    for node in graph.nodes:
        G.add_node(node.id, name=node.name, type=node.type)
    for link in graph.links:
        if link.source in G and link.target in G:
            G.add_edge(link.source, link.target)
    return G
