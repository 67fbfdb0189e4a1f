"""Mermaid class-diagram output for typed template nodes.

Each node type maps to a small formatting record: the stereotype shown in the
class box, extra member lines, the arrow used on its relation edges, and the
node field(s) naming its parent(s). These relation fields are independent of
the layout links.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

from .graph import Node

HEADER = "classDiagram"


def _no_members(node: Node) -> list[str]:
    return []


def _single(value: Any) -> list:
    return [] if value is None else [value]


@dataclass(frozen=True)
class NodeStrategy:
    """How one node type is written out."""

    stereotype: str
    inner: Callable[[Node], list[str]]
    edge: Callable[[Node], str]
    relations: Callable[[Node], list]


STRATEGIES: dict[str, NodeStrategy] = {
    "template": NodeStrategy(
        stereotype="template",
        inner=_no_members,
        edge=lambda node: "--|>",
        relations=lambda node: _single(node.root_id),
    ),
    "section": NodeStrategy(
        stereotype="section",
        inner=_no_members,
        edge=lambda node: "<|--",
        relations=lambda node: list(node.bases),
    ),
    "branch": NodeStrategy(
        stereotype="branch",
        inner=lambda node: ["+ condition : bool"],
        edge=lambda node: "o--",
        relations=lambda node: _single(node.root_id),
    ),
    "field": NodeStrategy(
        stereotype="field",
        inner=lambda node: ["+ value : string"],
        edge=lambda node: "--",
        relations=lambda node: _single(node.section),
    ),
}

# Unknown types are drawn like sections but hang off rootId
DEFAULT_STRATEGY = NodeStrategy(
    stereotype="section",
    inner=_no_members,
    edge=lambda node: "<|--",
    relations=lambda node: _single(node.root_id),
)


def register_strategy(type_name: str, strategy: NodeStrategy) -> None:
    """Add or replace the strategy used for ``type_name``."""
    STRATEGIES[type_name] = strategy


def strategy_for(node: Node) -> NodeStrategy:
    return STRATEGIES.get(node.type, DEFAULT_STRATEGY)


def sanitize(text: str) -> str:
    """Turn whitespace runs into underscores and drop other non-word characters."""
    text = re.sub(r"\s+", "_", text)
    return re.sub(r"[^\w]", "", text, flags=re.ASCII)


def node_identifier(node: Node) -> str:
    """Class name for a node; the id suffix keeps equal names apart."""
    return f"{sanitize(node.name)}_{node.id}"


def to_class_diagram(nodes: list[Node]) -> str:
    """Serialize typed nodes to Mermaid ``classDiagram`` markup.

    Class blocks come first, then relation edges, both in input order.
    Relation targets that are not in ``nodes`` are dropped.

    Args:
        nodes: Typed nodes, in the order they should appear.

    Returns:
        The diagram text, ending with a newline.
    """
    lines = [HEADER]
    by_id = {node.id: node for node in nodes}

    for node in nodes:
        strategy = strategy_for(node)
        lines.append(f"    class {node_identifier(node)} {{")
        lines.append(f"      <<{strategy.stereotype}>>")
        for member in strategy.inner(node):
            lines.append(f"      {member}")
        lines.append("    }")

    for node in nodes:
        strategy = strategy_for(node)
        child = node_identifier(node)
        for parent_id in strategy.relations(node):
            parent = by_id.get(parent_id)
            if parent is None:
                continue
            lines.append(f"    {node_identifier(parent)} {strategy.edge(node)} {child}")

    return "\n".join(lines) + "\n"
