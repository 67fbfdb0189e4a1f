"""Generate visualization outputs."""

import json
from pathlib import Path

from .graph import TemplateGraph
from .layout import LayoutResult, render_graph
from .mermaid import to_class_diagram


def generate_html(result: LayoutResult, output_file: Path) -> None:
    """Generate the interactive HTML diagram using pyvis.

    Nodes sit on concentric rings by level; clicking one highlights its
    parents and children.

    Args:
        result: Layout pass to draw.
        output_file: Path to write the HTML file.
    """
    render_graph(result, output_file)


def generate_json(result: LayoutResult, output_file: Path) -> None:
    """Write placed nodes, links, levels and adjacency maps as JSON.

    Args:
        result: Layout pass to export.
        output_file: Path to write the JSON file.
    """
    # JSON keys must be strings
    layout = {
        "width": result.config.width,
        "height": result.config.height,
        "radius_step": result.config.radius_step,
        "nodes": [node.to_dict() for node in result.graph.nodes],
        "links": [{"source": link.source, "target": link.target} for link in result.graph.links],
        "levels": {str(k): v for k, v in result.levels.items()},
        "children": {str(k): v for k, v in result.adjacency.children.items()},
        "parents": {str(k): v for k, v in result.adjacency.parents.items()},
        "unplaced": [node.id for node in result.unplaced],
    }

    with open(output_file, "w") as f:
        json.dump(layout, f, indent=2)


def generate_mermaid(graph: TemplateGraph, output_file: Path) -> str:
    """Write the class diagram for ``graph`` and return its text."""
    diagram = to_class_diagram(graph.nodes)
    with open(output_file, "w") as f:
        f.write(diagram)
    return diagram


def generate_summary(result: LayoutResult, output_file: Path) -> None:
    """Generate human-readable summary file.

    Args:
        result: Layout pass to summarize.
        output_file: Path to write the summary file.
    """
    graph = result.graph
    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write("Template Graph Layout Summary\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"Total nodes: {len(graph.nodes)}\n")
        f.write(f"Total links: {len(graph.links)}\n")
        f.write(f"Placed nodes: {len(result.levels)}\n\n")

        f.write("Nodes per level:\n")
        f.write("-" * 40 + "\n")
        for level in sorted(result.rings):
            f.write(f"  level {level:3d}: {len(result.rings[level])}\n")

        if result.unplaced:
            f.write("\n")
            f.write(f"Unplaced nodes ({len(result.unplaced)}):\n")
            f.write("-" * 40 + "\n")
            for node in result.unplaced:
                f.write(f"  {node.id}  {node.name}\n")
