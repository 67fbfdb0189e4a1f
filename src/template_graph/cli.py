"""CLI for template-graph."""

import argparse
import sys
from itertools import islice
from pathlib import Path

import networkx as nx

from .graph import GraphFormatError, Node, TemplateGraph, find_nodes, load_graph, to_digraph
from .layout import CyclicGraphError, LayoutConfig, compute_layout
from .visualize import generate_html, generate_json, generate_mermaid, generate_summary


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("input", type=Path, help="JSON file with nodes and links")
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def resolve_layout_args(args: argparse.Namespace) -> LayoutConfig:
    """Merge CLI flags, config file values and defaults into a LayoutConfig."""
    config = load_config(args.config) if args.config else {}
    defaults = LayoutConfig()

    if args.width is None:
        args.width = float(config.get("width", defaults.width))
    if args.height is None:
        args.height = float(config.get("height", defaults.height))
    if args.radius_step is None:
        args.radius_step = float(config.get("radius-step", defaults.radius_step))
    if args.output is None:
        args.output = Path(config.get("output", "results"))

    return LayoutConfig(width=args.width, height=args.height, radius_step=args.radius_step)


def cmd_layout(args: argparse.Namespace) -> None:
    """Lay out the graph on rings and write the HTML, JSON and summary outputs."""
    layout_config = resolve_layout_args(args)
    args.output = args.output.resolve()

    print(f"Loading {args.input}...")
    graph = load_graph(args.input)
    print(f"Found {len(graph.nodes)} nodes and {len(graph.links)} links")

    result = compute_layout(graph, layout_config)
    print(f"Placed {len(result.levels)} nodes on {len(result.rings)} rings")
    if result.unplaced:
        print(
            f"Warning: {len(result.unplaced)} unplaced node(s) not reachable from any root",
            file=sys.stderr,
        )

    # Only create the directory once the input has loaded and laid out
    args.output.mkdir(parents=True, exist_ok=True)

    generate_html(result, args.output / "diagram.html")
    print("Wrote diagram.html")

    generate_json(result, args.output / "layout.json")
    print("Wrote layout.json")

    generate_summary(result, args.output / "summary.txt")
    print("Wrote summary.txt")
    print(f"\nAll outputs written to {args.output}/")


def cmd_convert(args: argparse.Namespace) -> None:
    """Write the graph as Mermaid class-diagram markup."""
    if args.config and args.output is None:
        config = load_config(args.config)
        if "mermaid-output" in config:
            args.output = Path(config["mermaid-output"])
    if args.output is None:
        args.output = Path("diagram.mmd")

    graph = load_graph(args.input)
    diagram = generate_mermaid(graph, args.output)
    print(f"Wrote {args.output}\n\n{diagram}")


def find_matching_node(graph: TemplateGraph, term: str) -> Node | None:
    """Find node matching ``term`` by name. Error if ambiguous."""
    matches = find_nodes(graph, term)
    if len(matches) == 0:
        print(f"Error: No node matching '{term}'", file=sys.stderr)
        return None
    if len(matches) > 1:
        print(f"Error: Ambiguous name '{term}' matches:", file=sys.stderr)
        for m in matches[:10]:
            print(f"  {m.name} (id {m.id})", file=sys.stderr)
        if len(matches) > 10:
            print(f"  ... and {len(matches) - 10} more", file=sys.stderr)
        return None
    return matches[0]


def find_link_paths(graph: TemplateGraph, start, end, max_paths: int) -> tuple[list[list], bool]:
    """Find shortest link paths from ``start`` to ``end``.

    Returns:
        Tuple of (up to max_paths paths, whether more paths exist).
        If no path exists, returns ([], False).
    """
    G = to_digraph(graph)
    if not nx.has_path(G, start, end):
        return [], False
    paths = list(islice(nx.all_shortest_paths(G, start, end), max_paths + 1))
    return paths[:max_paths], len(paths) > max_paths


def cmd_trace(args: argparse.Namespace) -> None:
    """Find and display the link paths between two nodes."""
    graph = load_graph(args.input)

    from_node = find_matching_node(graph, args.from_name)
    to_node = find_matching_node(graph, args.to_name)
    if not from_node or not to_node:
        return

    paths, truncated = find_link_paths(graph, from_node.id, to_node.id, args.max_paths)
    if not paths:
        print(f"No path found from {from_node.name} to {to_node.name}")
        return

    extra_msg = ", more not shown" if truncated else ""
    print(f"\n{len(paths)} shortest path(s) of length {len(paths[0])}{extra_msg}:\n")

    node_map = graph.node_map
    for i, path in enumerate(paths):
        if i > 0:
            print()
        print(f"Path {i + 1}:")
        for depth, node_id in enumerate(path):
            arrow = "-> " if depth > 0 else ""
            print(f"{'  ' * depth}{arrow}{node_map[node_id].name}")


def main() -> None:
    """Main entry point for template-graph CLI."""
    parser = argparse.ArgumentParser(
        description="Lay out template hierarchies and convert them to class diagrams"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Place nodes on concentric rings and write an interactive HTML diagram",
    )
    add_common_args(layout_parser)
    layout_parser.add_argument(
        "--output",
        type=Path,
        help="Output directory (default: results)",
    )
    layout_parser.add_argument("--width", type=float, help="Canvas width (default: 1600)")
    layout_parser.add_argument("--height", type=float, help="Canvas height (default: 800)")
    layout_parser.add_argument(
        "--radius-step",
        type=float,
        help="Ring spacing scale (default: 3200)",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert typed nodes to Mermaid class-diagram markup",
    )
    add_common_args(convert_parser)
    convert_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file (default: diagram.mmd)",
    )

    trace_parser = subparsers.add_parser(
        "trace",
        help="Find the link paths between two nodes",
    )
    add_common_args(trace_parser)
    trace_parser.add_argument(
        "--from",
        dest="from_name",
        required=True,
        help="Source node name (case-insensitive, substring match as fallback)",
    )
    trace_parser.add_argument(
        "--to",
        dest="to_name",
        required=True,
        help="Target node name (case-insensitive, substring match as fallback)",
    )
    trace_parser.add_argument(
        "-n",
        "--max-paths",
        type=int,
        default=10,
        help="Maximum number of paths to show (default: 10)",
    )

    args = parser.parse_args()

    commands = {"layout": cmd_layout, "convert": cmd_convert, "trace": cmd_trace}
    if args.command not in commands:
        # No subcommand provided - show help
        parser.print_help()
        return

    try:
        commands[args.command](args)
    except (CyclicGraphError, GraphFormatError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
