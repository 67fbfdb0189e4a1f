"""Pyvis rendering of a radial template layout."""

import json
from pathlib import Path

from .classify import EdgeType, classify_edges
from .radial import LayoutResult

NODE_COLOR = "steelblue"


def _box_width(name: str, type_name: str) -> int:
    """Box width used in the browser view: wide enough for name and type."""
    return 10 + max(len(name), len(type_name)) * 7


def render_graph(result: LayoutResult, output_path: Path) -> None:
    """Render placed nodes with pyvis.

    Only nodes with coordinates are drawn; links touching an unplaced or
    unknown node are left out.

    Args:
        result: Output of ``compute_layout``.
        output_path: Path to write the HTML file.
    """
    from pyvis.network import Network

    net = Network(
        height="100vh",
        width="100%",
        bgcolor="#ffffff",
        directed=True,
    )
    net.toggle_physics(False)

    placed = [node for node in result.graph.nodes if node.id in result.levels]
    for node in placed:
        level = result.levels[node.id]
        net.add_node(
            node.id,
            label=f"{node.name}\n{node.type}",
            title=f"{node.name}\n{node.type}\nlevel {level}",
            x=node.x,
            y=node.y,
            fixed=True,
            shape="box",
            color=NODE_COLOR,
            font={"color": "white", "size": 12},
            widthConstraint={"minimum": _box_width(node.name, node.type)},
        )

    # Edge styles by type
    edge_styles = {
        EdgeType.TREE: {"color": "#999999", "width": 2},
        EdgeType.FORWARD_SKIP: {"color": "rgba(153,153,153,0.4)", "width": 1},
    }

    classified = classify_edges(result.graph.links, result.levels)
    seen: set[tuple] = set()
    for edge_type, style in edge_styles.items():
        for parent, child in classified[edge_type]:
            # vis.js keeps one edge per pair; duplicate links collapse
            if (parent, child) in seen:
                continue
            seen.add((parent, child))
            net.add_edge(parent, child, color=style["color"], width=style["width"])

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "navigationButtons": true,
            "zoomView": true,
            "dragView": true,
            "dragNodes": true,
            "hover": true,
            "tooltipDelay": 100
        },
        "edges": {
            "arrows": {"to": {"enabled": true, "scaleFactor": 0.5}},
            "smooth": false
        },
        "nodes": {
            "borderWidth": 1,
            "borderWidthSelected": 3
        }
    }
    """)

    net.save_graph(str(output_path))

    _inject_highlight_script(output_path, result)


def _script_json(value) -> str:
    """JSON safe to embed in an inline <script> block."""
    return (
        json.dumps(value)
        .replace("&", "\\u0026")
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
    )


def search_index(result: LayoutResult) -> dict[str, object]:
    """Name -> id for placed nodes; the first node with a name wins."""
    index: dict[str, object] = {}
    for node in result.graph.nodes:
        if node.id in result.levels:
            index.setdefault(node.name, node.id)
    return index


def _inject_highlight_script(output_file: Path, result: LayoutResult) -> None:
    """Inject JavaScript for click-to-highlight and search-and-center.

    Clicking a node paints it orange, its parents purple and its children
    green. The search box selects a node by exact (case-insensitive) name and
    centres the view on it.
    """
    with open(output_file, "r") as f:
        html = f.read()

    # JSON object keys are strings, so the script looks ids up via String(id)
    parents_json = _script_json({str(k): v for k, v in result.adjacency.parents.items()})
    children_json = _script_json({str(k): v for k, v in result.adjacency.children.items()})
    names_json = _script_json(search_index(result))

    custom_script = f"""
    <script type="text/javascript">
    var parentsMap = {parents_json};
    var childrenMap = {children_json};
    var nameToId = {names_json};
    var baseColor = '{NODE_COLOR}';

    function paint(ids, color) {{
        var updates = [];
        ids.forEach(function(id) {{
            if (nodes.get(id)) updates.push({{id: id, color: color}});
        }});
        nodes.update(updates);
    }}

    function resetColors() {{
        paint(nodes.getIds(), baseColor);
    }}

    function highlight(nodeId) {{
        resetColors();
        paint(parentsMap[String(nodeId)] || [], 'purple');
        paint(childrenMap[String(nodeId)] || [], 'green');
        paint([nodeId], 'orange');
    }}

    function searchNode() {{
        var term = document.getElementById('searchInput').value.trim().toLowerCase();
        if (!term) return;
        var match = null;
        Object.keys(nameToId).forEach(function(name) {{
            if (match === null && name.toLowerCase() === term) match = nameToId[name];
        }});
        if (match === null) {{
            alert('Node not found.');
            return;
        }}
        network.selectNodes([match]);
        highlight(match);
        network.focus(match, {{scale: 1.5, animation: {{duration: 750}}}});
    }}

    document.addEventListener('DOMContentLoaded', function() {{
        setTimeout(function() {{
            if (typeof network === 'undefined') return;

            var panel = document.createElement('div');
            panel.style.cssText = 'position:fixed;top:10px;left:10px;padding:10px;background:white;border:1px solid #ccc;border-radius:5px;font-family:sans-serif;font-size:12px;z-index:1000;box-shadow:0 2px 10px rgba(0,0,0,0.1);';
            var options = Object.keys(nameToId).sort(function(a, b) {{
                return a.localeCompare(b, undefined, {{sensitivity: 'base'}});
            }}).map(function(name) {{
                var option = document.createElement('option');
                option.value = name;
                return option.outerHTML;
            }}).join('');
            panel.innerHTML = '<input id="searchInput" list="nodeNames" placeholder="Search node">' +
                '<datalist id="nodeNames">' + options + '</datalist>' +
                '<button id="searchButton">Find</button>';
            document.body.appendChild(panel);

            document.getElementById('searchButton').addEventListener('click', searchNode);
            document.getElementById('searchInput').addEventListener('keydown', function(event) {{
                if (event.key === 'Enter') searchNode();
            }});

            network.on('selectNode', function(params) {{
                highlight(params.nodes[0]);
            }});
            network.on('deselectNode', function(params) {{
                resetColors();
            }});
        }}, 500);
    }});
    </script>
    """

    # Insert before closing body tag
    html = html.replace("</body>", custom_script + "</body>")

    with open(output_file, "w") as f:
        f.write(html)
