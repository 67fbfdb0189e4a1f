"""Tests for mermaid.py class-diagram output."""

import pytest

from template_graph.graph import Node, parse_graph
from template_graph.mermaid import (
    DEFAULT_STRATEGY,
    STRATEGIES,
    NodeStrategy,
    node_identifier,
    register_strategy,
    sanitize,
    strategy_for,
    to_class_diagram,
)


class TestSanitize:
    """Tests for sanitize and node_identifier."""

    def test_whitespace_and_punctuation(self):
        """Whitespace becomes underscores, other non-word characters vanish."""
        assert sanitize("Is  Active?") == "Is_Active"
        assert sanitize("Leaf A") == "Leaf_A"
        assert sanitize("a-b.c (d)") == "abc_d"

    @pytest.mark.parametrize("text", ["Leaf A", "  spaced\tout  ", "x/y:z", "Ünïcode name"])
    def test_idempotent(self, text):
        """Sanitizing twice changes nothing."""
        once = sanitize(text)

        assert sanitize(once) == once

    def test_identifier_suffix(self):
        """Identifiers carry the id so equal names stay distinct."""
        first = Node(id=1, name="Same", type="section")
        second = Node(id=2, name="Same", type="section")

        assert node_identifier(first) == "Same_1"
        assert node_identifier(second) == "Same_2"


class TestStrategyTable:
    """Tests for strategy lookup and registration."""

    def test_unknown_type_uses_default(self):
        """Unknown types degrade to the section-like default."""
        node = Node(id=1, name="W", type="widget", root_id=9, bases=[5])

        strategy = strategy_for(node)

        assert strategy is DEFAULT_STRATEGY
        assert strategy.stereotype == "section"
        assert strategy.relations(node) == [9]

    def test_register_strategy(self, monkeypatch):
        """Registered types are picked up by the serializer."""
        monkeypatch.setattr("template_graph.mermaid.STRATEGIES", dict(STRATEGIES))
        register_strategy(
            "note",
            NodeStrategy(
                stereotype="note",
                inner=lambda node: ["+ text : string"],
                edge=lambda node: "..>",
                relations=lambda node: [node.root_id],
            ),
        )
        nodes = [
            Node(id=1, name="Root", type="template"),
            Node(id=2, name="Memo", type="note", root_id=1),
        ]

        diagram = to_class_diagram(nodes)

        assert "      <<note>>" in diagram
        assert "      + text : string" in diagram
        assert "    Root_1 ..> Memo_2" in diagram
        assert "note" not in STRATEGIES


class TestToClassDiagram:
    """Tests for to_class_diagram function."""

    def test_worked_example(self, typed_example):
        """One template with two fields."""
        diagram = to_class_diagram(typed_example.nodes)

        assert diagram == (
            "classDiagram\n"
            "    class Root_1 {\n"
            "      <<template>>\n"
            "    }\n"
            "    class Leaf_A_2 {\n"
            "      <<field>>\n"
            "      + value : string\n"
            "    }\n"
            "    class Leaf_B_3 {\n"
            "      <<field>>\n"
            "      + value : string\n"
            "    }\n"
            "    Root_1 -- Leaf_A_2\n"
            "    Root_1 -- Leaf_B_3\n"
        )

    def test_every_type(self, typed_graph_data):
        """Each type uses its own arrow and relation field."""
        graph = parse_graph(typed_graph_data)

        edges = [
            line.strip()
            for line in to_class_diagram(graph.nodes).splitlines()
            if line.startswith("    ") and not line.startswith("    class")
            and not line.startswith("      ") and line.strip() != "}"
        ]

        assert edges == [
            "Base_Template_1 --|> Child_Template_2",
            "Base_Template_1 <|-- Header_3",
            "Child_Template_2 <|-- Header_3",
            "Child_Template_2 o-- Is_Active_4",
            "Header_3 -- Title_5",
            "Child_Template_2 <|-- Custom_6",
        ]

    def test_branch_members_and_default_stereotype(self, typed_graph_data):
        """Branches get a condition member; unknown types show as sections."""
        graph = parse_graph(typed_graph_data)
        diagram = to_class_diagram(graph.nodes)

        assert "    class Is_Active_4 {\n      <<branch>>\n      + condition : bool\n    }" in diagram
        assert "    class Custom_6 {\n      <<section>>\n    }" in diagram

    def test_dangling_relation_dropped(self):
        """A relation to an unknown id produces no edge and no error."""
        nodes = [
            Node(id=1, name="Root", type="template"),
            Node(id=2, name="Orphan", type="field", section=99),
            Node(id=3, name="Mixed", type="section", bases=[1, 42]),
        ]

        diagram = to_class_diagram(nodes)

        assert "Orphan_2" in diagram
        assert " -- Orphan_2" not in diagram
        assert "Root_1 <|-- Mixed_3" in diagram
        assert diagram.count("<|--") == 1

    def test_deterministic(self, typed_graph_data):
        """Serializing the same input twice gives identical text."""
        first = to_class_diagram(parse_graph(typed_graph_data).nodes)
        second = to_class_diagram(parse_graph(typed_graph_data).nodes)

        assert first == second

    def test_empty(self):
        """No nodes gives header-only markup."""
        assert to_class_diagram([]) == "classDiagram\n"
