"""Outline rendering tests."""

import pytest

from tree_index_mcp.core.errors import ParseError
from tree_index_mcp.core.models import LeafValue, ParsedNode
from tree_index_mcp.parsing.outline import build_outline, render_outline

from conftest import GRASP_TREE_XML, MAIN_TREE_XML


@pytest.mark.unit
class TestRenderOutline:
    def test_nested_lists_and_nodes(self):
        outline = build_outline(
            '<Root ID="Main"><Seq><Leaf v="A"/><Leaf v="B"/></Seq></Root>', "Main", entity_tag="Root"
        )

        assert outline == "\n".join([
            '- <Root ID="Main">',
            "  - <Seq>",
            '    - <Leaf v="A" />',
            '    - <Leaf v="B" />',
            "  - </Seq>",
            "- </Root>",
        ])

    def test_leaf_text_is_not_echoed(self):
        node = ParsedNode("Action", {"ID": "MoveArm"}, {"description": LeafValue("secret text")})

        lines = render_outline("Action", node)

        assert lines == ['- <Action ID="MoveArm">', "  - <description />", "- </Action>"]

    def test_childless_node_is_self_closing(self):
        assert render_outline("Wait", ParsedNode("Wait")) == ["- <Wait />"]

    def test_start_depth_indents_every_line(self):
        node = ParsedNode("Seq", {}, {"A": ParsedNode("A")})
        assert render_outline("Seq", node, depth=2) == ["    - <Seq>", "      - <A />", "    - </Seq>"]

    def test_output_is_deterministic(self):
        first = build_outline(MAIN_TREE_XML, "MainTree")
        second = build_outline(MAIN_TREE_XML, "MainTree")
        assert first == second

    def test_depth_bound(self):
        node = ParsedNode("a")
        for _ in range(5):
            node = ParsedNode("a", {}, {"a": node})
        with pytest.raises(ParseError):
            render_outline("a", node, max_depth=2)


@pytest.mark.unit
class TestBuildOutline:
    def test_behavior_tree_outline(self):
        outline = build_outline(MAIN_TREE_XML, "MainTree")

        assert outline.splitlines() == [
            '- <BehaviorTree ID="MainTree">',
            '  - <Sequence name="root_sequence">',
            '    - <SubTree ID="GraspObject" />',
            '    - <MoveArm target="{goal}" />',
            '    - <MoveArm target="{home}" />',
            "  - </Sequence>",
            "- </BehaviorTree>",
        ]

    def test_empty_child_elements(self):
        outline = build_outline(GRASP_TREE_XML, "GraspObject")

        assert "    - <AlwaysFailure />" in outline.splitlines()

    def test_missing_entity_returns_none(self):
        assert build_outline(MAIN_TREE_XML, "Nope") is None

    def test_malformed_text_raises(self):
        with pytest.raises(ParseError):
            build_outline('<root><BehaviorTree ID="A">', "A")
