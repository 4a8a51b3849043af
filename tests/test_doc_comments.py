"""Documentation comment extraction and section parsing tests."""

import pytest

from tree_index_mcp.core.models import DocSections
from tree_index_mcp.parsing.doc_comments import (extract_comment_block, parse_doc_sections,
                                                 parse_documentation)

from conftest import MOVE_ARM_HPP


def declaration_line(text, name):
    for i, line in enumerate(text.splitlines()):
        if line.startswith(f"class {name}"):
            return i
    raise AssertionError(name)


@pytest.mark.unit
class TestParseDocSections:
    def test_brief_and_ports(self):
        sections = parse_doc_sections([
            "@brief Moves the arm.",
            "",
            "Input Ports:",
            "- target",
            "Output Ports:",
            "- reached",
        ])

        assert sections == DocSections(
            brief="Moves the arm.", description=[], input_ports=["target"], output_ports=["reached"]
        )

    def test_headers_are_case_insensitive(self):
        sections = parse_doc_sections(["INPUT PORTS:", "* goal", "output ports :", "+ done"])
        assert sections.input_ports == ["goal"]
        assert sections.output_ports == ["done"]

    def test_header_mid_line_is_description(self):
        sections = parse_doc_sections(["Reads the Input Ports: target and goal"])
        assert sections.description == ["Reads the Input Ports: target and goal"]
        assert sections.input_ports == []

    def test_brief_returns_to_description(self):
        sections = parse_doc_sections(["Input Ports:", "- a", "\\brief Short.", "More text."])
        assert sections.input_ports == ["a"]
        assert sections.brief == "Short."
        assert sections.description == ["More text."]

    def test_comment_syntax_is_stripped(self):
        sections = parse_doc_sections(["/**", " * @brief Waits.", " *", " * Sleeps a while.", " */"])
        assert sections.brief == "Waits."
        assert sections.description == ["Sleeps a while."]

    def test_empty_input(self):
        assert parse_doc_sections([]).is_empty()


@pytest.mark.unit
class TestExtractCommentBlock:
    def test_block_comment(self):
        lines = MOVE_ARM_HPP.splitlines()

        block = extract_comment_block(lines, declaration_line(MOVE_ARM_HPP, "MoveArm"))

        assert block[0] == "/**"
        assert block[-1] == "*/"
        assert "* @brief Moves the arm." in block

    def test_line_comments(self):
        lines = MOVE_ARM_HPP.splitlines()

        block = extract_comment_block(lines, declaration_line(MOVE_ARM_HPP, "CloseGripper"))

        assert block == ["// Closes the gripper.", "// Input Ports:", "// - force"]

    def test_blank_lines_between_comment_and_declaration(self):
        lines = ["// Waits.", "", "class Wait {};"]
        assert extract_comment_block(lines, 2) == ["// Waits."]

    def test_no_comment(self):
        assert extract_comment_block(["int x;", "class A {};"], 1) == []
        assert extract_comment_block(["class A {};"], 0) == []

    def test_unterminated_block_returns_nothing(self):
        assert extract_comment_block([" * stray", " */", "class A {};"], 2) == []


@pytest.mark.unit
class TestParseDocumentation:
    def test_block_documentation(self):
        lines = MOVE_ARM_HPP.splitlines()

        sections = parse_documentation(lines, declaration_line(MOVE_ARM_HPP, "MoveArm"))

        assert sections.brief == "Moves the arm."
        assert sections.description == ["Plans and executes a joint trajectory."]
        assert sections.input_ports == ["target"]
        assert sections.output_ports == ["reached"]

    def test_line_comment_documentation(self):
        lines = MOVE_ARM_HPP.splitlines()

        sections = parse_documentation(lines, declaration_line(MOVE_ARM_HPP, "CloseGripper"))

        assert sections.brief == ""
        assert sections.description == ["Closes the gripper."]
        assert sections.input_ports == ["force"]
