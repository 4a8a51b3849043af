"""Span resolution and document-symbol tests."""

import pytest

from tree_index_mcp.core.errors import ParseError
from tree_index_mcp.parsing.spans import entities_in_file, resolve_span

from conftest import MAIN_TREE_XML


@pytest.mark.unit
class TestResolveSpan:
    def test_simple_span(self):
        text = 'x<E ID="X"><A/></E>y'

        span = resolve_span(text, '<E ID="X"', "</E>")

        assert text[span.start:span.end] == '<E ID="X"><A/></E>'

    def test_nested_same_tag_ends_at_inner_close(self):
        # Nearest following close tag wins, not the matching one
        text = '<E ID="X"><E ID="Y"></E></E>'

        span = resolve_span(text, '<E ID="X"', "</E>")

        assert span.start == 0
        assert span.end == text.index("</E>") + len("</E>")
        assert text[span.start:span.end] == '<E ID="X"><E ID="Y"></E>'

    def test_missing_open_tag(self):
        assert resolve_span("<E/>", '<E ID="X"', "</E>") is None

    def test_missing_close_tag_gives_empty_span(self):
        span = resolve_span('ab<E ID="X">', '<E ID="X"', "</E>", "f.xml")
        assert (span.file_path, span.start, span.end) == ("f.xml", 2, 2)


@pytest.mark.unit
class TestEntitiesInFile:
    def test_entities_with_children(self):
        symbols = entities_in_file(MAIN_TREE_XML, "main.xml")

        assert [s.name for s in symbols] == ["MainTree"]
        tree = symbols[0]
        body = MAIN_TREE_XML[tree.span.start:tree.span.end]
        assert body.startswith('<BehaviorTree ID="MainTree">')
        assert body.endswith("</BehaviorTree>")
        assert tree.child_names == ["Sequence"]
        assert MAIN_TREE_XML[tree.children[0].offset:].startswith("<Sequence")

    def test_repeated_children_are_marked_as_list(self):
        text = '<root><BehaviorTree ID="T"><MoveArm/><MoveArm/><Wait/></BehaviorTree></root>'

        symbols = entities_in_file(text)

        assert symbols[0].child_names == ["MoveArm[]", "Wait"]

    def test_single_quoted_identifier(self):
        text = "<root><BehaviorTree ID='T'><Wait/></BehaviorTree></root>"

        symbols = entities_in_file(text)

        assert symbols[0].span.start == text.index("<BehaviorTree")

    def test_child_offset_skips_longer_tag_names(self):
        text = '<root><BehaviorTree ID="T"><Sequence/><Seq/></BehaviorTree></root>'

        children = entities_in_file(text)[0].children

        assert [c.name for c in children] == ["Sequence", "Seq"]
        assert children[1].offset == text.index("<Seq/>")

    def test_child_with_entity_tag_is_found_after_opening_tag(self):
        text = '<root><BehaviorTree ID="T"><BehaviorTree/></BehaviorTree></root>'

        children = entities_in_file(text)[0].children

        assert children[0].offset == text.index("<BehaviorTree/>")

    def test_malformed_document_raises(self):
        with pytest.raises(ParseError):
            entities_in_file('<root><BehaviorTree ID="T">')
