"""
Parsing helpers: XML structure, outlines, spans, doc comments, cursors.
"""

from .collector import collect_by_tag, find_entity
from .cursor import completion_prefix, node_tag_at, quoted_value_at, tree_reference_at
from .doc_comments import extract_comment_block, parse_doc_sections, parse_documentation
from .outline import build_outline, render_outline
from .spans import entities_in_file, resolve_span
from .structural import parse_document

__all__ = [
    "build_outline",
    "collect_by_tag",
    "completion_prefix",
    "entities_in_file",
    "extract_comment_block",
    "find_entity",
    "node_tag_at",
    "parse_doc_sections",
    "parse_document",
    "parse_documentation",
    "quoted_value_at",
    "render_outline",
    "resolve_span",
    "tree_reference_at",
]
