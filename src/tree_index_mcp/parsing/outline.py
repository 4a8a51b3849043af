"""
Indented text outlines of ParsedNode subtrees.

Structure only: text content is never echoed.
"""

import logging
from typing import List, Optional

from ..core.errors import ParseError
from ..core.models import LeafValue, NodeList, ParsedNode
from .collector import find_entity
from .structural import DEFAULT_MAX_DEPTH, parse_document

logger = logging.getLogger(__name__)


def render_outline(
    tag: str, node: ParsedNode, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> List[str]:
    """
    Render node under tag as outline lines, two spaces per depth level.

    Childless nodes become one self-closing line; others get an opening
    line, their children in document order and a closing line.
    """
    lines: List[str] = []
    _render(tag, node, depth, depth + max_depth, lines)
    return lines


def _render(tag: str, node: ParsedNode, depth: int, limit: int, lines: List[str]) -> None:
    if depth > limit:
        raise ParseError(f"outline nesting exceeds {limit} levels")

    indent = "  " * depth
    attrs = " ".join(f'{name}="{value}"' for name, value in node.attributes.items())
    head = f"{tag} {attrs}" if attrs else tag

    if not node.has_children():
        lines.append(f"{indent}- <{head} />")
        return

    lines.append(f"{indent}- <{head}>")
    for key, slot in node.children.items():
        if isinstance(slot, NodeList):
            for item in slot.items:
                _render_value(key, item, depth + 1, limit, lines)
        else:
            _render_value(key, slot, depth + 1, limit, lines)
    lines.append(f"{indent}- </{tag}>")


def _render_value(tag: str, value, depth: int, limit: int, lines: List[str]) -> None:
    if isinstance(value, ParsedNode):
        _render(tag, value, depth, limit, lines)
    elif isinstance(value, LeafValue):
        lines.append(f"{'  ' * depth}- <{tag} />")
    else:
        raise TypeError(f"unexpected child slot {type(value).__name__}")


def build_outline(
    text: str,
    entity_name: str,
    entity_tag: str = "BehaviorTree",
    id_attribute: str = "ID",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[str]:
    """
    Outline of the entity named entity_name in text, or None if absent.

    ParseError from malformed text propagates to the caller.
    """
    root = parse_document(text, max_depth)
    node = find_entity(root, entity_tag, entity_name, id_attribute, max_depth)
    if node is None:
        logger.debug(f"{entity_tag} {entity_name!r} not found")
        return None
    lines = render_outline(entity_tag, node, max_depth=max_depth)
    logger.debug(f"Outline complete for {entity_name!r} ({len(lines)} lines)")
    return "\n".join(lines)
