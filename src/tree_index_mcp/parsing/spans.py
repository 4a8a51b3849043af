"""
Text spans of entities for document-symbol trees.

The close boundary is the nearest following close tag, not the matching
one: an entity that contains another element of its own tag ends at the
inner element's close tag.
"""

import logging
import re
from typing import List, Optional

from ..core.models import ChildSymbol, EntitySymbol, NodeList, Span
from .collector import collect_by_tag
from .structural import DEFAULT_MAX_DEPTH, parse_document

logger = logging.getLogger(__name__)


def _child_tag(tag: str):
    """Opening tag of exactly `tag`, so <Seq does not match <Sequence."""
    return re.compile(r"<" + re.escape(tag) + r"(?=[\s/>])")


def resolve_span(text: str, open_pattern: str, close_pattern: str, file_path: str = "") -> Optional[Span]:
    """
    Span from the first open_pattern to the end of the next close_pattern.

    None when open_pattern does not occur. A missing close tag yields an
    empty span at the start offset.
    """
    start = text.find(open_pattern)
    if start == -1:
        return None
    close = text.find(close_pattern, start)
    end = close + len(close_pattern) if close != -1 else start
    return Span(file_path, start, end)


def _entity_span(text: str, tag: str, id_attribute: str, name: str, file_path: str) -> Optional[Span]:
    close_tag = f"</{tag}>"
    for quote in ('"', "'"):
        span = resolve_span(text, f"<{tag} {id_attribute}={quote}{name}{quote}", close_tag, file_path)
        if span is not None:
            return span
    return None


def entities_in_file(
    text: str,
    file_path: str = "",
    entity_tag: str = "BehaviorTree",
    id_attribute: str = "ID",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[EntitySymbol]:
    """
    Entities of text with their spans and immediate child tags.

    Repeated child tags are reported once, as "Tag[]". ParseError propagates.
    """
    root = parse_document(text, max_depth)
    nodes = collect_by_tag(root, entity_tag, id_attribute, max_depth)
    logger.debug(f"Found {len(nodes)} {entity_tag} node(s) in {file_path or '<text>'}")

    symbols = []
    for node in nodes:
        name = node.attributes[id_attribute]
        span = _entity_span(text, entity_tag, id_attribute, name, file_path)
        if span is None:
            logger.debug(f"Start tag not found for {id_attribute}={name}")
            continue

        # children are searched after the entity's own opening tag
        body_start = text.find(">", span.start) + 1 or span.start + 1
        children = []
        for key, slot in node.children.items():
            match = _child_tag(key).search(text, body_start)
            if match is None:
                continue
            children.append(ChildSymbol(f"{key}[]" if isinstance(slot, NodeList) else key, match.start()))
        symbols.append(EntitySymbol(name, span, children))
    return symbols
