"""
Structural XML parsing into ParsedNode trees.

Repeated sibling tags are grouped into one NodeList under the tag name,
single occurrences stay bare, and child elements carrying nothing but
text collapse to a LeafValue.
"""

import xml.etree.ElementTree as ET
from typing import Union

from ..core.errors import ParseError
from ..core.models import LeafValue, NodeList, ParsedNode

DEFAULT_MAX_DEPTH = 256


def _local_name(tag: str) -> str:
    """Strip an ElementTree namespace prefix ({uri}name -> name)."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _text_of(element: ET.Element) -> str:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts).strip()


def parse_document(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ParsedNode:
    """
    Parse markup text and return its root element.

    Raises ParseError for malformed input or nesting deeper than max_depth;
    no partial tree is ever returned.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(str(e)) from e
    return _convert_element(root, 0, max_depth)


def _convert_element(element: ET.Element, depth: int, max_depth: int) -> ParsedNode:
    if depth > max_depth:
        raise ParseError(f"element nesting exceeds {max_depth} levels")

    node = ParsedNode(tag=_local_name(element.tag), attributes=dict(element.attrib))
    text = _text_of(element)
    if text:
        node.text = text

    for child in element:
        # comments and processing instructions carry a non-string tag
        if not isinstance(child.tag, str):
            continue
        key = _local_name(child.tag)
        value = _convert_child(child, depth + 1, max_depth)
        slot = node.children.get(key)
        if slot is None:
            node.children[key] = value
        elif isinstance(slot, NodeList):
            slot.items.append(value)
        else:
            node.children[key] = NodeList([slot, value])
    return node


def _convert_child(element: ET.Element, depth: int, max_depth: int) -> Union[ParsedNode, LeafValue]:
    has_elements = any(isinstance(child.tag, str) for child in element)
    if not element.attrib and not has_elements:
        text = _text_of(element)
        if text:
            return LeafValue(text)
    return _convert_element(element, depth, max_depth)
