"""
Entity collection over ParsedNode trees.
"""

from typing import List, Optional, Tuple

from ..core.errors import ParseError
from ..core.models import NodeList, ParsedNode
from .structural import DEFAULT_MAX_DEPTH


def collect_by_tag(
    root: ParsedNode,
    target_tag: str,
    id_attribute: str = "ID",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[ParsedNode]:
    """
    Every node tagged target_tag that carries id_attribute, in pre-order.

    Nodes are found at any depth, including below wrapper elements.
    Matching tags without the identifier are skipped.
    """
    found = []
    stack: List[Tuple[ParsedNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            raise ParseError(f"element nesting exceeds {max_depth} levels")
        if node.tag == target_tag and id_attribute in node.attributes:
            found.append(node)

        children = []
        for slot in node.children.values():
            if isinstance(slot, ParsedNode):
                children.append(slot)
            elif isinstance(slot, NodeList):
                children.extend(item for item in slot.items if isinstance(item, ParsedNode))
        # reversed so the first child is visited first
        stack.extend((child, depth + 1) for child in reversed(children))
    return found


def find_entity(
    root: ParsedNode,
    target_tag: str,
    name: str,
    id_attribute: str = "ID",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[ParsedNode]:
    """First entity whose identifier equals name."""
    for node in collect_by_tag(root, target_tag, id_attribute, max_depth):
        if node.attributes.get(id_attribute) == name:
            return node
    return None
