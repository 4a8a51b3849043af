"""
Cursor helpers: what does a (line text, column) position point at?

Columns are zero-based character offsets into the line.
"""

import re
from typing import Optional, Sequence

_QUOTED = re.compile(r'"([^"]+)"')
_WORD = re.compile(r"[A-Za-z_]\w*")
_TAG_PREFIX = re.compile(r"</?\s*$")

REFERENCE_ATTRIBUTES = ("ID", "main_tree_to_execute")


def _attribute_prefix(attributes: Sequence[str]) -> str:
    return "(?:" + "|".join(re.escape(attr) for attr in attributes) + r")\s*=\s*"


def quoted_value_at(line: str, column: int) -> Optional[str]:
    """Value of the double-quoted string touching column, quotes excluded."""
    for match in _QUOTED.finditer(line):
        if match.start() <= column <= match.end():
            return match.group(1)
    return None


def tree_reference_at(
    line: str, column: int, attributes: Sequence[str] = REFERENCE_ATTRIBUTES
) -> Optional[str]:
    """Tree name under the cursor when it is the value of ID= or main_tree_to_execute=."""
    attr_before = re.compile(r"(?:^|\s)" + _attribute_prefix(attributes) + r"$")
    for match in _QUOTED.finditer(line):
        if match.start() <= column <= match.end():
            if attr_before.search(line[: match.start()]):
                return match.group(1)
            return None
    return None


def node_tag_at(line: str, column: int) -> Optional[str]:
    """Element name under the cursor, only when it directly follows `<` or `</`."""
    for match in _WORD.finditer(line):
        if match.start() <= column <= match.end():
            if _TAG_PREFIX.search(line[: match.start()]):
                return match.group(0)
            return None
    return None


def completion_prefix(
    line: str, column: int, attributes: Sequence[str] = REFERENCE_ATTRIBUTES
) -> Optional[str]:
    """Partial value typed so far inside ID="... or main_tree_to_execute="..."""
    pattern = re.compile(r"(?:^|\s)" + _attribute_prefix(attributes) + r'"([^"]*)$')
    match = pattern.search(line[:column])
    return match.group(1) if match else None
