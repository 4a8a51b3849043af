"""
Doxygen-style documentation comments of C++ node declarations.

Recognised layout:

    /**
     * @brief Moves the arm.
     *
     * Free text lines.
     *
     * Input Ports:
     * - target
     * Output Ports:
     * - reached
     */
    class MoveArm : public BT::SyncActionNode
"""

import re
from typing import List

from ..core.models import DocSections

_BLOCK_OPEN = re.compile(r"^\s*/\*\*?")
_BLOCK_CLOSE = re.compile(r"\*/\s*$")
_LEADING_STAR = re.compile(r"^\s*\*\s?")
_LINE_COMMENT = re.compile(r"^\s*//[/!]?\s?")

_BRIEF = re.compile(r"^[@\\]brief\b\s*(.*)$")
_INPUT_HEADER = re.compile(r"^input\s+ports\s*:\s*$", re.IGNORECASE)
_OUTPUT_HEADER = re.compile(r"^output\s+ports\s*:\s*$", re.IGNORECASE)
_BULLET = re.compile(r"^[-*+]+\s*")

DESCRIPTION = "description"
INPUT_PORTS = "input_ports"
OUTPUT_PORTS = "output_ports"


def extract_comment_block(lines: List[str], declaration_line: int) -> List[str]:
    """
    Comment lines attached above lines[declaration_line], top to bottom.

    Blank lines right above the declaration are skipped. A block comment
    is collected up to its opening line; otherwise consecutive `//` lines
    are collected. Returns [] when nothing is attached or the block never
    opens.
    """
    i = min(declaration_line, len(lines)) - 1
    while i >= 0 and not lines[i].strip():
        i -= 1
    if i < 0:
        return []

    block: List[str] = []
    if lines[i].strip().endswith("*/"):
        while i >= 0:
            text = lines[i].strip()
            block.insert(0, text)
            if "/*" in text:
                return block
            i -= 1
        return []

    while i >= 0 and lines[i].strip().startswith("//"):
        block.insert(0, lines[i].strip())
        i -= 1
    return block


def _clean(line: str) -> str:
    if _LINE_COMMENT.match(line):
        return _LINE_COMMENT.sub("", line, count=1).strip()
    line = _BLOCK_OPEN.sub("", line, count=1)
    line = _BLOCK_CLOSE.sub("", line, count=1)
    line = _LEADING_STAR.sub("", line, count=1)
    return line.strip()


def parse_doc_sections(raw_lines: List[str]) -> DocSections:
    """
    Split a raw comment block into brief, description and port lists.

    Headers switch the current section; a brief line resets it to the
    description. Blank lines are ignored everywhere.
    """
    sections = DocSections()
    current = DESCRIPTION

    for raw in raw_lines:
        line = _clean(raw)
        if not line:
            continue

        brief = _BRIEF.match(line)
        if brief:
            sections.brief = brief.group(1).strip()
            current = DESCRIPTION
            continue
        if _INPUT_HEADER.match(line):
            current = INPUT_PORTS
            continue
        if _OUTPUT_HEADER.match(line):
            current = OUTPUT_PORTS
            continue

        if current == INPUT_PORTS:
            sections.input_ports.append(_BULLET.sub("", line, count=1).strip())
        elif current == OUTPUT_PORTS:
            sections.output_ports.append(_BULLET.sub("", line, count=1).strip())
        else:
            sections.description.append(line)

    return sections


def parse_documentation(lines: List[str], declaration_line: int) -> DocSections:
    return parse_doc_sections(extract_comment_block(lines, declaration_line))
