"""
Data models for the tree index.

Only the two symbol maps in IndexStore persist; everything else here is
rebuilt per query from current file text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class SymbolKind(str, Enum):
    """Category of indexed name."""

    TREE = "tree"  # BehaviorTree ID in an XML file
    NODE = "node"  # class/struct declared in a C++ source


@dataclass(frozen=True, order=True)
class Location:
    """Zero-based position of a definition. Orders by file, then offset."""

    file_path: str
    line: int
    column: int

    def to_dict(self) -> Dict[str, object]:
        return {"file_path": self.file_path, "line": self.line, "column": self.column}


@dataclass(frozen=True)
class Span:
    """Character range [start, end) of an entity inside raw file text."""

    file_path: str
    start: int
    end: int


@dataclass
class ParsedNode:
    """Element of a parsed document: attributes and child slots in document order."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Dict[str, "ChildSlot"] = field(default_factory=dict)
    text: Optional[str] = None

    def has_children(self) -> bool:
        return bool(self.children)

    def get(self, attribute: str) -> Optional[str]:
        return self.attributes.get(attribute)


@dataclass
class LeafValue:
    """Child element reduced to its text: no attributes and no element children."""

    text: str = ""


@dataclass
class NodeList:
    """Repeated sibling elements sharing one tag, in document order."""

    items: List[Union[ParsedNode, LeafValue]] = field(default_factory=list)


ChildSlot = Union[ParsedNode, NodeList, LeafValue]


@dataclass
class DocSections:
    """Structured view of a documentation comment."""

    brief: str = ""
    description: List[str] = field(default_factory=list)
    input_ports: List[str] = field(default_factory=list)
    output_ports: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.brief or self.description or self.input_ports or self.output_ports)

    def to_dict(self) -> Dict[str, object]:
        return {
            "brief": self.brief,
            "description": list(self.description),
            "input_ports": list(self.input_ports),
            "output_ports": list(self.output_ports),
        }


@dataclass
class ChildSymbol:
    """Immediate child tag of an entity, with the offset of its first opening tag."""

    name: str
    offset: int


@dataclass
class EntitySymbol:
    """Entity found in a file, for structure-tree presentation."""

    name: str
    span: Span
    children: List[ChildSymbol] = field(default_factory=list)

    @property
    def child_names(self) -> List[str]:
        return [child.name for child in self.children]


@dataclass
class NodeDescription:
    """Signature and documentation of a native node class."""

    name: str
    location: Location
    signature: str
    sections: DocSections


class FileEventType(str, Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileEvent:
    """File lifecycle notification fed to the indexer loop."""

    type: FileEventType
    path: str
