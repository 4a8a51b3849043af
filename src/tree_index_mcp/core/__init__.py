"""
Core module - symbol index, per-file indexer and debouncing.
"""

from .debounce import DebounceScheduler
from .errors import NotFoundError, ParseError, TreeIndexError
from .file_indexer import FileIndexer, IndexResult
from .index_store import IndexStore
from .models import (DocSections, EntitySymbol, FileEvent, FileEventType, Location,
                     ParsedNode, Span, SymbolKind)

__all__ = [
    "DebounceScheduler",
    "DocSections",
    "EntitySymbol",
    "FileEvent",
    "FileEventType",
    "FileIndexer",
    "IndexResult",
    "IndexStore",
    "Location",
    "NotFoundError",
    "ParseError",
    "ParsedNode",
    "Span",
    "SymbolKind",
    "TreeIndexError",
]
