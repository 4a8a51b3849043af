"""
Per-file symbol scanning using regex patterns.

Matching is lexical, not structural: occurrences inside comments or string
literals are indexed too.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Pattern, Tuple

import xxhash

from ..utils.file_reader import LineIndex, read_text
from .index_store import IndexStore
from .models import Location, SymbolKind

logger = logging.getLogger(__name__)


class PatternHandler(NamedTuple):
    pattern: Pattern[str]
    name_group: int  # regex group holding the symbol name


def tree_pattern(entity_tag: str = "BehaviorTree", id_attribute: str = "ID") -> PatternHandler:
    """Opening tag of an entity whose first attribute is its identifier."""
    return PatternHandler(
        re.compile(
            r"<" + re.escape(entity_tag) + r"\s+" + re.escape(id_attribute) + r"=[\"']([^\"']+)[\"']"
        ),
        1,
    )


# Every class/struct keyword followed by an identifier, forward declarations
# and template parameters included.
NODE_PATTERN = PatternHandler(
    re.compile(r"\b(?:class|struct)\s+([A-Za-z_]\w*)"),
    1,
)


def content_digest(text: str) -> str:
    """Fast content fingerprint - xxhash3 is 5-10x faster than MD5"""
    return xxhash.xxh3_64(text.encode("utf-8", errors="replace")).hexdigest()


@dataclass
class IndexResult:
    """Outcome of indexing one file."""

    file_path: str
    kind: SymbolKind
    count: int = 0
    unchanged: bool = False
    error: Optional[str] = None
    discarded: bool = False

    @property
    def success(self) -> bool:
        return self.error is None


class FileIndexer:
    """
    Scans file text for definitions and applies them to an IndexStore.

    Each call replaces only the given file's contributions for one kind.
    """

    def __init__(self, store: IndexStore, patterns: Optional[Dict[SymbolKind, PatternHandler]] = None):
        self.store = store
        self.patterns = patterns or {
            SymbolKind.TREE: tree_pattern(),
            SymbolKind.NODE: NODE_PATTERN,
        }

    def scan(self, kind: SymbolKind, text: str) -> List[Tuple[str, int]]:
        """Return (name, match offset) pairs in document order."""
        handler = self.patterns[kind]
        return [(m.group(handler.name_group), m.start()) for m in handler.pattern.finditer(text)]

    def index_text(self, file_path: str, kind: SymbolKind, text: str) -> IndexResult:
        """Scan text and replace file_path's entries. Unchanged text is skipped."""
        digest = content_digest(text)
        if self.store.digest(kind, file_path) == digest:
            logger.debug(f"Skipping unchanged {file_path}")
            return IndexResult(file_path, kind, unchanged=True)

        line_index = LineIndex(text)
        pairs = []
        for name, offset in self.scan(kind, text):
            line, column = line_index.position_at(offset)
            pairs.append((name, Location(file_path, line, column)))

        count = self.store.replace(file_path, kind, pairs, digest=digest)
        return IndexResult(file_path, kind, count=count)

    async def index_file(
        self,
        file_path: str,
        kind: SymbolKind,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> IndexResult:
        """
        Read file_path and index it.

        A read failure clears the file's previous entries and is reported in
        the result. When is_current() turns false while the read is pending
        the result is discarded and the store is left untouched.
        """
        logger.debug(f"Indexing file {file_path}")
        try:
            text = await read_text(file_path)
        except OSError as e:
            if is_current is not None and not is_current():
                return IndexResult(file_path, kind, discarded=True, error=str(e))
            logger.warning(f"Error indexing {file_path}: {e}")
            self.store.replace(file_path, kind, [])
            return IndexResult(file_path, kind, error=str(e))

        if is_current is not None and not is_current():
            logger.debug(f"Discarding stale index result for {file_path}")
            return IndexResult(file_path, kind, discarded=True)

        return self.index_text(file_path, kind, text)
