"""
Shared symbol index - one name -> locations map per symbol kind.

Bad programmers worry about the code. Good programmers worry about data structures.
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import Location, SymbolKind

logger = logging.getLogger(__name__)


class IndexStore:
    """
    Name -> ordered Location list, kept separately for each SymbolKind.

    Locations of one name keep the order their files were indexed in, then
    document order within a file. Every mutation runs under a single lock,
    so a reader never observes a file half-replaced.
    """

    def __init__(self):
        self._maps: Dict[SymbolKind, Dict[str, List[Location]]] = {kind: {} for kind in SymbolKind}
        # (kind, file_path) -> digest of the text the current entries came from
        self._digests: Dict[Tuple[SymbolKind, str], str] = {}
        self._lock = threading.RLock()

    def replace(
        self,
        file_path: str,
        kind: SymbolKind,
        pairs: Iterable[Tuple[str, Location]],
        digest: Optional[str] = None,
    ) -> int:
        """
        Drop every location of file_path for kind, then insert pairs.

        An empty pairs list still clears the file's previous entries.
        Returns the number of inserted locations.
        """
        pairs = list(pairs)
        with self._lock:
            self._remove_locked(file_path, kind)
            index = self._maps[kind]
            for name, location in pairs:
                index.setdefault(name, []).append(location)
                logger.debug(
                    f"Indexed {kind.value} {name!r} at {location.file_path}:{location.line + 1}"
                )
            if digest is None:
                self._digests.pop((kind, file_path), None)
            else:
                self._digests[(kind, file_path)] = digest
        return len(pairs)

    def remove_file(self, file_path: str, kind: SymbolKind) -> List[str]:
        """Remove file_path from every entry of kind. Returns names deleted outright."""
        with self._lock:
            removed = self._remove_locked(file_path, kind)
            self._digests.pop((kind, file_path), None)
        return removed

    def _remove_locked(self, file_path: str, kind: SymbolKind) -> List[str]:
        index = self._maps[kind]
        removed = []
        for name in list(index):
            remaining = [loc for loc in index[name] if loc.file_path != file_path]
            if remaining:
                index[name] = remaining
            else:
                del index[name]
                removed.append(name)
                logger.debug(f"Removed {kind.value} {name!r} (no more definitions)")
        return removed

    def lookup(self, kind: SymbolKind, name: str) -> List[Location]:
        """Locations defining name, in index order. Empty list if unknown."""
        with self._lock:
            return list(self._maps[kind].get(name, ()))

    def contains(self, kind: SymbolKind, name: str) -> bool:
        with self._lock:
            return name in self._maps[kind]

    def names(self, kind: SymbolKind) -> List[str]:
        with self._lock:
            return list(self._maps[kind])

    def files(self, kind: SymbolKind) -> Set[str]:
        """Files currently contributing at least one location."""
        with self._lock:
            return {loc.file_path for locs in self._maps[kind].values() for loc in locs}

    def digest(self, kind: SymbolKind, file_path: str) -> Optional[str]:
        with self._lock:
            return self._digests.get((kind, file_path))

    def get_stats(self) -> Dict[str, Dict[str, int]]:
        with self._lock:
            return {
                kind.value: {
                    "names": len(index),
                    "locations": sum(len(locs) for locs in index.values()),
                    "files": len({loc.file_path for locs in index.values() for loc in locs}),
                }
                for kind, index in self._maps.items()
            }

    def clear(self) -> None:
        with self._lock:
            for index in self._maps.values():
                index.clear()
            self._digests.clear()
