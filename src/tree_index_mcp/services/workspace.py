"""
Workspace index service - owns the IndexStore for the process lifetime.

File lifecycle events arrive on a queue and are consumed by a single
loop, so events for one file are handled in the order they were sent.
Queries read the current file text on demand; only the index persists.
"""

import asyncio
import errno
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from ..config import IndexerConfig, get_config
from ..core.debounce import DebounceScheduler
from ..core.file_indexer import FileIndexer, IndexResult, NODE_PATTERN, tree_pattern
from ..core.index_store import IndexStore
from ..core.models import (DocSections, EntitySymbol, FileEvent, FileEventType, Location,
                           NodeDescription, SymbolKind)
from ..parsing.cursor import completion_prefix, tree_reference_at
from ..parsing.doc_comments import parse_documentation
from ..parsing.outline import build_outline
from ..parsing.spans import entities_in_file
from ..utils.file_filter import FileFilter
from ..utils.file_reader import read_lines, read_text
from ..utils.file_walker import FileWalker

logger = logging.getLogger(__name__)


class WorkspaceIndexService:
    """Index of tree IDs and node classes for one workspace root."""

    def __init__(self, root_path: str = "", config: Optional[IndexerConfig] = None):
        self.root_path = root_path
        self.config = config or get_config()
        self.store = IndexStore()
        self.indexer = FileIndexer(self.store, {
            SymbolKind.TREE: tree_pattern(self.config.entity_tag, self.config.id_attribute),
            SymbolKind.NODE: NODE_PATTERN,
        })
        self.scheduler = DebounceScheduler(self.config.debounce_ms)
        self.file_filter = FileFilter(self.config.exclude_dirs)
        self.walker = FileWalker(self.file_filter)
        self._patterns = {
            SymbolKind.TREE: self.config.tree_patterns,
            SymbolKind.NODE: self.config.node_patterns,
        }
        self._events: Optional[asyncio.Queue] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._generations: Dict[str, int] = {}
        # bumped on every root change; results started under an older epoch are dropped
        self._epoch = 0
        self.initial_scan_complete = False

    # ----- indexing -----

    def kind_for_path(self, file_path: str) -> Optional[SymbolKind]:
        """Symbol kind a file contributes to, decided by its name. None outside the root."""
        path = Path(file_path)
        if self.root_path:
            try:
                parents = path.relative_to(self.root_path).parent.parts
            except ValueError:
                return None
            if any(self.file_filter.should_exclude_directory(part) for part in parents):
                return None
        for kind, patterns in self._patterns.items():
            if self.file_filter.matches(path, patterns):
                return kind
        return None

    def discover_files(self, kind: SymbolKind) -> List[str]:
        if not self.root_path:
            return []
        return self.walker.find_files(self.root_path, self._patterns[kind])

    async def index_workspace(self) -> Dict[str, int]:
        """
        Scan every matching file of both kinds and wait for all of them.

        Returns the number of files scanned per kind.
        """
        loop = asyncio.get_running_loop()
        epoch = self._epoch
        counts = {}
        tasks = []
        for kind in SymbolKind:
            logger.info(f"Scanning workspace for {kind.value} files...")
            files = await loop.run_in_executor(None, self.discover_files, kind)
            logger.info(f"Found {len(files)} {kind.value} file(s)")
            counts[kind.value] = len(files)
            tasks.extend(
                self.indexer.index_file(path, kind, is_current=lambda: self._epoch == epoch)
                for path in files
            )

        results = await asyncio.gather(*tasks)
        failed = [r for r in results if not r.success]
        if failed:
            logger.warning(f"{len(failed)} file(s) could not be indexed")
        self.initial_scan_complete = True
        stats = self.store.get_stats()
        logger.info(
            f"Initial index complete: {stats['tree']['names']} tree IDs, "
            f"{stats['node']['names']} node classes"
        )
        return counts

    async def reindex(self, file_path: str) -> Optional[IndexResult]:
        """Re-index one file unless it was deleted while this ran."""
        kind = self.kind_for_path(file_path)
        if kind is None:
            return None
        generation = self._generations.get(file_path, 0)
        epoch = self._epoch

        def is_current() -> bool:
            return self._epoch == epoch and self._generations.get(file_path, 0) == generation

        return await self.indexer.index_file(file_path, kind, is_current=is_current)

    def schedule_reindex(self, file_path: str) -> None:
        self.scheduler.schedule(file_path, lambda: self.reindex(file_path))

    def remove_file(self, file_path: str) -> List[str]:
        """Cancel any pending re-index of file_path and drop its entries."""
        self._generations[file_path] = self._generations.get(file_path, 0) + 1
        self.scheduler.cancel(file_path)
        removed = []
        for kind in SymbolKind:
            removed.extend(self.store.remove_file(file_path, kind))
        logger.info(f"Removed file {file_path} from index")
        return removed

    async def set_root(self, root_path: str) -> Dict[str, int]:
        """
        Switch to another workspace root and rebuild the index from scratch.

        Timers, queued events and in-flight re-indexes of the old root are
        dropped before the new scan starts. A path that is not a directory
        raises NotADirectoryError and leaves the current index untouched.
        """
        if not os.path.isdir(root_path):
            raise NotADirectoryError(errno.ENOTDIR, "Directory does not exist", root_path)

        self._epoch += 1
        self.root_path = root_path
        self.scheduler.cancel_all()
        self._discard_queued_events()
        await self.scheduler.drain()
        self.store.clear()
        self._generations.clear()
        self.initial_scan_complete = False
        logger.info(f"Workspace root set to {root_path}")
        return await self.index_workspace()

    # ----- event channel -----

    def _queue(self) -> asyncio.Queue:
        if self._events is None:
            self._events = asyncio.Queue()
            self._loop = asyncio.get_running_loop()
        return self._events

    async def submit(self, event: FileEvent) -> None:
        await self._queue().put(event)

    def submit_threadsafe(self, event: FileEvent) -> None:
        """Enqueue from a non-loop thread (the file watcher)."""
        if self._loop is None or self._events is None:
            logger.debug(f"Event loop not running, dropping {event}")
            return
        self._loop.call_soon_threadsafe(self._events.put_nowait, event)

    def handle_event(self, event: FileEvent) -> None:
        if self.kind_for_path(event.path) is None:
            return
        logger.debug(f"File event {event.type.value}: {event.path}")
        if event.type == FileEventType.DELETED:
            self.remove_file(event.path)
        else:
            self.schedule_reindex(event.path)

    def start_events(self) -> asyncio.Task:
        """Open the event channel and start the consumer loop as a task."""
        self._queue()
        return asyncio.get_running_loop().create_task(self.run_events())

    async def run_events(self) -> None:
        """Consume lifecycle events until cancelled."""
        queue = self._queue()
        while True:
            event = await queue.get()
            try:
                self.handle_event(event)
            except Exception:
                logger.exception(f"Failed to handle {event.type.value} event for {event.path}")
            finally:
                queue.task_done()

    def _discard_queued_events(self) -> None:
        if self._events is None:
            return
        while True:
            try:
                self._events.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._events.task_done()

    async def wait_idle(self) -> None:
        """Wait until queued events are handled and fired re-index tasks finish."""
        if self._events is not None:
            await self._events.join()
        await self.scheduler.drain()

    def shutdown(self) -> None:
        self.scheduler.cancel_all()

    # ----- queries -----

    def lookup(self, kind: SymbolKind, name: str) -> List[Location]:
        locations = self.store.lookup(kind, name)
        logger.debug(f"Lookup {kind.value} {name!r} -> {len(locations)} location(s)")
        return locations

    def complete(self, kind: SymbolKind, prefix: str = "") -> List[str]:
        return [name for name in self.store.names(kind) if name.startswith(prefix)]

    def complete_at(self, line: str, column: int) -> List[str]:
        """Tree IDs completing the value typed at column, [] outside ID="..."."""
        prefix = completion_prefix(line, column, self._reference_attributes())
        if prefix is None:
            return []
        return self.complete(SymbolKind.TREE, prefix)

    def _reference_attributes(self):
        return (self.config.id_attribute, self.config.reference_attribute)

    async def outline(self, file_path: str, entity_name: str) -> Optional[str]:
        """Outline of entity_name as defined in file_path. ParseError propagates."""
        try:
            text = await read_text(file_path)
        except OSError as e:
            logger.warning(f"Outline: cannot read {file_path}: {e}")
            return None
        return build_outline(
            text, entity_name, self.config.entity_tag, self.config.id_attribute, self.config.max_depth
        )

    async def documentation(self, file_path: str, declaration_line: int) -> Optional[DocSections]:
        """Doc sections above a declaration line; None if the file is unreadable."""
        try:
            lines = await read_lines(file_path)
        except OSError as e:
            logger.warning(f"Documentation: cannot read {file_path}: {e}")
            return None
        return parse_documentation(lines, declaration_line)

    async def entities(self, file_path: str) -> List[EntitySymbol]:
        """Entities of one file with spans and child tags. ParseError propagates."""
        try:
            text = await read_text(file_path)
        except OSError as e:
            logger.warning(f"Entities: cannot read {file_path}: {e}")
            return []
        return entities_in_file(
            text, file_path, self.config.entity_tag, self.config.id_attribute, self.config.max_depth
        )

    async def describe_tree(self, name: str) -> Optional[str]:
        """Outline of the first definition of tree name."""
        locations = self.lookup(SymbolKind.TREE, name)
        if not locations:
            return None
        return await self.outline(locations[0].file_path, name)

    async def describe_node(self, name: str) -> Optional[NodeDescription]:
        """Signature and documentation of the first declaration of node class name."""
        locations = self.lookup(SymbolKind.NODE, name)
        if not locations:
            return None
        location = locations[0]
        try:
            lines = await read_lines(location.file_path)
        except OSError as e:
            logger.warning(f"Node description: cannot read {location.file_path}: {e}")
            return None
        if location.line >= len(lines):
            return None
        signature = lines[location.line].strip()
        logger.debug(f"Node {name!r} signature: {signature}")
        return NodeDescription(name, location, signature, parse_documentation(lines, location.line))

    async def definition_at(self, file_path: str, line: int, column: int) -> List[Location]:
        """Definitions of the tree referenced under the cursor."""
        try:
            lines = await read_lines(file_path)
        except OSError as e:
            logger.warning(f"Definition: cannot read {file_path}: {e}")
            return []
        if not 0 <= line < len(lines):
            return []
        name = tree_reference_at(lines[line], column, self._reference_attributes())
        if name is None:
            logger.debug("Definition: no tree reference under cursor")
            return []
        return self.lookup(SymbolKind.TREE, name)

    def stats(self) -> Dict[str, object]:
        return {
            "root_path": self.root_path,
            "initial_scan_complete": self.initial_scan_complete,
            "pending_reindex": len(self.scheduler.pending_keys()),
            **self.store.get_stats(),
        }
