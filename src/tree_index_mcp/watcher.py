"""
watchdog adapter feeding file lifecycle events to the workspace service.
"""

import logging
import os
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .core.models import FileEvent, FileEventType
from .services.workspace import WorkspaceIndexService

logger = logging.getLogger(__name__)


class WorkspaceEventHandler(FileSystemEventHandler):
    """Translates watchdog events into FileEvents for one service."""

    def __init__(self, service: WorkspaceIndexService):
        super().__init__()
        self.service = service

    def _emit(self, event_type: FileEventType, path) -> None:
        path = os.fsdecode(path)
        if self.service.kind_for_path(path) is None:
            return
        self.service.submit_threadsafe(FileEvent(event_type, path))

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(FileEventType.CREATED, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(FileEventType.CHANGED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(FileEventType.DELETED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._emit(FileEventType.DELETED, event.src_path)
            self._emit(FileEventType.CREATED, event.dest_path)


class WorkspaceWatcher:
    """Owns the watchdog observer thread for a workspace root."""

    def __init__(self, service: WorkspaceIndexService):
        self.service = service
        self._observer: Optional[Observer] = None

    def start(self) -> bool:
        if not self.service.root_path or not os.path.isdir(self.service.root_path):
            logger.warning(f"Not watching invalid root: {self.service.root_path!r}")
            return False
        self._observer = Observer()
        self._observer.schedule(WorkspaceEventHandler(self.service), self.service.root_path, recursive=True)
        self._observer.daemon = True
        self._observer.start()
        logger.info(f"Watching {self.service.root_path}")
        return True

    def stop(self) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def is_active(self) -> bool:
        return self._observer is not None and self._observer.is_alive()
