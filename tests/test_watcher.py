"""watchdog adapter tests."""

import pytest
from watchdog.events import (DirCreatedEvent, FileCreatedEvent, FileDeletedEvent, FileModifiedEvent,
                             FileMovedEvent)

from tree_index_mcp.core.models import FileEvent, FileEventType
from tree_index_mcp.services.workspace import WorkspaceIndexService
from tree_index_mcp.watcher import WorkspaceEventHandler, WorkspaceWatcher


@pytest.fixture
def recorded(sample_workspace, test_config, monkeypatch):
    service = WorkspaceIndexService(str(sample_workspace), test_config)
    events = []
    monkeypatch.setattr(service, "submit_threadsafe", events.append)
    return service, events


@pytest.mark.unit
class TestWorkspaceEventHandler:
    def test_lifecycle_events_are_translated(self, recorded, sample_workspace):
        service, events = recorded
        handler = WorkspaceEventHandler(service)
        path = str(sample_workspace / "trees" / "main.xml")

        handler.on_created(FileCreatedEvent(path))
        handler.on_modified(FileModifiedEvent(path))
        handler.on_deleted(FileDeletedEvent(path))

        assert events == [
            FileEvent(FileEventType.CREATED, path),
            FileEvent(FileEventType.CHANGED, path),
            FileEvent(FileEventType.DELETED, path),
        ]

    def test_move_is_delete_then_create(self, recorded, sample_workspace):
        service, events = recorded
        handler = WorkspaceEventHandler(service)
        old = str(sample_workspace / "trees" / "old.xml")
        new = str(sample_workspace / "trees" / "new.xml")

        handler.on_moved(FileMovedEvent(old, new))

        assert events == [FileEvent(FileEventType.DELETED, old), FileEvent(FileEventType.CREATED, new)]

    def test_irrelevant_paths_are_filtered(self, recorded, sample_workspace):
        service, events = recorded
        handler = WorkspaceEventHandler(service)

        handler.on_created(FileCreatedEvent(str(sample_workspace / "README.md")))
        handler.on_created(FileCreatedEvent(str(sample_workspace / "build" / "x.xml")))
        handler.on_created(DirCreatedEvent(str(sample_workspace / "trees" / "sub.xml")))

        assert events == []


class TestWorkspaceWatcher:
    def test_start_and_stop(self, sample_workspace, test_config):
        watcher = WorkspaceWatcher(WorkspaceIndexService(str(sample_workspace), test_config))

        assert watcher.start() is True
        assert watcher.is_active()
        watcher.stop()
        assert not watcher.is_active()

    def test_invalid_root(self, empty_workspace, test_config):
        watcher = WorkspaceWatcher(WorkspaceIndexService(str(empty_workspace / "missing"), test_config))

        assert watcher.start() is False
        assert not watcher.is_active()
