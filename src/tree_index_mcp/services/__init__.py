"""Services built on the core index."""

from .workspace import WorkspaceIndexService

__all__ = ["WorkspaceIndexService"]
