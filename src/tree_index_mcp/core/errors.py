"""
Error types for the tree index core.

I/O failures are not wrapped: they surface as the builtin OSError family.
"""

from typing import Optional


class TreeIndexError(Exception):
    """Base class for tree index errors."""


class ParseError(TreeIndexError):
    """Malformed markup (or nesting beyond the configured depth bound)."""

    def __init__(self, reason: str, file_path: Optional[str] = None):
        self.reason = reason
        self.file_path = file_path
        where = f"{file_path}: " if file_path else ""
        super().__init__(f"{where}{reason}")


class NotFoundError(TreeIndexError):
    """A lookup, outline or documentation query matched nothing."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} {name!r} not found")
