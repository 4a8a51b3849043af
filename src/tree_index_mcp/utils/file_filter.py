"""
File filtering for workspace scans.
"""

import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional


class FileFilter:
    """Decides which directories to descend into and which files to index."""

    DEFAULT_EXCLUDE_DIRS = {
        ".git", ".svn", ".hg", ".idea", ".vscode", ".cache",
        "__pycache__", "node_modules", "venv", ".venv",
        "build", "install", "log", "dist", "cmake-build-debug", "cmake-build-release",
    }

    TEMPORARY_SUFFIXES = (".swp", ".swo", ".tmp", ".bak", "~")

    def __init__(self, additional_excludes: Optional[Iterable[str]] = None):
        self.exclude_dirs = set(self.DEFAULT_EXCLUDE_DIRS)
        if additional_excludes:
            self.exclude_dirs.update(additional_excludes)

    def should_exclude_directory(self, dir_name: str) -> bool:
        return dir_name in self.exclude_dirs

    def is_temporary_file(self, file_path: Path) -> bool:
        name = file_path.name
        return name.startswith(".#") or name.endswith(self.TEMPORARY_SUFFIXES)

    def matches(self, file_path: Path, patterns: List[str]) -> bool:
        """True if the file name matches one of the glob patterns."""
        if self.is_temporary_file(file_path):
            return False
        return any(fnmatch.fnmatch(file_path.name, pattern) for pattern in patterns)

    def get_exclude_summary(self) -> dict:
        return {"exclude_dirs": sorted(self.exclude_dirs)}
