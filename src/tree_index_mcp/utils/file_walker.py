"""
Centralized file walking utilities for the Tree Index MCP server.

Provides workspace traversal integrated with the FileFilter system, so the
initial scan and the watcher agree on which files belong to which kind.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional

from .file_filter import FileFilter


class FileWalker:
    """Centralized file walking with integrated filtering."""

    def __init__(self, file_filter: Optional[FileFilter] = None):
        """
        Initialize the file walker.

        Args:
            file_filter: FileFilter instance, creates default if None
        """
        self.file_filter = file_filter or FileFilter()

    def walk_files(self, project_path: str, patterns: List[str]) -> Iterator[Path]:
        """
        Walk through all files matching patterns in a project directory.

        Args:
            project_path: Root directory to walk
            patterns: Glob patterns matched against file names

        Yields:
            Path objects in a deterministic (sorted) order
        """
        for root, dirs, files in os.walk(project_path):
            # Filter directories in-place to avoid descending into excluded dirs
            dirs[:] = sorted(d for d in dirs if not self.file_filter.should_exclude_directory(d))

            for file in sorted(files):
                file_path = Path(root) / file
                if self.file_filter.matches(file_path, patterns):
                    yield file_path

    def find_files(self, project_path: str, patterns: List[str]) -> List[str]:
        """
        Collect matching files as strings.

        Args:
            project_path: Root directory to search
            patterns: Glob patterns matched against file names

        Returns:
            List of file paths
        """
        return [str(path) for path in self.walk_files(project_path, patterns)]

    def count_files(self, project_path: str, patterns: List[str]) -> int:
        count = 0
        for _ in self.walk_files(project_path, patterns):
            count += 1
        return count


def create_file_walker(additional_excludes: Optional[List[str]] = None) -> FileWalker:
    """
    Factory function to create a FileWalker with custom exclusions.

    Args:
        additional_excludes: Additional directory names to exclude

    Returns:
        Configured FileWalker instance
    """
    return FileWalker(FileFilter(additional_excludes))
