"""
Utility modules for the Tree Index MCP server.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- file utilities: File filtering, walking and async reading
"""

from .error_handler import create_error_response, handle_mcp_errors
from .file_filter import FileFilter
from .file_reader import LineIndex, read_lines, read_text
from .file_walker import FileWalker, create_file_walker

__all__ = [
    'create_error_response',
    'handle_mcp_errors',
    'FileFilter',
    'FileWalker',
    'LineIndex',
    'create_file_walker',
    'read_lines',
    'read_text',
]
