"""
Tree Index MCP - live definition index for behavior-tree XML workspaces.

Tracks tree IDs defined in XML files and node classes declared in C++
sources, and answers definition, outline and documentation queries.
"""

__version__ = "0.1.0"
