"""
Configuration Management for Tree Index MCP

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import os
from typing import List, Optional


class IndexerConfig:
    """Workspace indexer configuration"""

    # Default values
    DEFAULT_DEBOUNCE_MS = 200  # Quiet period before a changed file is re-indexed
    DEFAULT_MAX_DEPTH = 256  # Recursion bound for parse/collect/render
    DEFAULT_TREE_PATTERNS = ["*.xml"]
    DEFAULT_NODE_PATTERNS = ["*.cpp", "*.h", "*.hpp", "*.cc", "*.hh", "*.cxx"]
    DEFAULT_ENTITY_TAG = "BehaviorTree"
    DEFAULT_ID_ATTRIBUTE = "ID"
    DEFAULT_REFERENCE_ATTRIBUTE = "main_tree_to_execute"

    def __init__(self):
        # Load from environment variables with fallback to defaults
        self.debounce_ms = self._get_int_env("TREE_INDEX_DEBOUNCE_MS", self.DEFAULT_DEBOUNCE_MS)
        self.max_depth = self._get_int_env("TREE_INDEX_MAX_DEPTH", self.DEFAULT_MAX_DEPTH)
        self.tree_patterns = self._get_list_env(
            "TREE_INDEX_TREE_PATTERNS", self.DEFAULT_TREE_PATTERNS
        )
        self.node_patterns = self._get_list_env(
            "TREE_INDEX_NODE_PATTERNS", self.DEFAULT_NODE_PATTERNS
        )
        self.entity_tag = os.environ.get("TREE_INDEX_ENTITY_TAG", self.DEFAULT_ENTITY_TAG).strip()
        self.id_attribute = self.DEFAULT_ID_ATTRIBUTE
        self.reference_attribute = self.DEFAULT_REFERENCE_ATTRIBUTE
        self.exclude_dirs = self._get_list_env("TREE_INDEX_EXCLUDE_DIRS", [])
        self.workspace_root = os.environ.get("TREE_INDEX_ROOT", "").strip()
        self.debug = self._get_bool_env("TREE_INDEX_DEBUG", False)

        # Validate configuration
        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_list_env(self, key: str, default: List[str]) -> List[str]:
        """Get comma separated list from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None:
            return list(default)
        return [item.strip() for item in value.split(",") if item.strip()]

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean flag from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None:
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    def _validate_config(self):
        """Validate configuration values"""
        if self.debounce_ms <= 0:
            raise ValueError("debounce_ms must be positive")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")
        if not self.tree_patterns:
            raise ValueError("tree_patterns cannot be empty")
        if not self.node_patterns:
            raise ValueError("node_patterns cannot be empty")
        if not self.entity_tag:
            raise ValueError("entity_tag cannot be empty")

    def get_debounce_seconds(self) -> float:
        """Get debounce delay in seconds"""
        return self.debounce_ms / 1000.0

    def __repr__(self) -> str:
        return (
            f"IndexerConfig("
            f"debounce_ms={self.debounce_ms}, "
            f"max_depth={self.max_depth}, "
            f"tree_patterns={self.tree_patterns}, "
            f"node_patterns={self.node_patterns}, "
            f"entity_tag={self.entity_tag!r}, "
            f"debug={self.debug})"
        )


# Global configuration instance
_config: Optional[IndexerConfig] = None


def get_config() -> IndexerConfig:
    """Get global indexer configuration instance"""
    global _config
    if _config is None:
        _config = IndexerConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Tree Index Configuration Environment Variables:

- TREE_INDEX_DEBOUNCE_MS: Delay before a changed file is re-indexed (default: 200)
- TREE_INDEX_MAX_DEPTH: Maximum element nesting walked by the parser (default: 256)
- TREE_INDEX_TREE_PATTERNS: Comma separated globs for tree XML files (default: *.xml)
- TREE_INDEX_NODE_PATTERNS: Comma separated globs for C++ node sources
  (default: *.cpp,*.h,*.hpp,*.cc,*.hh,*.cxx)
- TREE_INDEX_ENTITY_TAG: Element that defines a tree (default: BehaviorTree)
- TREE_INDEX_EXCLUDE_DIRS: Extra directory names to skip while scanning
- TREE_INDEX_ROOT: Workspace indexed at server start (default: current directory)
- TREE_INDEX_DEBUG: Enable debug logging (default: false)

Example usage:
    export TREE_INDEX_DEBOUNCE_MS=500
    export TREE_INDEX_NODE_PATTERNS=*.cpp,*.hpp
    export TREE_INDEX_DEBUG=1
"""
