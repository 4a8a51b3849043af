#!/usr/bin/env python
"""
Start the tree index MCP server from a source checkout.

The workspace defaults to the current directory; set TREE_INDEX_ROOT to
index another one.
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))


def main() -> None:
    try:
        from tree_index_mcp.mcp_server import main as server_main
    except ModuleNotFoundError as exc:
        sys.stderr.write(
            f"tree-index-mcp cannot start: module {exc.name!r} is missing.\n"
            "Install the runtime dependencies (mcp, aiofiles, xxhash, watchdog) "
            "with `pip install -e .` from this directory.\n"
        )
        raise SystemExit(1) from exc
    server_main()


if __name__ == "__main__":
    main()
