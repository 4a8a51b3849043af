"""Linus-style MCP server for the behavior-tree workspace index."""
import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import Context, FastMCP

from . import tools
from .config import get_config
from .services.workspace import WorkspaceIndexService
from .watcher import WorkspaceWatcher

logger = logging.getLogger(__name__)


@dataclass
class TreeIndexerContext:
    service: WorkspaceIndexService
    watcher: WorkspaceWatcher


@asynccontextmanager
async def indexer_lifespan(_server: FastMCP) -> AsyncIterator[TreeIndexerContext]:
    config = get_config()
    service = WorkspaceIndexService(config.workspace_root or os.getcwd(), config)
    logger.info("Starting initial workspace index")
    await service.index_workspace()
    events_task = service.start_events()
    watcher = WorkspaceWatcher(service)
    watcher.start()
    try:
        yield TreeIndexerContext(service=service, watcher=watcher)
    finally:
        watcher.stop()
        events_task.cancel()
        try:
            await events_task
        except asyncio.CancelledError:
            pass
        service.shutdown()


mcp = FastMCP("TreeIndexer", lifespan=indexer_lifespan)


def _context(ctx: Context) -> TreeIndexerContext:
    return ctx.request_context.lifespan_context


@mcp.resource("config://tree-indexer")
def get_config_resource() -> str:
    return repr(get_config())


@mcp.tool()
async def set_workspace(path: str, ctx: Context) -> Dict[str, Any]:
    """Set the workspace root and rebuild the index."""
    indexer = _context(ctx)
    indexer.watcher.stop()
    result = await tools.tool_set_workspace(indexer.service, path)
    # on failure the old root is still current and is watched again
    indexer.watcher.start()
    return result


@mcp.tool()
async def find_definition(name: str, ctx: Context, kind: str = "tree") -> Dict[str, Any]:
    """Locations defining a tree ID (kind='tree') or node class (kind='node')."""
    return await tools.tool_find_definition(_context(ctx).service, name, kind)


@mcp.tool()
async def definition_at(file_path: str, line: int, column: int, ctx: Context) -> Dict[str, Any]:
    """Definitions of the tree referenced at a zero-based cursor position."""
    return await tools.tool_definition_at(_context(ctx).service, file_path, line, column)


@mcp.tool()
async def complete_tree_ids(
    ctx: Context, prefix: str = "", line: Optional[str] = None, column: Optional[int] = None
) -> Dict[str, Any]:
    """Tree IDs starting with prefix, or completing an ID="... value in line."""
    return await tools.tool_complete_tree_ids(_context(ctx).service, prefix, line, column)


@mcp.tool()
async def tree_outline(file_path: str, tree_id: str, ctx: Context) -> Dict[str, Any]:
    """Indented structure of a tree defined in file_path."""
    return await tools.tool_tree_outline(_context(ctx).service, file_path, tree_id)


@mcp.tool()
async def describe_tree(tree_id: str, ctx: Context) -> Dict[str, Any]:
    """Structure of the first definition of a tree ID."""
    return await tools.tool_describe_tree(_context(ctx).service, tree_id)


@mcp.tool()
async def node_documentation(file_path: str, declaration_line: int, ctx: Context) -> Dict[str, Any]:
    """Brief, description and ports documented above a declaration line."""
    return await tools.tool_node_documentation(_context(ctx).service, file_path, declaration_line)


@mcp.tool()
async def describe_node(name: str, ctx: Context) -> Dict[str, Any]:
    """Signature and documentation of a C++ node class."""
    return await tools.tool_describe_node(_context(ctx).service, name)


@mcp.tool()
async def document_symbols(file_path: str, ctx: Context) -> Dict[str, Any]:
    """Trees of one XML file with their spans and child tags."""
    return await tools.tool_document_symbols(_context(ctx).service, file_path)


@mcp.tool()
async def index_stats(ctx: Context) -> Dict[str, Any]:
    """Name, location and file counts per symbol kind."""
    return await tools.tool_index_stats(_context(ctx).service)


def main():
    config = get_config()
    logging.basicConfig(level=logging.DEBUG if config.debug else logging.ERROR, stream=sys.stderr)
    mcp.run()


if __name__ == '__main__':
    main()
