"""
MCP tool implementations - plain functions over a WorkspaceIndexService.

Every tool returns a JSON-serialisable dict; failures become
{"success": False, "error": ...} through handle_mcp_errors.
"""

from typing import Any, Dict, List, Optional

from .core.errors import NotFoundError
from .core.models import DocSections, EntitySymbol, SymbolKind
from .services.workspace import WorkspaceIndexService
from .utils.error_handler import handle_mcp_errors


def _parse_kind(kind: str) -> SymbolKind:
    try:
        return SymbolKind(kind.lower())
    except ValueError:
        raise ValueError(f"unknown symbol kind {kind!r} (expected 'tree' or 'node')") from None


def format_port_list(title: str, ports: List[str]) -> List[str]:
    lines = [f"**{title}**  "]
    if ports:
        lines.extend(f"- {port}  " for port in ports)
    else:
        lines.append("_None_  ")
    lines.append("")
    return lines


def format_node_markdown(name: str, signature: str, sections: DocSections) -> str:
    """Markdown hover text for a node class."""
    lines = [f"### **{name}**  ", "```cpp", signature, "```"]
    if sections.brief:
        lines.extend([f"**{sections.brief}**  ", ""])
    if sections.description:
        lines.extend([" ".join(sections.description), ""])
    lines.extend(format_port_list("Input Ports", sections.input_ports))
    lines.extend(format_port_list("Output Ports", sections.output_ports))
    return "\n".join(lines)


def format_tree_markdown(name: str, outline: str) -> str:
    """Markdown hover text for a tree outline."""
    return f"**BehaviorTree `{name}` structure:**\n\n```xml\n{outline}\n```"


def _entity_dict(entity: EntitySymbol) -> Dict[str, Any]:
    return {
        "name": entity.name,
        "start": entity.span.start,
        "end": entity.span.end,
        "children": [{"name": c.name, "offset": c.offset} for c in entity.children],
    }


# ----- index tools -----


@handle_mcp_errors
async def tool_set_workspace(service: WorkspaceIndexService, path: str) -> Dict[str, Any]:
    """Point the service at a new root and rebuild the index from scratch"""
    counts = await service.set_root(path)
    return {"path": path, "files_scanned": counts, **service.store.get_stats()}


@handle_mcp_errors
async def tool_index_stats(service: WorkspaceIndexService) -> Dict[str, Any]:
    return service.stats()


@handle_mcp_errors
async def tool_find_definition(service: WorkspaceIndexService, name: str, kind: str = "tree") -> Dict[str, Any]:
    symbol_kind = _parse_kind(kind)
    locations = service.lookup(symbol_kind, name)
    if not locations:
        raise NotFoundError(symbol_kind.value, name)
    return {"name": name, "kind": symbol_kind.value, "locations": [loc.to_dict() for loc in locations]}


@handle_mcp_errors
async def tool_definition_at(
    service: WorkspaceIndexService, file_path: str, line: int, column: int
) -> Dict[str, Any]:
    """Resolve the tree reference under a zero-based cursor position"""
    locations = await service.definition_at(file_path, line, column)
    return {"locations": [loc.to_dict() for loc in locations], "count": len(locations)}


@handle_mcp_errors
async def tool_complete_tree_ids(
    service: WorkspaceIndexService,
    prefix: str = "",
    line: Optional[str] = None,
    column: Optional[int] = None,
) -> Dict[str, Any]:
    if line is not None:
        names = service.complete_at(line, len(line) if column is None else column)
    else:
        names = service.complete(SymbolKind.TREE, prefix)
    return {"names": names, "count": len(names)}


# ----- summary tools -----


@handle_mcp_errors
async def tool_tree_outline(service: WorkspaceIndexService, file_path: str, tree_id: str) -> Dict[str, Any]:
    outline = await service.outline(file_path, tree_id)
    if outline is None:
        raise NotFoundError(service.config.entity_tag, tree_id)
    return {"tree_id": tree_id, "file_path": file_path, "outline": outline}


@handle_mcp_errors
async def tool_describe_tree(service: WorkspaceIndexService, tree_id: str) -> Dict[str, Any]:
    outline = await service.describe_tree(tree_id)
    if outline is None:
        raise NotFoundError(service.config.entity_tag, tree_id)
    return {"tree_id": tree_id, "outline": outline, "markdown": format_tree_markdown(tree_id, outline)}


@handle_mcp_errors
async def tool_node_documentation(
    service: WorkspaceIndexService, file_path: str, declaration_line: int
) -> Dict[str, Any]:
    sections = await service.documentation(file_path, declaration_line)
    if sections is None:
        raise FileNotFoundError(2, "cannot read file", file_path)
    return {"file_path": file_path, "line": declaration_line, **sections.to_dict()}


@handle_mcp_errors
async def tool_describe_node(service: WorkspaceIndexService, name: str) -> Dict[str, Any]:
    description = await service.describe_node(name)
    if description is None:
        raise NotFoundError(SymbolKind.NODE.value, name)
    return {
        "name": name,
        "location": description.location.to_dict(),
        "signature": description.signature,
        **description.sections.to_dict(),
        "markdown": format_node_markdown(name, description.signature, description.sections),
    }


@handle_mcp_errors
async def tool_document_symbols(service: WorkspaceIndexService, file_path: str) -> Dict[str, Any]:
    entities = await service.entities(file_path)
    return {"file_path": file_path, "symbols": [_entity_dict(e) for e in entities], "count": len(entities)}
