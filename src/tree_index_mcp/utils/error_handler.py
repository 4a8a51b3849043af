"""
Decorator-based error handling for MCP entry points.

Linus principle: eliminate the repeated try/except pattern.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

from ..core.errors import NotFoundError, ParseError

logger = logging.getLogger(__name__)


def create_error_response(error: Exception, context: str = "") -> Dict[str, Any]:
    """Build a specific error response - say exactly what went wrong"""
    if isinstance(error, ParseError):
        return {"success": False, "error": f"Parse error: {error}"}
    elif isinstance(error, NotFoundError):
        return {"success": False, "error": str(error), "not_found": True}
    elif isinstance(error, FileNotFoundError):
        return {"success": False, "error": f"File not found: {error.filename}"}
    elif isinstance(error, PermissionError):
        return {"success": False, "error": f"Permission denied: {error.filename}"}
    elif isinstance(error, NotADirectoryError):
        return {"success": False, "error": f"Directory does not exist: {error.filename}"}
    elif isinstance(error, UnicodeDecodeError):
        return {"success": False, "error": f"File encoding error: cannot decode {error.object!r}"}
    elif isinstance(error, ValueError):
        return {"success": False, "error": f"Invalid value: {str(error)}"}
    else:
        error_msg = f"{context}: {str(error)}" if context else str(error)
        return {"success": False, "error": error_msg}


def handle_mcp_errors(func: Callable) -> Callable:
    """
    Uniform error handling for MCP tools - standardized response format.

    Successful dict results get a success flag; any exception becomes an
    error response naming the failing function.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = await func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except Exception as e:
            logger.warning(f"{func.__name__} failed: {e}")
            response = create_error_response(e)
            response["function"] = func.__name__
            return response

    return wrapper
