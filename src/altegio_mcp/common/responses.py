import functools
import json
import logging
from typing import Any, Callable
from fastmcp.tools import ToolResult

logger = logging.getLogger(__name__)


class ToolValidationError(ValueError):
    """Tool arguments rejected before any request is sent."""


def format_tool_response(data: Any) -> ToolResult:
    """Wrap an API payload as a single pretty-printed JSON text block."""
    return ToolResult(content=json.dumps(data, indent=2, ensure_ascii=False))


def format_text_response(text: str) -> ToolResult:
    return ToolResult(content=text)


def format_error_response(error: Any) -> ToolResult:
    message = str(error)
    return ToolResult(content=message, is_error=True)


def handle_tool_errors(func: Callable) -> Callable:
    """
    Convert any exception raised by a tool into an error result so nothing
    escapes to the MCP transport.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Error in {func.__name__}: {e}")
            return format_error_response(e)

    return wrapper
