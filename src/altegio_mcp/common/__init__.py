from .helpers import (
    SearchQuery,
    detect_search_type,
    filter_active_staff,
    filter_by_api_id
)
from .responses import (
    ToolValidationError,
    format_tool_response,
    format_text_response,
    format_error_response,
    handle_tool_errors
)
from .utils import build_params_from_locals

__all__ = [
    "SearchQuery",
    "detect_search_type",
    "filter_active_staff",
    "filter_by_api_id",
    "ToolValidationError",
    "format_tool_response",
    "format_text_response",
    "format_error_response",
    "handle_tool_errors",
    "build_params_from_locals"
]
