from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from typing import Optional
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import (
    build_params_from_locals,
    detect_search_type,
    format_tool_response,
    handle_tool_errors,
    ToolValidationError
)
import logging
from altegio_mcp.telemetry import with_tool_metrics

logger = logging.getLogger(__name__)

clients_mcp = FastMCP(name="Altegio Clients Tools")


@clients_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def search_clients(query: str, page: int = 1, count: int = 20) -> ToolResult:
    """
    <usecase>
    Search clients by name, phone number or email.
    </usecase>

    <instructions>
    Pass whatever the user gave in query; the search field is picked automatically:
    phone-like input ("+7 999 123-45-67") searches by phone, input containing "@"
    searches by email, anything else searches by full name.
    </instructions>
    """
    trimmed = query.strip()
    if not trimmed:
        raise ToolValidationError("Search query must not be empty")

    field, value = detect_search_type(trimmed)
    logger.info(f"search_clients classified query as {field}")
    params = {"page": page, "count": count, field: value}
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/clients/{company_id}", params=params)
    return format_tool_response(data)


@clients_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_client(client_id: int) -> ToolResult:
    """Get a client by ID."""
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get(f"/client/{{company_id}}/{client_id}")
    return format_tool_response(data)


@clients_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def create_client(name: str, phone: str, email: Optional[str] = None) -> ToolResult:
    """Create a new client."""
    body = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.post("/clients/{company_id}", data=body)
    return format_tool_response(data)


@clients_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def update_client(
    client_id: int,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    email: Optional[str] = None,
) -> ToolResult:
    """Edit a client. Only the fields given are changed; at least one is required."""
    body = build_params_from_locals(locals(), exclude=["client_id"])
    if not body:
        raise ToolValidationError("Specify at least one field to update")
    async with AltegioAPIClient(load_config()) as api:
        data = await api.put(f"/client/{{company_id}}/{client_id}", data=body)
    return format_tool_response(data)
