from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import filter_active_staff, format_tool_response, handle_tool_errors
import logging
from altegio_mcp.telemetry import with_tool_metrics

logger = logging.getLogger(__name__)

staff_mcp = FastMCP(name="Altegio Staff Tools")


@staff_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_staff(active_only: bool = True) -> ToolResult:
    """
    List staff members. By default only active ones (fired=0) are returned;
    pass active_only=false to include fired staff.
    """
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/company/{company_id}/staff")
    if active_only and isinstance(data, list):
        return format_tool_response(filter_active_staff(data))
    return format_tool_response(data)


@staff_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_staff_member(staff_id: int) -> ToolResult:
    """Get a staff member by ID."""
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get(f"/staff/{{company_id}}/{staff_id}")
    return format_tool_response(data)
