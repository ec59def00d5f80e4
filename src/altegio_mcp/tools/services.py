from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from typing import Optional
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import build_params_from_locals, format_tool_response, handle_tool_errors
import logging
from altegio_mcp.telemetry import with_tool_metrics

logger = logging.getLogger(__name__)

services_mcp = FastMCP(name="Altegio Services Tools")


@services_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_services(
    staff_id: Optional[int] = None,
    category_id: Optional[int] = None,
    page: int = 1,
    count: int = 50,
) -> ToolResult:
    """
    List the company's services. Filter by staff_id to see only the services a
    staff member provides, or by category_id.
    """
    params = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/company/{company_id}/services", params=params)
    return format_tool_response(data)


@services_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_service_categories() -> ToolResult:
    """List the company's service categories."""
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/company/{company_id}/service_categories")
    return format_tool_response(data)
