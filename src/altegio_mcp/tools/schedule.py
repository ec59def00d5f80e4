from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from typing import Optional, List, Dict, Any
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import build_params_from_locals, format_tool_response, handle_tool_errors
import logging
from altegio_mcp.telemetry import with_tool_metrics

logger = logging.getLogger(__name__)

schedule_mcp = FastMCP(name="Altegio Schedule Tools")


@schedule_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_available_times(
    staff_id: int,
    date: str,
    service_ids: Optional[List[int]] = None,
) -> ToolResult:
    """
    Free booking slots of a staff member on a date (YYYY-MM-DD).
    Pass service_ids so slot length matches the services' duration.
    """
    params: Dict[str, Any] = {}
    if service_ids:
        params["service_ids"] = ",".join(str(service_id) for service_id in service_ids)
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get(f"/book_times/{{company_id}}/{staff_id}/{date}", params=params)
    return format_tool_response(data)


@schedule_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_available_dates(
    staff_id: Optional[int] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> ToolResult:
    """Working days open for booking, optionally for one staff member and a date range."""
    params = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/book_dates/{company_id}", params=params)
    return format_tool_response(data)
