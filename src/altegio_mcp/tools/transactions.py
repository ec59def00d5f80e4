from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import build_params_from_locals, format_tool_response, handle_tool_errors
from altegio_mcp.telemetry import with_tool_metrics

transactions_mcp = FastMCP(name="Altegio Transactions Tools")


@transactions_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_transactions(
    start_date: str,
    end_date: str,
    page: int = 1,
    count: int = 50,
) -> ToolResult:
    """Financial transactions for a date range (YYYY-MM-DD)."""
    params = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/transactions/{company_id}", params=params)
    return format_tool_response(data)
