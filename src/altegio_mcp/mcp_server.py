from fastmcp import FastMCP
from fastmcp.server.middleware.logging import StructuredLoggingMiddleware
from fastmcp.server.middleware.rate_limiting import SlidingWindowRateLimitingMiddleware
from fastmcp.server.middleware.error_handling import ErrorHandlingMiddleware
import logging
from altegio_mcp import __version__
from altegio_mcp.config import load_config
from altegio_mcp.tools import (
    records_mcp,
    clients_mcp,
    services_mcp,
    staff_mcp,
    schedule_mcp,
    transactions_mcp
)
from altegio_mcp.telemetry import telemetry
import sys
import os
from datetime import datetime, timezone
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


mcp_composite_server = FastMCP(name="altegio", version=__version__)

mcp_composite_server.add_middleware(ErrorHandlingMiddleware())

mcp_composite_server.add_middleware(SlidingWindowRateLimitingMiddleware(
    max_requests=100,
    window_minutes=1
))

mcp_composite_server.add_middleware(StructuredLoggingMiddleware())

mcp_composite_server.mount(server=records_mcp)
mcp_composite_server.mount(server=clients_mcp)
mcp_composite_server.mount(server=services_mcp)
mcp_composite_server.mount(server=staff_mcp)
mcp_composite_server.mount(server=schedule_mcp)
mcp_composite_server.mount(server=transactions_mcp)

@mcp_composite_server.custom_route("/health", methods=["GET"])
async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()})


def configure_logging():
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s: %(lineno)d - %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logging.basicConfig(level=logging.INFO if os.getenv("ENV") == "prod" else logging.DEBUG, handlers=[console_handler], force=True)


def main():
    configure_logging()
    # Missing credentials stop the process before any transport starts
    load_config()
    telemetry.initialize()

    use_stdio = True
    if len(sys.argv) > 1 and sys.argv[1].strip().lower() == 'http':
        use_stdio = False
    if use_stdio:
        mcp_composite_server.run()
    else:
        host = os.getenv("MCPSERVER_HOST", "127.0.0.1")
        port = int(os.getenv("MCPSERVER_PORT", "3000"))
        logger.info(f"Serving Altegio MCP over HTTP on {host}:{port}")
        mcp_composite_server.run(transport="http", host=host, port=port, stateless_http=True)


if __name__ == "__main__":
    main()
