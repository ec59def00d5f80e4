from fastmcp import FastMCP
from fastmcp.tools import ToolResult
from typing import Optional, List, Dict, Any
from pydantic import BaseModel
from altegio_mcp.api import AltegioAPIClient
from altegio_mcp.config import load_config
from altegio_mcp.common import (
    build_params_from_locals,
    filter_by_api_id,
    format_tool_response,
    format_text_response,
    handle_tool_errors,
    ToolValidationError
)
import logging
from altegio_mcp.telemetry import with_tool_metrics

logger = logging.getLogger(__name__)

records_mcp = FastMCP(name="Altegio Records Tools")

# Largest page the records endpoint accepts
RECORDS_PAGE_SIZE = 200


class ServiceRef(BaseModel):
    id: int


class ClientInfo(BaseModel):
    name: str
    phone: str
    email: Optional[str] = None


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_records(
    start_date: str,
    end_date: str,
    staff_id: Optional[int] = None,
    client_id: Optional[int] = None,
    page: int = 1,
    count: int = 50,
) -> ToolResult:
    """
    Get records (appointments) for a date range.

    Dates are YYYY-MM-DD. Returns every record field: api_id, resource_instances,
    custom_fields, attendance, activity_id, payment_status and so on.
    count is the page size (default 50, max 200).
    """
    params = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/records/{company_id}", params=params)
    return format_tool_response(data)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_records_by_client(
    client_id: int,
    start_date: str,
    end_date: str,
    page: int = 1,
    count: int = 50,
) -> ToolResult:
    """Get all records of one client for a date range (YYYY-MM-DD)."""
    params = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.get("/records/{company_id}", params=params)
    return format_tool_response(data)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def get_records_by_visit(api_id: int, date: str) -> ToolResult:
    """
    <usecase>
    Find every Altegio record linked to an external visit through its api_id.
    </usecase>

    <instructions>
    Loads all records for the given date (YYYY-MM-DD) and keeps the ones whose
    api_id equals the visit id. api_id=0 means the record is not linked to a visit.
    </instructions>
    """
    # The API cannot filter by api_id, so every page of the day is scanned
    all_records: List[Dict[str, Any]] = []
    page = 1
    async with AltegioAPIClient(load_config()) as api:
        while True:
            data = await api.get("/records/{company_id}", params={
                "start_date": date,
                "end_date": date,
                "count": RECORDS_PAGE_SIZE,
                "page": page,
            })
            batch = data if isinstance(data, list) else []
            all_records.extend(batch)
            if len(batch) < RECORDS_PAGE_SIZE:
                break
            page += 1

    logger.info(f"Scanned {page} page(s), {len(all_records)} record(s) on {date} for api_id={api_id}")
    matched = filter_by_api_id(all_records, api_id)
    if not matched:
        return format_text_response(f"Records with api_id={api_id} on {date} not found")
    return format_tool_response(matched)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def create_record(
    staff_id: int,
    services: List[ServiceRef],
    client: ClientInfo,
    datetime: str,
    seance_length: int,
    api_id: Optional[int] = None,
    comment: Optional[str] = None,
    attendance: Optional[int] = None,
    send_sms: bool = False,
    save_if_busy: bool = True,
) -> ToolResult:
    """
    <usecase>
    Create a record (appointment) in Altegio.
    </usecase>

    <instructions>
    - seance_length is in SECONDS (3600 = 1 hour)
    - datetime is "YYYY-MM-DD HH:mm:ss" or ISO 8601
    - api_id must be a number: the API silently stores 0 for strings
    - attendance: -1=cancelled, 0=pending, 1=confirmed, 2=arrived
    - save_if_busy=true (default) creates the record even if the slot is taken
    </instructions>
    """
    body = build_params_from_locals(locals())
    async with AltegioAPIClient(load_config()) as api:
        data = await api.post("/records/{company_id}", data=body)
    return format_tool_response(data)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def book_service(
    visit_id: int,
    service_id: int,
    staff_id: int,
    datetime: str,
    seance_length: int,
    client_name: str,
    client_phone: str,
    comment: Optional[str] = None,
    send_sms: bool = False,
) -> ToolResult:
    """
    Book one service linked to a visit. save_if_busy is always true and
    api_id is set to visit_id. seance_length is in SECONDS.
    """
    body = build_params_from_locals({
        "staff_id": staff_id,
        "services": [{"id": service_id}],
        "client": {"name": client_name, "phone": client_phone},
        "datetime": datetime,
        "seance_length": seance_length,
        "api_id": visit_id,
        "comment": comment,
        "send_sms": send_sms,
        "save_if_busy": True,
    })
    async with AltegioAPIClient(load_config()) as api:
        data = await api.post("/records/{company_id}", data=body)
    return format_tool_response(data)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def update_record(
    record_id: int,
    staff_id: Optional[int] = None,
    services: Optional[List[ServiceRef]] = None,
    datetime: Optional[str] = None,
    seance_length: Optional[int] = None,
    api_id: Optional[int] = None,
    comment: Optional[str] = None,
    attendance: Optional[int] = None,
) -> ToolResult:
    """
    Update a record. Only the fields given are changed; at least one is required.
    seance_length is in seconds; attendance: -1=cancelled, 0=pending, 1=confirmed, 2=arrived.
    """
    body = build_params_from_locals(locals(), exclude=["record_id"])
    if not body:
        raise ToolValidationError("Specify at least one field to update")
    async with AltegioAPIClient(load_config()) as api:
        data = await api.put(f"/records/{{company_id}}/{record_id}", data=body)
    return format_tool_response(data)


@records_mcp.tool
@handle_tool_errors
@with_tool_metrics()
async def delete_record(record_id: int) -> ToolResult:
    """Delete a record."""
    async with AltegioAPIClient(load_config()) as api:
        data = await api.delete(f"/records/{{company_id}}/{record_id}")
    return format_tool_response(data)
