# Import tools from each module
from .records import (
    records_mcp,
    get_records,
    get_records_by_client,
    get_records_by_visit,
    create_record,
    book_service,
    update_record,
    delete_record
)

from .clients import (
    clients_mcp,
    search_clients,
    get_client,
    create_client,
    update_client
)

from .services import (
    services_mcp,
    get_services,
    get_service_categories
)

from .staff import (
    staff_mcp,
    get_staff,
    get_staff_member
)

from .schedule import (
    schedule_mcp,
    get_available_times,
    get_available_dates
)

from .transactions import (
    transactions_mcp,
    get_transactions
)

__all__ = [
    "records_mcp",
    "clients_mcp",
    "services_mcp",
    "staff_mcp",
    "schedule_mcp",
    "transactions_mcp",
    "get_records",
    "get_records_by_client",
    "get_records_by_visit",
    "create_record",
    "book_service",
    "update_record",
    "delete_record",
    "search_clients",
    "get_client",
    "create_client",
    "update_client",
    "get_services",
    "get_service_categories",
    "get_staff",
    "get_staff_member",
    "get_available_times",
    "get_available_dates",
    "get_transactions"
]
