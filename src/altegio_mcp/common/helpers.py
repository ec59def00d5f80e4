"""
Pure data-shaping helpers used by the tools. No I/O happens here.
"""
import re
from typing import Any, Dict, List, Literal, NamedTuple

PHONE_PATTERN = re.compile(r"\+?[0-9][0-9\s\-()]{5,}")


class SearchQuery(NamedTuple):
    field: Literal["phone", "email", "fullname"]
    value: str


def detect_search_type(query: str) -> SearchQuery:
    """
    Classify a free-text client search as a phone number, an email or a name.

    Phone wins over email, so "+7 999 123-45-67" is a phone even though it
    could never be an email. Names are searched with the `fullname` parameter.
    """
    trimmed = query.strip()
    if PHONE_PATTERN.fullmatch(trimmed):
        return SearchQuery("phone", trimmed)
    if "@" in trimmed:
        return SearchQuery("email", trimmed)
    return SearchQuery("fullname", trimmed)


def _is_fired(value: Any) -> bool:
    # bool is an int subclass, so this covers both 1 and True
    return isinstance(value, (int, float)) and value == 1


def filter_active_staff(staff: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop staff members marked as fired (fired=1 or fired=true)."""
    return [member for member in staff if not _is_fired(member.get("fired"))]


def filter_by_api_id(records: List[Dict[str, Any]], api_id: int) -> List[Dict[str, Any]]:
    # The API returns api_id either as a number or as a numeric string
    return [record for record in records if str(record.get("api_id")) == str(api_id)]
