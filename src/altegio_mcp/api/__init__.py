from .api_client import (
    AltegioAPIClient,
    AltegioAPIError,
    resolve_path,
    build_query,
    unwrap_envelope
)

__all__ = [
    "AltegioAPIClient",
    "AltegioAPIError",
    "resolve_path",
    "build_query",
    "unwrap_envelope"
]
