from .telemetry_config import (
    TelemetryConfig,
    NullTelemetry,
    telemetry
)
from .tool_metrics import (
    with_tool_metrics,
    record_api_call
)


__all__ = [
    # TelemetryConfig
    "TelemetryConfig",
    "NullTelemetry",
    "telemetry",
    # Tool metrics
    "with_tool_metrics",
    "record_api_call"
]
