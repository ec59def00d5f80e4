import functools
import time
import logging
from typing import Any, Callable, Optional
from .telemetry_config import telemetry
import contextvars

logger = logging.getLogger(__name__)

# Per-invocation API call counters, reset by with_tool_metrics
api_call_count: contextvars.ContextVar[int] = contextvars.ContextVar('api_call_count', default=0)
successful_api_calls: contextvars.ContextVar[int] = contextvars.ContextVar('successful_api_calls', default=0)


def with_tool_metrics(tool_name: Optional[str] = None):
    """
    Decorator that records, for every tool invocation:
    - tool name and outcome (success / failure / error)
    - execution duration
    - number of Altegio API calls issued while the tool ran

    A result is a failure when it carries ``is_error=True``; an escaped
    exception is recorded as an error and re-raised.

    Args:
        tool_name: Override the tool name (defaults to function name)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            actual_tool_name = tool_name or func.__name__
            start_time = time.time()

            api_call_count.set(0)
            successful_api_calls.set(0)

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _record_tool_completion(actual_tool_name, start_time, "error")
                logger.error(f"Tool {actual_tool_name} failed with exception: {e}")
                raise

            status = "success" if _is_successful_response(result) else "failure"
            _record_tool_completion(actual_tool_name, start_time, status)
            return result

        return wrapper
    return decorator


def _is_successful_response(response: Any) -> bool:
    return not getattr(response, "is_error", False)


def _record_tool_completion(tool_name: str, start_time: float, status: str):
    try:
        duration = time.time() - start_time
        attributes = {"tool_name": tool_name, "status": status}

        telemetry.tool_calls_counter.add(1, attributes)
        telemetry.tool_duration_histogram.record(duration, attributes)

        total_api_calls = api_call_count.get()
        successful_calls = successful_api_calls.get()

        logger.info(
            f"Tool '{tool_name}' completed - "
            f"Status: {status}, Duration: {duration:.3f}s, "
            f"API calls: {total_api_calls} ({successful_calls} success, {total_api_calls - successful_calls} failed)"
        )
    except Exception as e:
        logger.error(f"Failed to record tool metrics: {e}")


def record_api_call(company_id: str, success: bool, api_endpoint: str, method: str, duration: float):
    """
    Record a single Altegio API request made inside a tool.

    Args:
        company_id: Altegio company the request was scoped to
        success: Whether the API call returned a success status
        api_endpoint: Endpoint with numeric ids stripped
        method: HTTP method used
        duration: Duration of the API call in seconds
    """
    try:
        api_call_count.set(api_call_count.get() + 1)
        if success:
            successful_api_calls.set(successful_api_calls.get() + 1)

        attributes = {
            "api_endpoint": api_endpoint,
            "method": method,
            "company_id": company_id,
            "status": "success" if success else "failure",
        }
        telemetry.api_calls_counter.add(1, attributes)
        telemetry.api_duration_histogram.record(duration, attributes)

        logger.debug(f"API call recorded: {attributes} in {duration:.3f}s")
    except Exception as e:
        logger.error(f"Failed to record API call metric: {e}")
