"""Decorators for MCP tool error handling."""

import functools
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable

logger = logging.getLogger(__name__)


def _error_response(request_id: str, error_code: str, message: str) -> str:
    return json.dumps(
        {
            "success": False,
            "error": error_code,
            "message": message,
            "metadata": {
                "timestamp": datetime.now().isoformat() + "Z",
                "request_id": request_id,
            },
        },
        indent=2,
    )


def handle_filter_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Decorator to turn tool exceptions into JSON error responses.

    Args:
        func: The tool function to decorate

    Returns:
        Decorated function that always returns a JSON string
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        try:
            logger.info(f"Request {request_id}: Starting {func.__name__}")
            result = func(*args, **kwargs)

            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.info(f"Request {request_id}: Completed {func.__name__} in {duration_ms}ms")

            return result

        except ValueError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Validation error in {duration_ms}ms: {e}")
            return _error_response(request_id, "invalid_input", str(e))

        except Exception as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Unexpected error in {duration_ms}ms: {e}")
            return _error_response(request_id, "unexpected_error", f"An unexpected error occurred: {e!s}")

    return wrapper
