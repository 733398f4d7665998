"""
Decorators for calls into the external fetch capability.
"""

from __future__ import annotations

import asyncio
import traceback
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from pagination_core.models.result import Failure, PaginationResult, is_result
from pagination_core.utils.constants import (
    MESSAGE_FETCH_TIMEOUT,
    MESSAGE_FETCH_UNAVAILABLE,
    MESSAGE_FETCH_UNEXPECTED,
    MESSAGE_MALFORMED_PAGE,
)

logger = Logger(service="pagination-fetch", UTC=True)

FetchCall = Callable[..., Awaitable[PaginationResult[Any]]]


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Preserves messages that are already phrased for display.
    """
    exc_str = str(exc)

    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Cannot",
        "Unable to",
        "Failed to",
    )

    if exc_str and any(exc_str.startswith(prefix) for prefix in friendly_prefixes):
        return exc_str

    if isinstance(exc, (ValueError, KeyError, TypeError, AttributeError)):
        return MESSAGE_MALFORMED_PAGE

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return MESSAGE_FETCH_TIMEOUT

    if isinstance(exc, (ConnectionError, OSError)):
        return MESSAGE_FETCH_UNAVAILABLE

    return MESSAGE_FETCH_UNEXPECTED


def _log_error(
    message: str,
    *,
    fetch_name: str,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        fetch_name: Qualified name of the guarded fetch
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "fetch": fetch_name,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def guard_fetch(func: FetchCall) -> FetchCall:
    """
    Decorator for coroutines that call a repository.

    Provides:
    - Conversion of raised exceptions into `Failure` results
    - Rejection of return values that are not `Success`/`Failure`
    - Structured logging with the full traceback

    Cancellation is never converted; it propagates to the caller.

    Example:
        @guard_fetch
        async def _request_page(self, page, limit_per_page):
            return await self.repository.fetch_paginated_items(...)
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> PaginationResult[Any]:
        try:
            result = await func(*args, **kwargs)
            if not is_result(result):
                raise TypeError(
                    f"Repository returned {type(result).__name__}, expected Success or Failure"
                )
            return result

        except (
            ValueError,
            KeyError,
            TypeError,
            AttributeError,
        ) as exc:
            _log_error(
                "Malformed page returned by repository",
                fetch_name=func.__qualname__,
                exc=exc,
            )
            return Failure(message=_get_user_friendly_message(exc))

        except (TimeoutError, asyncio.TimeoutError) as exc:
            _log_error(
                "Repository fetch timed out",
                fetch_name=func.__qualname__,
                exc=exc,
                level="exception",
            )
            return Failure(message=_get_user_friendly_message(exc))

        except (ConnectionError, OSError) as exc:
            _log_error(
                "Repository connection error",
                fetch_name=func.__qualname__,
                exc=exc,
                level="exception",
            )
            return Failure(message=_get_user_friendly_message(exc))

        except Exception as exc:
            _log_error(
                "Unexpected error in repository fetch",
                fetch_name=func.__qualname__,
                exc=exc,
                level="exception",
            )
            return Failure(message=_get_user_friendly_message(exc))

    return wrapper
