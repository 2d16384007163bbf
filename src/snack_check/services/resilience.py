"""Retry, timeout and safe-fallback helpers for async calls."""

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from snack_check.domain.errors import TierTimeoutError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

_RETRYABLE_STATUS_CODES = {429}

_logger = logging.getLogger(__name__)


async def with_retry(  # noqa: PLR0913
    operation: "Callable[[], Awaitable[T]]",
    *,
    attempts: int,
    base_delay_seconds: float,
    multiplier: float = 2.0,
    should_retry: "Callable[[Exception], bool] | None" = None,
    action: str = "operation",
) -> T:
    """Run an operation, retrying with exponential backoff.

    The delay before retry ``n`` (1-based) is ``base_delay_seconds *
    multiplier ** (n - 1)``. When ``should_retry`` rejects an exception it is
    raised immediately; the last exception is raised once attempts run out.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            attempt += 1
            retryable = should_retry is None or should_retry(exc)
            _logger.warning(
                "%s failed (attempt %s/%s, status=%s): %s",
                action,
                attempt,
                attempts,
                status_code_from_exception(exc),
                exc,
            )
            if not retryable or attempt >= attempts:
                raise
            await asyncio.sleep(base_delay_seconds * multiplier ** (attempt - 1))


async def with_timeout(
    awaitable: "Awaitable[T]", timeout_seconds: float, *, action: str = "operation"
) -> T:
    """Await a result, raising TierTimeoutError once the deadline passes."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except TimeoutError as exc:
        raise TierTimeoutError(action, timeout_seconds) from exc


async def safe_async(
    operation: "Callable[[], Awaitable[T]]", fallback: T, *, action: str = "operation"
) -> T:
    """Return the operation's result, or the fallback if it raises."""
    try:
        return await operation()
    except Exception:
        _logger.exception("Safe operation %s failed, using fallback", action)
        return fallback


def is_retryable_http_error(exc: Exception) -> bool:
    """Return True for server errors and rate limiting."""
    status_code = _status_code(exc)
    if status_code is None:
        return False
    return status_code >= 500 or status_code in _RETRYABLE_STATUS_CODES


def status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    status_code = _status_code(exc)
    if status_code is None:
        return "n/a"
    return str(status_code)


def _status_code(exc: Exception) -> int | None:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None
