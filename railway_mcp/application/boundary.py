"""
Operation Boundary

Architectural Intent:
- Every use-case operation runs inside exactly one boundary
- Domain errors pass through untouched
- Anything else is re-surfaced as RemoteFailureError carrying the original cause
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from railway_mcp.domain.errors import RailwayError, RemoteFailureError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def operation_boundary(
    message: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap an async operation so every failure leaves as a RailwayError."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except RailwayError as e:
                logger.error("%s: %s", message, e)
                raise
            except Exception as e:
                logger.exception("%s", message)
                raise RemoteFailureError(f"{message}: {e}") from e

        return wrapper

    return decorator
