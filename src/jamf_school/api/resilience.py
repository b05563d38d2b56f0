#!/usr/bin/env python3
"""Graceful degradation and batch helpers.

Two patterns are used by the domain objects:

    - Best-effort lookups: relationship traversals (a device's owner, a
      user's groups) return an empty result when the service fails, rather
      than raising. Only remote failures are swallowed; input, schema and
      data errors always propagate.

    - Batch fan-out: operations like "restart every device in this group"
      issue many independent calls concurrently and tolerate individual
      failures. Failures are reported, never raised.

Example:
    @try_or_default([])
    async def get_groups(self):
        return await self._api.get_device_groups()

    results, errors = await gather_with_errors(
        *(device.restart() for device in devices),
    )
"""
import asyncio
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from .exceptions import RECOVERABLE_ERRORS

logger = logging.getLogger(__name__)

T = TypeVar("T")


def try_or_default(
    default: T,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that returns a default value on a remote failure.

    Only RECOVERABLE_ERRORS (APIError and NetworkError, including
    AuthError and PermissionError) are swallowed. A mutable default is
    copied on every use so callers never share it.

    Args:
        default: Value to return on failure (typically [] or None)
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except RECOVERABLE_ERRORS as e:
                logger.warning(f"{func.__qualname__} failed, returning default: {e}")
                return _fresh(default)
        return wrapper
    return decorator


def _fresh(value: T) -> T:
    if isinstance(value, list):
        return list(value)
    return value


async def gather_with_errors(
    *coros_or_futures,
    max_concurrent: int | None = None,
) -> tuple[list[Any], list[Exception]]:
    """Execute coroutines concurrently, separating results from errors.

    Unlike asyncio.gather(return_exceptions=True), this returns results and
    errors in separate lists for easier handling.

    Args:
        *coros_or_futures: Coroutines or futures to execute
        max_concurrent: Optional limit on concurrent execution

    Returns:
        Tuple of (successful_results, exceptions)
    """
    if max_concurrent:
        semaphore = asyncio.Semaphore(max_concurrent)

        async def bounded(coro):
            async with semaphore:
                return await coro

        coros_or_futures = tuple(bounded(c) for c in coros_or_futures)

    outcomes = await asyncio.gather(*coros_or_futures, return_exceptions=True)

    results = []
    errors = []
    for outcome in outcomes:
        if isinstance(outcome, Exception):
            errors.append(outcome)
        else:
            results.append(outcome)

    return results, errors


def chunked(items: list[T], size: int) -> list[list[T]]:
    """Split a list into consecutive chunks of at most `size` items."""
    return [items[i:i + size] for i in range(0, len(items), size)]


__all__ = [
    "chunked",
    "gather_with_errors",
    "try_or_default",
]
