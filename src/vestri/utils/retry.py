"""Bounded exponential-backoff retry for async calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from vestri.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    attempts: int | None = None,
    base_delay: float | None = None,
    description: str = "call",
) -> T:
    """
    Await ``fn()``, retrying on the given exceptions.

    The delay starts at ``base_delay`` and doubles after each failed
    attempt. The last exception is re-raised once attempts run out.

    Args:
        fn: Zero-argument coroutine factory
        retry_on: Exception types that trigger a retry
        attempts: Total attempts (defaults to settings.retry_attempts)
        base_delay: First delay in seconds (defaults to settings.retry_base_delay)
        description: Label used in log messages

    Returns:
        Whatever ``fn()`` returns
    """
    attempts = attempts if attempts is not None else settings.retry_attempts
    delay = base_delay if base_delay is not None else settings.retry_base_delay

    for attempt in range(1, attempts + 1):
        try:
            return await fn()
        except retry_on as e:
            if attempt == attempts:
                logger.error(f"{description} failed after {attempts} attempts: {e}")
                raise
            logger.warning(
                f"{description} attempt {attempt}/{attempts} failed: {e}; "
                f"retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)
            delay *= 2

    raise RuntimeError(f"{description}: no attempts made")
