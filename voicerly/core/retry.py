"""Exponential backoff for idempotent network calls."""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from voicerly.config import logger

T = TypeVar("T")


def _is_transient(exc: Exception) -> bool:
    message = str(exc).lower()
    return (
        isinstance(exc, (ConnectionError, TimeoutError))
        or "timeout" in message
        or "timed out" in message
        or "connection" in message
    )


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    delay: float = 1.0,
    backoff_multiplier: float = 2.0,
    retry_on: Optional[Callable[[Exception], bool]] = None,
) -> T:
    """
    Await ``fn`` and retry it on transient failures.

    Waits ``delay * backoff_multiplier ** attempt`` seconds between attempts.
    The last error is re-raised once ``max_retries`` retries are used up or
    ``retry_on`` rejects the error.
    """
    should_retry = retry_on or _is_transient

    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as exc:
            if attempt >= max_retries or not should_retry(exc):
                raise

            wait_time = delay * (backoff_multiplier ** attempt)
            logger.warning(
                f"Retrying after error (attempt {attempt + 1}/{max_retries}): {exc}",
                extra={"wait_seconds": wait_time},
            )
            await asyncio.sleep(wait_time)
            attempt += 1
