"""
Asynchronous utility helpers for the filess.io provider.

Provides utilities for:
- Bounding a whole resource operation by a deadline
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_deadline(
    coro: Awaitable[T],
    timeout_seconds: Optional[float],
    operation: str = "operation",
) -> T:
    """
    Run a coroutine under an overall deadline.

    The coroutine is cancelled when the deadline passes, which aborts any
    in-flight HTTP request or provisioning wait inside it.

    Args:
        coro: Coroutine to execute
        timeout_seconds: Deadline in seconds; None or 0 means no deadline
        operation: Name used in the log message

    Returns:
        Result of coroutine

    Raises:
        asyncio.TimeoutError: If coroutine exceeds the deadline
        Any exceptions raised by the coroutine

    Example:
        result = await with_deadline(resource.create(config), 600, "create")
    """
    if not timeout_seconds:
        return await coro
    try:
        return await asyncio.wait_for(coro, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.error(f"{operation} exceeded deadline of {timeout_seconds:g} seconds")
        raise
