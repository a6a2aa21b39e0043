"""Error boundary around sorted-set store calls.

Metrics are best-effort: a slow or failing store must degrade the feature,
never the host. Every store call made by the recorder, reader and sweeper
goes through guarded(), which maps failures to a caller-supplied default.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def guarded(
    operation: str,
    call: Awaitable[T],
    default: T,
    timeout: float | None = None,
) -> T:
    """Await a store call, returning default if it fails or times out.

    Args:
        operation: Name of the store operation, used in log messages.
        call: Awaitable performing the store call.
        default: Value returned when the call fails.
        timeout: Seconds to wait before abandoning the call. None waits forever.

    Returns:
        The call's result, or default on any failure.
    """
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except TimeoutError:
        logger.warning("Store %s timed out after %ss", operation, timeout)
    except Exception:
        logger.exception("Store %s failed", operation)
    return default
