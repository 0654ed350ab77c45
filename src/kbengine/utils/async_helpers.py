"""Helpers for running async code from synchronous callers.

Examples:
    >>> async def fetch_data():
    ...     return "data"
    >>>
    >>> result = run_async_in_sync_context(fetch_data())
    >>> print(result)
    data
"""

import asyncio
import concurrent.futures
from typing import Coroutine, TypeVar

from loguru import logger

T = TypeVar('T')


def run_async_in_sync_context(coro: Coroutine[None, None, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Without a running event loop the coroutine runs through ``asyncio.run``.
    Inside a running loop (Jupyter, a FastAPI handler calling sync code) it
    runs on a fresh loop in a worker thread, since the current loop cannot be
    re-entered.

    Warning:
        The worker-thread path blocks the calling loop until the coroutine
        finishes. Prefer awaiting the async API directly.

    Args:
        coro: Coroutine object to execute

    Returns:
        The coroutine's return value
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    logger.debug(
        "Detected running event loop. Consider using async methods directly "
        "for better performance."
    )
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, coro)
        return future.result()
