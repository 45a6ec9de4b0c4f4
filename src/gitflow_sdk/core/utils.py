"""Async helpers shared by the workflows and the engines."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


async def call_hook(hook: Optional[Callable[..., Any]], *args: Any) -> Any:
    """Invoke a plain or async hook and return its (awaited) result.

    A missing hook is treated as a no-op returning None.
    """
    if hook is None:
        return None
    return await maybe_await(hook(*args))


def run_sync(coro: Awaitable[T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Inside a running event loop the coroutine is executed on a worker thread
    with its own loop, so blocking callers inside async frameworks still work.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    import concurrent.futures

    logger.debug("Event loop already running, executing in worker thread")
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, coro)
        return future.result()
