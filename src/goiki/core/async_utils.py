"""Async bridge for calling the blocking content store from MCP handlers."""

import asyncio
from typing import Any, Callable, TypeVar

T = TypeVar("T")


async def run_sync(
    func: Callable[..., T], *args: Any, **kwargs: Any
) -> T:
    """Run a blocking function in a worker thread without blocking the event loop.

    Each call gets its own thread from the default executor, so concurrent
    tool calls reach the store on independent threads.

    Example:
        document = await run_sync(store.load, "FrontPage")
    """
    return await asyncio.to_thread(func, *args, **kwargs)
