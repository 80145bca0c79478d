"""Deadline helper shared by tool calls and adapter connects"""

import asyncio
from typing import Any, Awaitable


class DeadlineExceeded(Exception):
    """The awaited operation was still running when its deadline expired."""

    def __init__(self, timeout: float):
        super().__init__(f"Deadline of {timeout:g}s exceeded")
        self.timeout = timeout


async def run_with_deadline(awaitable: Awaitable[Any], timeout: float) -> Any:
    """Await an operation for at most ``timeout`` seconds.

    Exceptions raised by the operation itself, ``TimeoutError`` included,
    propagate unchanged. Only an expired deadline raises
    :class:`DeadlineExceeded`, after the operation has been cancelled and has
    finished unwinding. Cancelling the caller cancels the operation too.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task not in done:
        task.cancel()
        await asyncio.wait({task})
        raise DeadlineExceeded(timeout)
    return task.result()
