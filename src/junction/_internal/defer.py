"""Scheduling helpers for work that must not run on the caller's stack.

The dispatch loop hands its terminal callback to :func:`defer_call` so
the finalizer runs on the next loop tick, and async handlers go through
:func:`spawn` so their failures come back through a callback.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any


def defer_call(callback: Callable[..., Any], *args: Any) -> None:
    """Run *callback* on the next tick of the running event loop.

    Without a running loop in this thread there is no next tick to wait
    for, so the callback runs immediately.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        callback(*args)
        return
    loop.call_soon(callback, *args)


def spawn(
    awaitable: Awaitable[Any],
    on_error: Callable[[BaseException], None],
    tasks: set["asyncio.Future[Any]"],
) -> None:
    """Schedule *awaitable* on the running loop, reporting failures to *on_error*.

    The task is held in *tasks* until it completes so it is not garbage
    collected mid-flight. Cancellation is not reported.

    Raises:
        RuntimeError: If no event loop is running in this thread.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        raise
    task = asyncio.ensure_future(awaitable, loop=loop)
    tasks.add(task)

    def _done(fut: "asyncio.Future[Any]") -> None:
        tasks.discard(fut)
        if fut.cancelled():
            return
        exc = fut.exception()
        if exc is not None:
            on_error(exc)

    task.add_done_callback(_done)
