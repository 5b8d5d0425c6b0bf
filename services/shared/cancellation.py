"""Tie per-request work to the inbound connection.

The pipeline runs as its own task; if the ASGI server reports
``http.disconnect`` first, the task is cancelled, which aborts whatever
outbound httpx call is in flight.
"""

import asyncio
import contextlib
from typing import Any, Awaitable, Callable

from shared.errors import RequestCancelled


async def _wait_for_disconnect(receive: Callable[[], Awaitable[dict]]):
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return


async def bind_to_request(receive: Callable[[], Awaitable[dict]], awaitable: Awaitable[Any]) -> Any:
    """Await *awaitable*, cancelling it if the client disconnects.

    The request body must already have been read: every message left on
    *receive* is consumed while waiting.
    """
    work = asyncio.ensure_future(awaitable)
    watcher = asyncio.ensure_future(_wait_for_disconnect(receive))
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        watcher.cancel()

    if work.done():
        return work.result()

    work.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await work
    raise RequestCancelled("client disconnected")
