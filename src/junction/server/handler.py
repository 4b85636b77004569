"""ASGI handler — translates ASGI scope/messages to junction types.

The only component that touches raw ASGI for HTTP. Builds a Request and
a Response, calls the listener, waits for the response to be ended,
then sends it back through ASGI ``send()``.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from junction._internal.asgi import Receive, Scope, Send
from junction.http.request import Request
from junction.http.response import Response
from junction.server.sender import send_response

logger = logging.getLogger("junction.server")

Listener = Callable[[Request, Response], Any]


async def handle_request(scope: Scope, receive: Receive, send: Send, *, handler: Listener) -> None:
    """Process a single HTTP exchange.

    Returns only once the response has been ended. A listener that never
    ends its response keeps the exchange open; there is no timeout here.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(dict(scope), receive)
    response = Response()

    loop = asyncio.get_running_loop()
    finished: asyncio.Future[None] = loop.create_future()

    def _on_finish(_: Response) -> None:
        # end() may be called from another thread
        loop.call_soon_threadsafe(_resolve, finished)

    response.on_finish(_on_finish)

    try:
        result = handler(request, response)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception("500 %s %s", request.method, request.original_url or request.url)
        _answer_internal_error(response)

    await finished
    await send_response(response, send, head=request.method == "HEAD")


async def run_lifespan(
    receive: Receive,
    send: Send,
    on_startup: Callable[[], None] | None = None,
) -> None:
    """Answer the ASGI lifespan protocol."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            if on_startup is not None:
                on_startup()
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


def _resolve(future: "asyncio.Future[None]") -> None:
    if not future.done():
        future.set_result(None)


def _answer_internal_error(response: Response) -> None:
    if response.finished:
        return
    if response.headers_sent:
        response.end()
        return
    for name in response.header_names():
        response.remove_header(name)
    response.status = 500
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    response.end("Internal Server Error")
