"""Transport listener — binds a request handler to a pounce HTTP server.

A ``Server`` is an ASGI application wrapping one
``(request, response)`` callable. ``App.use()`` accepts a Server and
mounts its ``request_handler`` as a handler that never continues.
"""

from junction._internal.asgi import Receive, Scope, Send
from junction.config import AppConfig
from junction.server.handler import Listener, handle_request, run_lifespan


class Server:
    """An HTTP listener around a single request handler.

    Usage::

        def hello(request, response):
            response.end("hello")

        create_server(hello).run(port=3000)
    """

    __slots__ = ("config", "request_handler")

    def __init__(self, request_handler: Listener, config: AppConfig | None = None) -> None:
        self.request_handler = request_handler
        self.config: AppConfig = config or AppConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await run_lifespan(receive, send)
            return
        await handle_request(scope, receive, send, handler=self.request_handler)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start a pounce server for this listener. Blocks until shutdown.

        Pounce's ``run()`` takes an import string, but we have a live
        object, so ``pounce.Server`` is driven directly with this ASGI
        callable.
        """
        from pounce.config import ServerConfig
        from pounce.server import Server as PounceServer

        config = ServerConfig(
            host=host or self.config.host,
            port=port or self.config.port,
            workers=self.config.workers,
            reload=self.config.reload,
        )
        PounceServer(config, self).run()


def create_server(handler: Listener, config: AppConfig | None = None) -> Server:
    """Wrap *handler* in a :class:`Server`."""
    return Server(handler, config)

