"""Junction application class.

Mutable during setup (handler registration).
Frozen at runtime when the first request is dispatched.
"""

import logging
import threading
from typing import Any

from junction._internal.asgi import Receive, Scope, Send
from junction._internal.types import Done, HandlerFunc, Next
from junction.config import AppConfig
from junction.dispatch import Dispatch
from junction.errors import ConfigurationError
from junction.http.request import Request
from junction.http.response import Response
from junction.routing.layer import HandlerKind, Layer
from junction.server.final import final_handler, log_error
from junction.server.handler import handle_request, run_lifespan
from junction.server.listener import Server

logger = logging.getLogger("junction.app")


class App:
    """An ordered registry of handlers, each optionally mounted under a route.

    Every request walks the registry in registration order. Entries whose
    route covers the request path are called with the route stripped from
    ``request.url``::

        app = App()
        app.use(log_requests)                  # every request
        app.use("/admin", require_login)       # /admin, /admin/..., /admin.json
        app.use_error(render_error_page)       # only while an error is active

    An App is also an ASGI application and can be mounted inside another
    App with ``use()``.

    Thread safety:
        Registration is single-threaded setup work. The freeze transition
        uses a Lock + double-check so exactly one thread snapshots the
        registry, after which it is read-only and shared by all requests.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_layers",
        "_pending_layers",
        "config",
        "route",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        # Mount route, assigned when this app is used inside another
        self.route: str = "/"
        self._pending_layers: list[Layer] = []
        self._layers: tuple[Layer, ...] = ()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def use(self, route: Any, handler: Any = None) -> "App":
        """Register a normal handler, optionally under *route*.

        *handler* may be a ``(request, response, next)`` callable, a
        ``Layer`` built elsewhere (its kind is kept), another ``App``
        (mounted: its registry is walked when the route matches), or a
        ``Server`` (its listener takes over the exchange). Build a ``Layer``
        with ``Layer.normal()`` or ``Layer.error()`` to register a
        handler whose kind was decided elsewhere.

        Returns the app, for chaining.
        """
        return self._register(route, handler, HandlerKind.NORMAL)

    def use_error(self, route: Any, handler: Any = None) -> "App":
        """Register an error-aware ``(error, request, response, next)`` handler.

        Error-aware handlers run only while an error is active. Calling
        ``next()`` with no argument clears the error; ``next(err)`` keeps
        (or replaces) it.

        Apps and Servers mount only as normal handlers; passing one here
        raises ``ConfigurationError``.
        """
        return self._register(route, handler, HandlerKind.ERROR)

    @property
    def layers(self) -> tuple[Layer, ...]:
        """The registry, in order."""
        if self._frozen:
            return self._layers
        return tuple(self._pending_layers)

    # -- Dispatch --

    def handle(self, request: Request, response: Response, out: Done | None = None) -> None:
        """Dispatch *request* through the registry.

        *out* replaces the default terminal handler for this call. Mounted
        apps receive the parent's ``next`` here, so running off the end of
        a child registry resumes the parent.
        """
        self._ensure_frozen()
        done = out or final_handler(
            request,
            response,
            env=self.config.env,
            on_error=self._log_error if self.config.should_log_errors else None,
        )
        Dispatch(self._layers, request, response, done).start()

    # -- Server --

    def listen(self, host: str | None = None, port: int | None = None) -> None:
        """Serve this app over HTTP with pounce. Blocks until shutdown."""
        self._ensure_frozen()
        Server(self.handle, self.config).run(host, port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await run_lifespan(receive, send, on_startup=self._ensure_frozen)
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, handler=self.handle)

    # -- Internal --

    def _register(self, route: Any, handler: Any, kind: HandlerKind) -> "App":
        self._check_not_frozen()

        if not isinstance(route, str):
            handler, route = route, None

        if isinstance(handler, Layer):
            # A prebuilt layer keeps its kind, and its route unless one is given
            kind = handler.kind
            route = handler.route if route is None else route
            handler = handler.handler

        path: str = "/" if route is None else route
        if kind is HandlerKind.ERROR and isinstance(handler, (App, Server)):
            msg = (
                f"A mounted {type(handler).__name__} is a normal handler; "
                "register it with use(), not use_error()"
            )
            raise ConfigurationError(msg)

        if isinstance(handler, App):
            handler = _mount(handler, path)
        elif isinstance(handler, Server):
            handler = _listen(handler)

        if not callable(handler):
            msg = f"App.use() requires a callable handler, got {type(handler).__name__}"
            raise ConfigurationError(msg)

        build = Layer.error if kind is HandlerKind.ERROR else Layer.normal
        layer = build(path, handler)
        logger.debug("use %s %s", layer.route or "/", layer.name)
        self._pending_layers.append(layer)
        return self

    def _log_error(self, err: Any, request: Request, response: Response) -> None:
        log_error(err, request)

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._layers = tuple(self._pending_layers)
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot register handlers after the app has started dispatching requests. "
                "Call use() during setup."
            )
            raise RuntimeError(msg)


def _mount(app: App, route: str) -> HandlerFunc:
    """Adapt a child App into a normal handler mounted at *route*."""
    app.route = route

    def mounted(request: Request, response: Response, next: Next) -> None:
        app.handle(request, response, next)

    return mounted


def _listen(server: Server) -> HandlerFunc:
    """Adapt a Server's ``(request, response)`` listener into a normal handler.

    A listener owns the exchange from here on; it is never given ``next``.
    """

    def listener(request: Request, response: Response, next: Next) -> Any:
        return server.request_handler(request, response)

    return listener
