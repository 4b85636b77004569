"""Junction — prefix-mounted HTTP handler dispatch.

An App is an ordered list of handlers, each optionally mounted under a
URL prefix. Requests walk the list in order; handlers pass control on
with ``next()`` or finish the response themselves. Errors travel on a
second channel that only error-aware handlers see.

Basic usage::

    from junction import App

    app = App()

    def hello(request, response, next):
        response.set_header("Content-Type", "text/plain")
        response.end("Hello, World!")

    app.use("/hello", hello)
    app.listen(port=3000)
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "JunctionError",
    "Layer",
    "NotFound",
    "Request",
    "Response",
    "Server",
    "create_server",
    "final_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import junction`` fast while providing a clean top-level API.
    """
    if name == "App":
        from junction.app import App

        return App

    if name == "AppConfig":
        from junction.config import AppConfig

        return AppConfig

    if name in ("Request", "Response"):
        from junction import http as _http

        return getattr(_http, name)

    if name == "Layer":
        from junction.routing.layer import Layer

        return Layer

    if name in ("Server", "create_server", "final_handler"):
        from junction import server as _server

        return getattr(_server, name)

    if name in ("ConfigurationError", "HTTPError", "JunctionError", "NotFound"):
        from junction import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
