"""Mutable HTTP request.

Unlike the response, most of a request is fixed at arrival. The one
field that moves is ``url``: the dispatcher rewrites it as the request
descends into mounted handlers, so a handler mounted at ``/admin`` sees
``/users`` where the client asked for ``/admin/users``. ``original_url``
keeps what the client sent.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

from junction._internal.asgi import Receive
from junction.http.headers import Headers
from junction.routing.url import parse_pathname


@dataclass(slots=True)
class Request:
    """An HTTP request as seen by handlers.

    Handlers attach their own data under ``state``::

        def load_user(request, response, next):
            request.state["user"] = lookup(request.headers.get("authorization"))
            next()
    """

    method: str = "GET"
    url: str = "/"
    headers: Headers = field(default_factory=Headers)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Set once, on first dispatch, and never rewritten
    original_url: str | None = None

    state: dict[str, Any] = field(default_factory=dict)

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: cached body bytes
    _body: bytes | None = field(default=None, repr=False, compare=False)

    # -- Computed properties --

    @property
    def path(self) -> str:
        """Path component of the current (possibly rewritten) ``url``."""
        return parse_pathname(self.url)

    @property
    def query_string(self) -> str:
        return urlsplit(self.url).query

    @property
    def query(self) -> dict[str, list[str]]:
        """Parsed query string."""
        return parse_qs(self.query_string, keep_blank_values=True)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if self._body is None:
            chunks = [chunk async for chunk in self.stream()]
            self._body = b"".join(chunks)
        return self._body

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        raw = await self.body()
        return json_module.loads(raw)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable.

        ``url`` is the raw (still percent-encoded) path plus query string,
        falling back to the decoded ``path`` when the server omits
        ``raw_path``.
        """
        raw_path = scope.get("raw_path") or b""
        target = raw_path.decode("latin-1") if raw_path else scope["path"]
        query_string = scope.get("query_string", b"")
        if query_string:
            target = f"{target}?{query_string.decode('latin-1')}"

        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            url=target,
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
