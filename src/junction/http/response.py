"""Mutable HTTP response.

Handlers build the response in place: set a status, set headers, write
body chunks, then ``end()`` it. Ending the response is what finalizes
the exchange; a handler that ends the response does not call ``next``.

The transport adapter subscribes with :meth:`Response.on_finish` and
ships the buffered body once ``end()`` has been called.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from junction.errors import ResponseFinishedError

FinishCallback = Callable[["Response"], None]


@dataclass(slots=True)
class Response:
    """An HTTP response under construction.

    Usage::

        def hello(request, response, next):
            response.set_header("Content-Type", "text/plain")
            response.end("hello")
    """

    status: int = 200

    # Lower-cased name -> (name as given, values)
    _headers: dict[str, tuple[str, list[str]]] = field(default_factory=dict, repr=False)
    _chunks: list[bytes] = field(default_factory=list, repr=False)
    _callbacks: list[FinishCallback] = field(default_factory=list, repr=False)
    _headers_sent: bool = field(default=False, repr=False)
    _finished: bool = field(default=False, repr=False)

    # -- Headers --

    def set_header(self, name: str, value: str | int | Iterable[str]) -> Response:
        """Set (replace) a header. Pass a list for repeated headers."""
        if isinstance(value, (str, int)):
            values = [str(value)]
        else:
            values = [str(v) for v in value]
        self._headers[name.lower()] = (name, values)
        return self

    def get_header(self, name: str) -> str | None:
        """Return the first value of *name*, or ``None``."""
        entry = self._headers.get(name.lower())
        if entry is None:
            return None
        return entry[1][0]

    def get_header_list(self, name: str) -> list[str]:
        entry = self._headers.get(name.lower())
        return list(entry[1]) if entry else []

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def remove_header(self, name: str) -> None:
        self._headers.pop(name.lower(), None)

    def header_names(self) -> list[str]:
        """Header names as they were first set."""
        return [name for name, _ in self._headers.values()]

    def raw_headers(self) -> list[tuple[bytes, bytes]]:
        """Header pairs encoded for ASGI, one pair per value."""
        return [
            (key.encode("latin-1"), value.encode("latin-1"))
            for key, (_, values) in self._headers.items()
            for value in values
        ]

    # -- Body --

    @property
    def headers_sent(self) -> bool:
        """True once body output has started; headers can no longer change."""
        return self._headers_sent

    @property
    def finished(self) -> bool:
        return self._finished

    def write(self, chunk: str | bytes) -> None:
        """Append a body chunk. Strings are UTF-8 encoded."""
        if self._finished:
            msg = "Cannot write to a response after end()"
            raise ResponseFinishedError(msg)
        self._headers_sent = True
        if chunk:
            self._chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)

    def end(self, chunk: str | bytes | None = None) -> None:
        """Finish the response, optionally writing a last chunk.

        A second ``end()`` is ignored.
        """
        if self._finished:
            return
        if chunk is not None:
            self.write(chunk)
        self._headers_sent = True
        self._finished = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def on_finish(self, callback: FinishCallback) -> None:
        """Call *callback* once the response ends (immediately if it has)."""
        if self._finished:
            callback(self)
        else:
            self._callbacks.append(callback)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")
