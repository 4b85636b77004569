"""The dispatch loop — walks an App's registry once per request.

Each call to ``next(err)`` is one step:

1. Undo the URL rewrite made by the previous step.
2. Take the next registry entry; when there is none, hand ``err`` to the
   terminal callback on the next loop tick.
3. Skip the entry unless its route covers the request path.
4. Strip the entry's route from ``request.url``.
5. Call the handler if its kind fits the current mode (error-aware
   handlers while an error is active, normal handlers otherwise) and
   skip it if not.

A handler passes control on by calling ``next()`` (or ``next(err)``) or
finishes the response itself. An exception raised by the handler takes
the place of whatever it would have passed to ``next``.

``next`` does not recurse. Calls are queued and drained by whichever
``next`` call is outermost, so a long chain of synchronous handlers runs
at constant stack depth. A ``next`` made later, from a callback or an
``async def`` handler, starts a fresh drain.
"""

import inspect
import logging
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any

from junction._internal.defer import defer_call, spawn
from junction._internal.types import Done
from junction.http.request import Request
from junction.http.response import Response
from junction.routing.layer import Layer
from junction.routing.prefix import matches
from junction.routing.rewrite import NO_REWRITE, Rewrite, strip_route
from junction.routing.url import get_protohost

logger = logging.getLogger("junction.app")


class Dispatch:
    """Per-request dispatch state.

    Created by ``App.handle()`` for a single request and dropped when the
    request is done. The registry it walks is the App's frozen tuple and
    is never modified here.
    """

    __slots__ = (
        "_defer",
        "_done",
        "_draining",
        "_index",
        "_layers",
        "_pending",
        "_protohost",
        "_rewrite",
        "_tasks",
        "request",
        "response",
    )

    def __init__(
        self,
        layers: Sequence[Layer],
        request: Request,
        response: Response,
        done: Done,
        *,
        defer: Callable[..., None] = defer_call,
    ) -> None:
        self._layers = layers
        self.request = request
        self.response = response
        self._done = done
        self._defer = defer
        self._index = 0
        self._protohost = get_protohost(request.url) or ""
        self._rewrite: Rewrite = NO_REWRITE
        self._pending: deque[Any] = deque()
        self._draining = False
        self._tasks: set[Any] = set()

        if request.original_url is None:
            request.original_url = request.url

    def start(self) -> None:
        self.next()

    def next(self, err: Any = None) -> None:
        """Continue dispatch, optionally with an active error.

        ``None`` means no error. Any other value, exception or not, puts
        dispatch in error mode.
        """
        self._pending.append(err)
        if self._draining:
            return
        self._draining = True
        try:
            while self._pending:
                self._step(self._pending.popleft())
        finally:
            self._draining = False

    # -- Internal --

    def _step(self, err: Any) -> None:
        request = self.request

        if self._rewrite is not NO_REWRITE:
            request.url = self._rewrite.restore(request.url, self._protohost)
            self._rewrite = NO_REWRITE

        if self._index >= len(self._layers):
            self._defer(self._done, err)
            return

        layer = self._layers[self._index]
        self._index += 1

        if not matches(request.path, layer.route):
            self._pending.append(err)
            return

        request.url, self._rewrite = strip_route(request.url, self._protohost, layer.route)
        self._call(layer, err)

    def _call(self, layer: Layer, err: Any) -> None:
        has_error = err is not None
        if has_error != layer.handles_errors:
            self._pending.append(err)
            return

        request = self.request
        logger.debug("%s %s : %s", layer.name, layer.route or "/", request.original_url)

        try:
            if has_error:
                result = layer.handler(err, request, self.response, self.next)
            else:
                result = layer.handler(request, self.response, self.next)
            if inspect.isawaitable(result):
                spawn(result, self.next, self._tasks)
        except Exception as exc:
            self.next(exc)
