"""Tests for dispatch inside a running event loop.

With a loop running, the terminal callback is scheduled for the next
tick and ``async def`` handlers run as tasks whose failures feed the
error channel.
"""

import asyncio
from typing import Any

from junction.app import App
from junction.http.request import Request
from junction.http.response import Response


async def _settle() -> None:
    """Let scheduled callbacks and spawned handler tasks run."""
    for _ in range(10):
        await asyncio.sleep(0)


class TestDeferredTerminal:
    async def test_terminal_runs_on_next_tick(self) -> None:
        app = App()
        outcome: list[Any] = []

        app.handle(Request(url="/"), Response(), outcome.append)
        assert outcome == []

        await asyncio.sleep(0)
        assert outcome == [None]

    async def test_terminal_receives_error_on_next_tick(self) -> None:
        app = App()
        outcome: list[Any] = []

        def fail(request, response, next) -> None:
            raise ValueError("boom")

        app.use(fail)
        app.handle(Request(url="/"), Response(), outcome.append)
        assert outcome == []

        await asyncio.sleep(0)
        assert isinstance(outcome[0], ValueError)

    async def test_default_terminal_answers_404(self) -> None:
        app = App()
        request, response = Request(method="GET", url="/missing"), Response()

        app.handle(request, response)
        assert not response.finished

        await _settle()
        assert response.status == 404
        assert "Cannot GET /missing" in response.text


class TestAsyncHandlers:
    async def test_async_handler_continues(self) -> None:
        calls: list[str] = []
        outcome: list[Any] = []
        app = App()

        async def first(request, response, next) -> None:
            await asyncio.sleep(0)
            calls.append("first")
            next()

        def second(request, response, next) -> None:
            calls.append("second")
            next()

        app.use(first).use(second)
        app.handle(Request(url="/"), Response(), outcome.append)

        await _settle()
        assert calls == ["first", "second"]
        assert outcome == [None]

    async def test_async_handler_failure_enters_error_channel(self) -> None:
        caught: list[str] = []
        outcome: list[Any] = []
        app = App()

        async def fail(request, response, next) -> None:
            await asyncio.sleep(0)
            raise RuntimeError("async boom")

        def skipped(request, response, next) -> None:
            caught.append("skipped")
            next()

        def catch(err, request, response, next) -> None:
            caught.append(str(err))
            next()

        app.use(fail).use(skipped).use_error(catch)
        app.handle(Request(url="/"), Response(), outcome.append)

        await _settle()
        assert caught == ["async boom"]
        assert outcome == [None]

    async def test_async_error_handler(self) -> None:
        outcome: list[Any] = []
        app = App()

        def fail(request, response, next) -> None:
            next(KeyError("missing"))

        async def recover(err, request, response, next) -> None:
            await asyncio.sleep(0)
            response.status = 400
            next()

        app.use(fail).use_error(recover)
        response = Response()
        app.handle(Request(url="/"), response, outcome.append)

        await _settle()
        assert response.status == 400
        assert outcome == [None]

    async def test_async_handler_sees_stripped_url(self) -> None:
        seen: list[str] = []
        app = App()

        async def record(request, response, next) -> None:
            await asyncio.sleep(0)
            seen.append(request.url)
            response.end()

        app.use("/api", record)
        request = Request(url="/api/items")
        app.handle(request, Response(), lambda err: None)

        await _settle()
        assert seen == ["/items"]

    async def test_later_next_restores_url(self) -> None:
        seen: list[str] = []
        app = App()

        async def later(request, response, next) -> None:
            await asyncio.sleep(0)
            next()

        def record(request, response, next) -> None:
            seen.append(request.url)
            next()

        app.use("/api", later).use(record)
        app.handle(Request(url="/api/items"), Response(), lambda err: None)

        await _settle()
        assert seen == ["/api/items"]
