"""Tests for junction.server.sender response emission rules."""

from junction.http.response import Response
from junction.server.sender import send_response


def _ended(body: str = "", status: int = 200) -> Response:
    response = Response(status=status)
    response.end(body)
    return response


class TestSendResponseNoBodyStatuses:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        # A handler that writes a body on a 204 still sends none
        await send_response(_ended("unexpected-body", 204), send)

        assert messages[0]["type"] == "http.response.start"
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b""

    async def test_304_drops_body_and_sets_zero_content_length(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(_ended("unexpected-body", 304), send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(_ended("ok"), send)

        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert messages[1]["body"] == b"ok"


class TestSendResponseHeaders:
    async def test_handler_content_length_kept(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        response = Response()
        response.set_header("Content-Length", 99)
        response.end("ok")
        await send_response(response, send)

        lengths = [v for k, v in messages[0]["headers"] if k == b"content-length"]
        assert lengths == [b"99"]

    async def test_head_reports_length_without_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(_ended("hello"), send, head=True)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert messages[1]["body"] == b""

    async def test_repeated_headers(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        response = Response()
        response.set_header("Set-Cookie", ["a=1", "b=2"])
        response.end()
        await send_response(response, send)

        cookies = [v for k, v in messages[0]["headers"] if k == b"set-cookie"]
        assert cookies == [b"a=1", b"b=2"]
