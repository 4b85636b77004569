"""Tests for junction.http.response — mutable Response lifecycle."""

import pytest

from junction.errors import ResponseFinishedError
from junction.http.response import Response


class TestHeaders:
    def test_defaults(self) -> None:
        r = Response()
        assert r.status == 200
        assert r.header_names() == []
        assert r.body == b""

    def test_set_and_get_case_insensitive(self) -> None:
        r = Response()
        r.set_header("Content-Type", "text/plain")
        assert r.get_header("content-type") == "text/plain"
        assert r.has_header("CONTENT-TYPE")

    def test_set_replaces(self) -> None:
        r = Response()
        r.set_header("X-Thing", "a").set_header("x-thing", "b")
        assert r.get_header_list("X-Thing") == ["b"]

    def test_int_value(self) -> None:
        r = Response()
        r.set_header("Content-Length", 12)
        assert r.get_header("content-length") == "12"

    def test_list_value(self) -> None:
        r = Response()
        r.set_header("Set-Cookie", ["a=1", "b=2"])
        assert r.get_header("set-cookie") == "a=1"
        assert r.get_header_list("set-cookie") == ["a=1", "b=2"]

    def test_missing(self) -> None:
        r = Response()
        assert r.get_header("x-missing") is None
        assert r.get_header_list("x-missing") == []
        assert not r.has_header("x-missing")

    def test_remove(self) -> None:
        r = Response()
        r.set_header("X-Thing", "a")
        r.remove_header("x-thing")
        r.remove_header("x-never-set")
        assert not r.has_header("X-Thing")

    def test_header_names_keep_given_case(self) -> None:
        r = Response()
        r.set_header("X-Request-Id", "1").set_header("ETag", '"v1"')
        assert r.header_names() == ["X-Request-Id", "ETag"]

    def test_raw_headers(self) -> None:
        r = Response()
        r.set_header("Set-Cookie", ["a=1", "b=2"])
        assert r.raw_headers() == [(b"set-cookie", b"a=1"), (b"set-cookie", b"b=2")]


class TestBody:
    def test_write_and_end(self) -> None:
        r = Response()
        r.write("hello, ")
        r.write(b"world")
        r.end()
        assert r.body == b"hello, world"
        assert r.text == "hello, world"
        assert r.finished

    def test_end_with_chunk(self) -> None:
        r = Response()
        r.end("done")
        assert r.text == "done"

    def test_write_marks_headers_sent(self) -> None:
        r = Response()
        assert not r.headers_sent
        r.write("x")
        assert r.headers_sent
        assert not r.finished

    def test_end_marks_headers_sent(self) -> None:
        r = Response()
        r.end()
        assert r.headers_sent

    def test_write_after_end_raises(self) -> None:
        r = Response()
        r.end()
        with pytest.raises(ResponseFinishedError):
            r.write("late")

    def test_second_end_ignored(self) -> None:
        r = Response()
        r.end("first")
        r.end("second")
        assert r.text == "first"

    def test_unicode_encoded_as_utf8(self) -> None:
        r = Response()
        r.end("café")
        assert r.body == "café".encode()


class TestOnFinish:
    def test_called_on_end(self) -> None:
        seen: list[Response] = []
        r = Response()
        r.on_finish(seen.append)
        assert seen == []
        r.end()
        assert seen == [r]

    def test_called_once(self) -> None:
        seen: list[Response] = []
        r = Response()
        r.on_finish(seen.append)
        r.end()
        r.end()
        assert len(seen) == 1

    def test_called_immediately_when_finished(self) -> None:
        seen: list[Response] = []
        r = Response()
        r.end()
        r.on_finish(seen.append)
        assert seen == [r]
