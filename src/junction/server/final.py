"""Default terminal handler — answers requests nothing else finished.

``final_handler(request, response, ...)`` returns the ``done(err)``
callback the dispatch loop calls when it runs off the end of the
registry:

- no error: ``404`` with ``Cannot GET /path``
- an error: the status it carries (``status`` / ``status_code`` in the
  4xx-5xx range), else ``500``; the traceback as the message outside
  production, the bare reason phrase in production

The body is a small HTML document rendered with kida. If the response
has already started, nothing can be sent: the response is just ended.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from kida import Environment

from junction.routing.url import parse_pathname

if TYPE_CHECKING:
    from junction._internal.types import Done
    from junction.http.request import Request
    from junction.http.response import Response

logger = logging.getLogger("junction.server")

ErrorHook = Callable[[Any, "Request", "Response"], None]

_ERROR_DOCUMENT = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Error</title>
</head>
<body>
<pre>{{ message }}</pre>
</body>
</html>
"""

# Characters left as-is when echoing a path back in a 404 message
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"

_template: Any = None


def _error_template() -> Any:
    global _template
    if _template is None:
        _template = Environment(autoescape=True).from_string(_ERROR_DOCUMENT)
    return _template


def final_handler(
    request: Request,
    response: Response,
    *,
    env: str = "development",
    on_error: ErrorHook | None = None,
) -> Done:
    """Build the terminal callback for one request.

    Args:
        request: The request being dispatched.
        response: Its response.
        env: Environment name; ``"production"`` hides error details.
        on_error: Called with ``(err, request, response)`` for every error
            that reaches this handler, before any response is written.
    """

    def done(err: Any) -> None:
        headers: list[tuple[str, str]] = []
        if err is not None:
            status = _error_status(err) or _response_error_status(response)
            headers = _error_headers(err, status)
            message = _error_message(err, status, env)
        else:
            status = 404
            path = parse_pathname(request.original_url or request.url)
            message = f"Cannot {request.method} {quote(path, safe=_PATH_SAFE)}"

        logger.debug("default %d", status)

        if err is not None and on_error is not None:
            on_error(err, request, response)

        if response.headers_sent:
            logger.debug("cannot %d after headers sent", status)
            response.end()
            return

        _send(request, response, status, headers, message)

    return done


def log_error(err: Any, request: Request | None = None) -> None:
    """Report an error that reached the terminal handler."""
    prefix = (
        f"{request.method} {request.original_url or request.url}"
        if request is not None
        else "Unhandled error"
    )
    if isinstance(err, BaseException):
        logger.error("%s\n%s", prefix, "".join(traceback.format_exception(err)).rstrip())
    else:
        logger.error("%s: %r", prefix, err)


# -- Internal --


def _error_status(err: Any) -> int | None:
    for attr in ("status", "status_code"):
        value = getattr(err, attr, None)
        if isinstance(value, int) and 400 <= value < 600:
            return value
    return None


def _response_error_status(response: Response) -> int:
    if 400 <= response.status < 600:
        return response.status
    return 500


def _error_headers(err: Any, status: int) -> list[tuple[str, str]]:
    """Headers carried by the error, only if the error set this status."""
    if _error_status(err) != status:
        return []
    headers = getattr(err, "headers", None)
    if not headers:
        return []
    if isinstance(headers, Mapping):
        return [(str(k), str(v)) for k, v in headers.items()]
    return [(str(k), str(v)) for k, v in headers]


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return str(status)


def _error_message(err: Any, status: int, env: str) -> str:
    if env == "production":
        return _reason(status)
    if isinstance(err, BaseException):
        return "".join(traceback.format_exception(err)).rstrip()
    return str(err)


def _send(
    request: Request,
    response: Response,
    status: int,
    headers: list[tuple[str, str]],
    message: str,
) -> None:
    body = _error_template().render({"message": message}).encode("utf-8")

    for name in response.header_names():
        response.remove_header(name)
    for name, value in headers:
        response.set_header(name, value)

    response.status = status
    response.set_header("Content-Security-Policy", "default-src 'none'")
    response.set_header("X-Content-Type-Options", "nosniff")
    response.set_header("Content-Type", "text/html; charset=utf-8")
    response.set_header("Content-Length", len(body))

    if request.method == "HEAD":
        response.end()
        return
    response.end(body)
