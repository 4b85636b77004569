"""ASGI response sending — translates a finished Response to ASGI messages."""

from junction._internal.asgi import Send
from junction.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as one ``http.response.start`` and one body message.

    ``Content-Length`` is filled in unless a handler set it (a HEAD answer
    reports the length of the body it is not sending).
    """
    body = response.body if _body_allowed(response.status) else b""

    raw_headers = response.raw_headers()
    if not response.has_header("content-length"):
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    if head:
        body = b""

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
