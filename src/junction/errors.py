"""Junction exception hierarchy.

Shared across App, dispatch, server, and handlers so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class JunctionError(Exception):
    """Base for all junction-specific errors."""


class ConfigurationError(JunctionError):
    """Raised when a handler registration is invalid.

    Surfaces at setup time from ``App.use()`` / ``App.use_error()``.
    """


class ResponseFinishedError(JunctionError):
    """Raised when writing to a response that has already been ended."""


@dataclass(frozen=True, slots=True)
class HTTPError(JunctionError):
    """An error that maps directly to an HTTP status code.

    Pass it to ``next()`` (or raise it) from any handler. The default
    terminal handler answers with ``status`` and copies ``headers`` onto
    the response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing handled the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
