"""Request and response types handed to every handler."""

from junction.http.headers import Headers
from junction.http.request import Request
from junction.http.response import Response

__all__ = ["Headers", "Request", "Response"]
