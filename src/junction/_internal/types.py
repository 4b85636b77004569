"""Shared type aliases used across junction modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from junction.http.request import Request
    from junction.http.response import Response

# The continuation a handler calls to pass control on, optionally with an error
Next: TypeAlias = Callable[..., None]

# Normal handler: (request, response, next). May be ``async def``
HandlerFunc: TypeAlias = Callable[["Request", "Response", Next], Any]

# Error-aware handler: (error, request, response, next)
ErrorHandlerFunc: TypeAlias = Callable[[Any, "Request", "Response", Next], Any]

# Terminal callback invoked once the registry is exhausted
Done: TypeAlias = Callable[[Any], None]
