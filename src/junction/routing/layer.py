"""Registry entries: a mount route bound to a tagged handler.

A handler is either *normal*, called as ``(request, response, next)``,
or *error-aware*, called as ``(error, request, response, next)``. The
kind is fixed when the handler is registered, never guessed from its
signature.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from junction._internal.types import ErrorHandlerFunc, HandlerFunc
from junction.routing.prefix import normalize_route


class HandlerKind(Enum):
    NORMAL = "normal"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Layer:
    """One entry in an App's handler registry.

    ``route`` is already normalized (see ``normalize_route``); the
    ``normal`` and ``error`` constructors normalize it for you.
    """

    route: str
    handler: HandlerFunc | ErrorHandlerFunc
    kind: HandlerKind = HandlerKind.NORMAL

    @classmethod
    def normal(cls, route: str, handler: HandlerFunc) -> "Layer":
        return cls(normalize_route(route), handler, HandlerKind.NORMAL)

    @classmethod
    def error(cls, route: str, handler: ErrorHandlerFunc) -> "Layer":
        return cls(normalize_route(route), handler, HandlerKind.ERROR)

    @property
    def handles_errors(self) -> bool:
        return self.kind is HandlerKind.ERROR

    @property
    def name(self) -> str:
        return _handler_name(self.handler)


def _handler_name(handler: Any) -> str:
    name = getattr(handler, "__name__", None)
    if not name or name == "<lambda>":
        return "<anonymous>"
    return name
