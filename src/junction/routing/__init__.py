"""Routing — mount routes, prefix matching, and per-step path rewrites.

Entries are registered during setup and frozen into a tuple when the
app first dispatches.
"""

from junction.routing.layer import HandlerKind, Layer
from junction.routing.prefix import matches, normalize_route
from junction.routing.rewrite import Rewrite, strip_route
from junction.routing.url import get_protohost, parse_pathname

__all__ = [
    "HandlerKind",
    "Layer",
    "Rewrite",
    "get_protohost",
    "matches",
    "normalize_route",
    "parse_pathname",
    "strip_route",
]
