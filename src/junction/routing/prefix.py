"""Prefix matching for mounted handlers.

A handler mounted at ``/foo`` sees ``/foo``, ``/foo/``, ``/foo/bar`` and
``/foo.json``, but not ``/foobar``. Matching ignores case.
"""


def normalize_route(route: str | None) -> str:
    """Normalize a mount route for storage.

    ``None`` means root. One trailing ``/`` is dropped, so root is stored
    as the empty string.
    """
    path = "/" if route is None else route
    if path.endswith("/"):
        path = path[:-1]
    return path


def matches(path: str, route: str) -> bool:
    """True if *path* lies under *route*.

    The character after the consumed prefix must be ``/``, ``.`` or the
    end of the path. The root route (``""`` or ``"/"``) matches everything.
    """
    if route in ("", "/"):
        return True

    size = len(route)
    if path[:size].lower() != route.lower():
        return False

    if len(path) > size and path[size] not in "/.":
        return False
    return True
