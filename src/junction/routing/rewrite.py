"""Path rewriting as a mounted handler's prefix is entered and left.

Each dispatch step produces a fresh :class:`Rewrite` describing what it
did to the URL; the next step hands it back to :meth:`Rewrite.restore`
before evaluating its own entry.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rewrite:
    """The prefix stripped by one dispatch step."""

    removed: str = ""
    slash_added: bool = False

    def restore(self, url: str, protohost: str) -> str:
        """Undo this rewrite on *url*."""
        if self.slash_added:
            url = url[1:]
        if self.removed:
            url = protohost + self.removed + url[len(protohost):]
        return url


NO_REWRITE = Rewrite()


def strip_route(url: str, protohost: str, route: str) -> tuple[str, Rewrite]:
    """Remove *route* from *url*, keeping any ``scheme://host`` intact.

    Origin-form results always start with ``/``; when stripping leaves
    none, one is added and recorded so :meth:`Rewrite.restore` can drop
    it again.
    """
    if route in ("", "/"):
        return url, NO_REWRITE

    start = len(protohost)
    # Record the text actually removed; it may differ in case from the route
    removed = url[start : start + len(route)]
    url = protohost + url[start + len(route) :]
    if not protohost and not url.startswith("/"):
        return "/" + url, Rewrite(removed=removed, slash_added=True)
    return url, Rewrite(removed=removed)
