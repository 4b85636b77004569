"""Request-target helpers: path extraction and absolute-form host split."""

from urllib.parse import urlsplit


def parse_pathname(url: str) -> str:
    """Return the path component of a request target.

    Origin-form targets (``/a/b?x=1``) are split on ``?`` / ``#`` by hand;
    ``urlsplit`` would read a leading ``//`` as a network location.
    Absolute-form targets go through ``urlsplit``. An empty path is ``/``.
    """
    if url.startswith("/"):
        end = len(url)
        for sep in ("?", "#"):
            idx = url.find(sep)
            if idx != -1 and idx < end:
                end = idx
        return url[:end] or "/"
    return urlsplit(url).path or "/"


def get_protohost(url: str) -> str | None:
    """Return ``scheme://host`` for an absolute-form request target.

    ``None`` for origin-form targets, and when a ``?`` appears before
    ``://`` (the ``://`` is then part of the query). An absolute URL with
    no path is all host.

        >>> get_protohost("http://example.com/admin?x=1")
        'http://example.com'
        >>> get_protohost("/admin") is None
        True
    """
    if not url or url[0] == "/":
        return None

    fqdn_index = url.find("://")
    if fqdn_index == -1 or url.rfind("?", 0, fqdn_index + 1) != -1:
        return None

    path_index = url.find("/", fqdn_index + 3)
    if path_index == -1:
        return url
    return url[:path_index]
