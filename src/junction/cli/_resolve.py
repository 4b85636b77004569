"""Import-string resolution for ``junction run``.

``"pkg.module:attr"`` names either an App or a Server. A bare module
path looks for ``app``; a callable that is neither is called once as a
factory and its result checked again.
"""

import importlib

from junction.app import App
from junction.server.listener import Server

Servable = App | Server


def resolve_app(import_string: str) -> Servable:
    """Resolve *import_string* to something that can be served.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the target (or what its factory returns) is neither
            an ``App`` nor a ``Server``.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(target, Servable) and callable(target):
        try:
            target = target()
        except Exception as exc:
            msg = f"Factory {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, Servable):
        kind = type(target).__name__
        msg = f"{import_string!r} is a {kind}, expected a junction.App or junction.Server"
        raise TypeError(msg)

    return target


def serve(target: Servable, host: str | None, port: int | None) -> None:
    """Block serving *target* over HTTP."""
    if isinstance(target, App):
        target.listen(host, port)
    else:
        target.run(host, port)
