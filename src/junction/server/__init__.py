"""Transport adapter and default terminal handler.

Everything that touches ASGI or produces a fallback response lives here;
the dispatch loop itself only ever calls ``handler(request, response)``
and ``done(err)``.
"""

from junction.server.final import final_handler, log_error
from junction.server.listener import Server, create_server

__all__ = ["Server", "create_server", "final_handler", "log_error"]
