"""
HTTP server construction.
"""

from demoapp.infrastructure.web.connection_limit import (
    ConnectionLimiter,
    limit_connections,
)
from demoapp.infrastructure.web.http_server import (
    DemoappServer,
    bind_sockets,
    build_server,
    parse_listen_address,
)

__all__ = [
    "ConnectionLimiter",
    "DemoappServer",
    "bind_sockets",
    "build_server",
    "limit_connections",
    "parse_listen_address",
]
