"""
HTTP server construction.

Listening sockets are bound before the lifecycle starts so that an
unusable address fails fast. uvicorn then serves on those sockets without
capturing signals: termination is owned by the lifecycle's signal actor.
"""

import contextlib
import socket
from typing import Iterator, List, Optional, Tuple

import uvicorn
from fastapi import FastAPI

from demoapp.domain.exceptions import TransportError
from demoapp.infrastructure.web.connection_limit import (
    ConnectionLimiter,
    limit_connections,
)

BACKLOG = 2048


class DemoappServer(uvicorn.Server):
    """
    uvicorn server that leaves signal handling to the lifecycle.

    Every listener shares one connection limit; connections over the
    limit wait for a slot instead of receiving 503.
    """

    def __init__(self, config: uvicorn.Config, max_connections: int):
        super().__init__(config)
        self.connection_limiter = ConnectionLimiter(max_connections)

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield

    async def startup(self, sockets: Optional[List[socket.socket]] = None) -> None:
        protocol_class = self.config.http_protocol_class
        if getattr(protocol_class, "connection_limiter", None) is not self.connection_limiter:
            self.config.http_protocol_class = limit_connections(
                protocol_class, self.connection_limiter
            )
        await super().startup(sockets=sockets)


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a listen address into host and port.

    Accepts ``host:port``, ``:port`` (all interfaces) and ``[v6]:port``.

    Args:
        address: Listen address

    Returns:
        (host, port) tuple

    Raises:
        ValueError: If the address is malformed
    """
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {address!r}")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"IPv6 address must be bracketed in {address!r}")

    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in address {address!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range in address {address!r}")

    return host or "0.0.0.0", port


def bind_socket(address: str) -> socket.socket:
    """
    Bind and listen on one address.

    Args:
        address: Listen address

    Returns:
        Listening socket

    Raises:
        TransportError: If the address is invalid or cannot be bound
    """
    try:
        host, port = parse_listen_address(address)
    except ValueError as e:
        raise TransportError(address, str(e)) from e

    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(BACKLOG)
        sock.set_inheritable(True)
    except OSError as e:
        sock.close()
        raise TransportError(address, str(e)) from e
    return sock


def bind_sockets(addresses: List[str]) -> List[socket.socket]:
    """
    Bind every listen address, closing all sockets if one fails.

    Args:
        addresses: Listen addresses

    Returns:
        Listening sockets in address order

    Raises:
        TransportError: On the first address that cannot be bound
    """
    sockets: List[socket.socket] = []
    try:
        for address in addresses:
            sockets.append(bind_socket(address))
    except TransportError:
        for sock in sockets:
            sock.close()
        raise
    return sockets


def build_server(
    app: FastAPI,
    read_timeout: float,
    max_connections: int,
    shutdown_timeout: float,
    log_level: str = "warning",
) -> DemoappServer:
    """
    Create the uvicorn server for the application.

    Args:
        app: ASGI application
        read_timeout: Seconds before idle keep-alive connections are closed
        max_connections: Maximum connections served at once; more wait
        shutdown_timeout: Bounded drain on graceful shutdown (seconds)
        log_level: uvicorn's own log level

    Returns:
        Configured server
    """
    config = uvicorn.Config(
        app,
        lifespan="off",
        log_level=log_level,
        access_log=False,
        timeout_keep_alive=max(1, int(read_timeout)),
        timeout_graceful_shutdown=max(1, int(shutdown_timeout)),
    )
    return DemoappServer(config, max_connections=max_connections)
