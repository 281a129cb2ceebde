"""
Shared connection limit.

One limiter is shared by every listener of the server. Connections over
the limit are accepted but not read from until a slot frees up, so they
wait instead of being refused with 503.
"""

from collections import deque
from typing import Any, Deque, Set


class ConnectionLimiter:
    """
    Caps the number of connections being served at once.

    Connections must provide ``admit()``, called when a waiting
    connection receives a slot. All methods run on the event loop.

    Example:
        limiter = ConnectionLimiter(512)

        if not limiter.acquire(connection):
            ...  # connection waits until admit() is called
        limiter.release(connection)
    """

    def __init__(self, limit: int):
        """
        Initialize limiter.

        Args:
            limit: Maximum number of concurrently served connections
        """
        if limit < 1:
            raise ValueError(f"connection limit must be at least 1, got {limit}")
        self.limit = limit
        self._active: Set[Any] = set()
        self._waiting: Deque[Any] = deque()

    @property
    def active(self) -> int:
        """Number of connections holding a slot."""
        return len(self._active)

    @property
    def waiting(self) -> int:
        """Number of connections waiting for a slot."""
        return len(self._waiting)

    def acquire(self, connection: Any) -> bool:
        """
        Take a slot for a new connection, or queue it.

        Args:
            connection: Newly accepted connection

        Returns:
            True if the connection may be served now
        """
        if len(self._active) < self.limit:
            self._active.add(connection)
            return True
        self._waiting.append(connection)
        return False

    def release(self, connection: Any) -> None:
        """
        Give back the slot of a closed connection.

        Waiting connections are admitted in arrival order. Releasing a
        connection that was still waiting only removes it from the queue.

        Args:
            connection: Closed connection
        """
        if connection not in self._active:
            try:
                self._waiting.remove(connection)
            except ValueError:
                pass
            return

        self._active.discard(connection)
        while self._waiting and len(self._active) < self.limit:
            waiting = self._waiting.popleft()
            self._active.add(waiting)
            waiting.admit()


def limit_connections(protocol_class: type, limiter: ConnectionLimiter) -> type:
    """
    Wrap a uvicorn HTTP protocol class with the shared limit.

    A connection without a slot keeps its transport paused; bytes that
    arrive before the pause takes effect are held and replayed on
    admission.

    Args:
        protocol_class: uvicorn protocol class (h11 or httptools)
        limiter: Limiter shared by all listeners

    Returns:
        Protocol subclass honoring the limit
    """

    class LimitedProtocol(protocol_class):
        connection_limiter = limiter

        def connection_made(self, transport):
            super().connection_made(transport)
            self._held = bytearray()
            self._admitted = limiter.acquire(self)
            if not self._admitted:
                transport.pause_reading()

        def data_received(self, data: bytes) -> None:
            if not self._admitted:
                self._held.extend(data)
                self.transport.pause_reading()
                return
            super().data_received(data)

        def connection_lost(self, exc):
            limiter.release(self)
            super().connection_lost(exc)

        def admit(self) -> None:
            self._admitted = True
            if self.transport.is_closing():
                return
            self.transport.resume_reading()
            if self._held:
                data = bytes(self._held)
                self._held.clear()
                super().data_received(data)

    LimitedProtocol.__name__ = f"Limited{protocol_class.__name__}"
    LimitedProtocol.__qualname__ = LimitedProtocol.__name__
    return LimitedProtocol
