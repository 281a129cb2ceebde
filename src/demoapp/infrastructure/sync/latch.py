"""
One-shot latch.

Released exactly once; every later release is a no-op that reports it
lost the race. Used for the quit request and the reload-ready gate.
"""

import asyncio
import threading


class Latch:
    """
    Fire-exactly-once signal.

    ``release()`` is a compare-and-set guarded by a lock, so it is safe to
    call from signal handlers, HTTP handlers and worker threads alike.
    Waiting is asynchronous and must happen on the event loop.

    Attributes:
        name: Latch name used in logs
    """

    def __init__(self, name: str = "latch"):
        """
        Initialize latch.

        Args:
            name: Latch name used in logs
        """
        self.name = name
        self._lock = threading.Lock()
        self._released = False
        self._event = asyncio.Event()
        self._loop = None

    def release(self) -> bool:
        """
        Release the latch.

        Returns:
            True if this call released the latch, False if it was
            already released
        """
        with self._lock:
            if self._released:
                return False
            self._released = True

        self._set_event()
        return True

    def is_released(self) -> bool:
        """Check whether the latch has been released."""
        return self._released

    async def wait(self) -> None:
        """Wait until the latch is released."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        if self._released:
            return
        await self._event.wait()

    def _set_event(self) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            self._event.set()
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._event.set()
        else:
            loop.call_soon_threadsafe(self._event.set)

    def __repr__(self) -> str:
        return f"Latch(name={self.name!r}, released={self._released})"
