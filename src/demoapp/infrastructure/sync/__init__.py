"""
Synchronization primitives.
"""

from demoapp.infrastructure.sync.latch import Latch
from demoapp.infrastructure.sync.rwlock import RWLock

__all__ = ["Latch", "RWLock"]
