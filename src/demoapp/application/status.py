"""
Status service backing the /api/v1/status endpoints.

Receives configuration snapshots as a coordinator subscriber and answers
status queries from its own copy, read under a shared lock.
"""

import asyncio
import os
import platform
import socket
import threading
import time
from typing import Any, Dict, Optional

from demoapp.domain.build_info import BuildInfo
from demoapp.domain.config_model import ConfigModel
from demoapp.domain.date_format import format_date
from demoapp.infrastructure.sync import RWLock


class StatusService:
    """
    Read model for status endpoints.

    Attributes:
        build_info: Build metadata
        flags: Effective command-line flags, name to string value
        started_at: Process start time (epoch seconds)
    """

    def __init__(self, build_info: BuildInfo, flags: Dict[str, str]):
        """
        Initialize status service.

        Args:
            build_info: Build metadata
            flags: Effective command-line flags
        """
        self.build_info = build_info
        self.flags = dict(flags)
        self.started_at = time.time()

        self._lock = RWLock()
        self._config: Optional[ConfigModel] = None

    def apply_config(self, config: ConfigModel) -> None:
        """
        Replace the served configuration (coordinator subscriber).

        Args:
            config: New configuration snapshot
        """
        with self._lock.write():
            self._config = config

    def config(self) -> Optional[ConfigModel]:
        """Get the served configuration snapshot."""
        with self._lock.read():
            return self._config

    def config_yaml(self) -> str:
        """Serialized configuration, empty before the first load."""
        config = self.config()
        return config.to_yaml() if config is not None else ""

    def date(self) -> str:
        """Current time formatted with the configured date format."""
        config = self.config()
        return format_date(config.date_format if config else "")

    def runtime_info(self) -> Dict[str, Any]:
        """
        Collect runtime information about the process.

        Returns:
            Runtime information dict

        Raises:
            OSError: If the hostname cannot be determined
        """
        try:
            task_count = len(asyncio.all_tasks())
        except RuntimeError:
            task_count = 0

        return {
            "hostname": socket.gethostname(),
            "pid": os.getpid(),
            "threadCount": threading.active_count(),
            "taskCount": task_count,
            "cpuCount": os.cpu_count() or 0,
            "uptimeSeconds": round(time.time() - self.started_at, 3),
            "pythonVersion": platform.python_version(),
        }
