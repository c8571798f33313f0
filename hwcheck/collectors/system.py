"""Host summary: name, operating system, kernel and uptime."""

import logging
import platform
import socket
import time
from typing import Optional

import psutil

from ..core.models import Domain, SystemSummary
from .base import Collector


logger = logging.getLogger(__name__)


class SystemCollector(Collector):
    domain = Domain.SYSTEM

    def _collect(self) -> SystemSummary:
        try:
            uptime = int(time.time() - psutil.boot_time())
        except (psutil.Error, OSError) as e:
            logger.debug(f"Could not read boot time: {e}")
            uptime = None

        return SystemSummary(
            hostname=socket.gethostname(),
            os_name=platform.system(),
            os_version=self._get_os_version(),
            kernel_version=platform.release() or None,
            architecture=platform.machine() or None,
            uptime_seconds=uptime,
        )

    def _get_os_version(self) -> Optional[str]:
        """Get a human readable distribution or OS version."""
        system = platform.system()
        if system == "Linux":
            try:
                release = platform.freedesktop_os_release()
            except (OSError, AttributeError):
                return None
            return release.get("PRETTY_NAME") or release.get("VERSION")
        if system == "Darwin":
            return platform.mac_ver()[0] or None
        return platform.version() or None
