"""
Collector base class.

A collector wraps one discovery source and maps its output into a
normalized record. Hard failures are raised as CollectError subclasses;
soft gaps are recorded as notices and the partial record is returned.
"""

import logging
from typing import Any, List

from ..core.models import Domain


logger = logging.getLogger(__name__)


class Collector:
    """Base class for per-domain collectors."""

    domain: Domain = None

    def __init__(self):
        self.notices: List[str] = []

    def collect(self) -> Any:
        """Take a point-in-time reading. Raises CollectError."""
        self.notices = []
        return self._collect()

    def _collect(self) -> Any:
        raise NotImplementedError

    def notice(self, message: str):
        """Record a non-fatal gap in the collected data."""
        logger.info(f"{self.domain.value}: {message}")
        self.notices.append(message)
