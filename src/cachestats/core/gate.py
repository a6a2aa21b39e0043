"""Availability gate for metrics operations."""

import logging

from cachestats.core.config import MetricsConfig
from cachestats.core.ports import MeasuredCachePort, StoreBackedCachePort

logger = logging.getLogger(__name__)


class AvailabilityGate:
    """Decides whether metrics may be recorded or read right now.

    The decision is re-evaluated on every call and never performs store I/O.
    """

    def __init__(self, cache: MeasuredCachePort, config: MetricsConfig) -> None:
        self.cache = cache
        self.config = config

    def is_enabled(self) -> bool:
        """Return True unless metrics are disabled by configuration."""
        return not self.config.disabled

    def is_active(self) -> bool:
        """Return True if metrics are enabled and the cache can serve them.

        Requires the cache to report itself ready and to expose a sorted-set
        store handle.
        """
        if not self.is_enabled():
            return False
        try:
            ready = bool(self.cache.is_ready())
        except Exception:
            logger.debug("Cache readiness probe raised", exc_info=True)
            return False
        if not ready:
            logger.debug("Cache not ready, metrics inactive")
            return False
        return isinstance(self.cache, StoreBackedCachePort)
