"""Retention sweeper: drops snapshots older than the retention horizon."""

import logging
import time

from cachestats.core.boundary import guarded
from cachestats.core.series import SeriesComponent

logger = logging.getLogger(__name__)


class RetentionSweeper(SeriesComponent):
    """Bulk-deletes expired snapshots. Idempotent and safe to run concurrently."""

    async def discard(self) -> int:
        """Remove snapshots with timestamp <= now - max_time.

        Returns:
            Number of removed snapshots. 0 if inactive or the store fails.
        """
        if not self.gate.is_active():
            return 0
        cutoff = int(time.time()) - self.config.max_time()
        try:
            store = self.store()
            key = self.series_key(store)
        except Exception:
            logger.exception("Could not resolve metrics store")
            return 0
        removed = await guarded(
            "remove_range_by_score",
            store.remove_range_by_score(key, 0, cutoff),
            0,
            timeout=self.config.store_timeout,
        )
        if removed:
            logger.debug("Discarded %d expired snapshots", removed)
        return removed
