"""Metrics recorder: collects snapshots and appends them to the series."""

import logging
import time

from cachestats.core.boundary import guarded
from cachestats.core.encoding.snapshot import encode_snapshot
from cachestats.core.models import Snapshot
from cachestats.core.series import SeriesComponent

logger = logging.getLogger(__name__)


class MetricsRecorder(SeriesComponent):
    """Records one snapshot of the cache counters per trigger.

    Safe to call unconditionally and often: each record() costs at most one
    store write, and failures never propagate to the caller.
    """

    def collect(self) -> Snapshot:
        """Build a snapshot from the cache's current counters.

        The timestamp is the recording instant in whole seconds.
        """
        return Snapshot.from_stats(self.cache.info(), timestamp=int(time.time()))

    async def save(self, snapshot: Snapshot) -> None:
        """Append a snapshot to the series, scored by its timestamp."""
        try:
            store = self.store()
            key = self.series_key(store)
            payload = encode_snapshot(snapshot)
        except Exception:
            logger.exception("Could not prepare snapshot write")
            return
        await guarded(
            "add_scored",
            store.add_scored(key, snapshot.timestamp, payload),
            None,
            timeout=self.config.store_timeout,
        )

    async def record(self) -> Snapshot | None:
        """Collect and save a snapshot if metrics are active.

        Returns:
            The collected snapshot, or None if nothing was collected.
        """
        if not self.gate.is_active():
            return None
        try:
            snapshot = self.collect()
        except Exception:
            logger.exception("Could not collect cache statistics")
            return None
        await self.save(snapshot)
        return snapshot
