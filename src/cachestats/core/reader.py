"""Metrics reader: returns a sliding window of recorded snapshots."""

import logging
import time

from cachestats.core.boundary import guarded
from cachestats.core.config import MINUTE_IN_SECONDS
from cachestats.core.encoding.snapshot import decode_snapshot
from cachestats.core.errors import IncompatiblePayloadError, PayloadError
from cachestats.core.models import Snapshot
from cachestats.core.series import SeriesComponent

logger = logging.getLogger(__name__)

# Most recent window excluded from reads; aggregation windows still filling.
MIN_GRANULARITY = MINUTE_IN_SECONDS


class MetricsReader(SeriesComponent):
    """Reads recorded snapshots back from the series."""

    async def get(self, seconds: int | None = None) -> list[Snapshot]:
        """Return snapshots recorded in the last `seconds`, oldest first.

        The most recent minute is excluded. Payloads that are not native
        snapshots are skipped silently; corrupt native payloads are skipped
        and logged at debug level.

        Args:
            seconds: Age of the oldest snapshot to return. Defaults to the
                configured retention horizon.

        Returns:
            Snapshots ordered by timestamp ascending. Empty if metrics are
            inactive or the store fails.
        """
        if not self.gate.is_active():
            return []
        if seconds is None:
            seconds = self.config.max_time()

        now = int(time.time())
        try:
            store = self.store()
            key = self.series_key(store)
        except Exception:
            logger.exception("Could not resolve metrics store")
            return []
        entries = await guarded(
            "range_by_score",
            store.range_by_score(key, now - seconds, now - MIN_GRANULARITY),
            [],
            timeout=self.config.store_timeout,
        )

        snapshots: list[Snapshot] = []
        for payload, _score in entries:
            try:
                snapshots.append(decode_snapshot(payload))
            except IncompatiblePayloadError:
                continue
            except PayloadError as e:
                logger.debug("Skipping malformed snapshot payload: %s", e)
        return snapshots
