"""Process-wide facade over the metrics components."""

from cachestats.core.config import MetricsConfig
from cachestats.core.gate import AvailabilityGate
from cachestats.core.models import Snapshot
from cachestats.core.ports import MeasuredCachePort, SortedSetStorePort
from cachestats.core.reader import MetricsReader
from cachestats.core.recorder import MetricsRecorder
from cachestats.core.sweeper import RetentionSweeper


class CacheMetrics:
    """Records, reads and sweeps cache statistics snapshots.

    Construct once per process and hand it to whatever triggers collection
    (request middleware, shutdown hooks, schedulers).

    Example:
        ```python
        metrics = CacheMetrics(cache, MetricsConfig.from_env())
        await metrics.record()
        recent = await metrics.get(600)
        ```
    """

    def __init__(
        self,
        cache: MeasuredCachePort,
        config: MetricsConfig | None = None,
        store: SortedSetStorePort | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            cache: The measured cache. Supplies counters, readiness and,
                unless store is given, the sorted-set store handle.
            config: Metrics configuration. Defaults to MetricsConfig().
            store: Explicit sorted-set store, overriding the cache's handle.
        """
        self.cache = cache
        self.config = config or MetricsConfig()
        self.gate = AvailabilityGate(cache, self.config)
        self.recorder = MetricsRecorder(cache, self.config, store, self.gate)
        self.reader = MetricsReader(cache, self.config, store, self.gate)
        self.sweeper = RetentionSweeper(cache, self.config, store, self.gate)

    def is_enabled(self) -> bool:
        return self.gate.is_enabled()

    def is_active(self) -> bool:
        return self.gate.is_active()

    def max_time(self) -> int:
        return self.config.max_time()

    def collect(self) -> Snapshot:
        return self.recorder.collect()

    async def save(self, snapshot: Snapshot) -> None:
        await self.recorder.save(snapshot)

    async def record(self) -> Snapshot | None:
        return await self.recorder.record()

    async def get(self, seconds: int | None = None) -> list[Snapshot]:
        return await self.reader.get(seconds)

    async def discard(self) -> int:
        return await self.sweeper.discard()
