"""Shared plumbing for components that touch the metrics series."""

from cachestats.core.config import MetricsConfig
from cachestats.core.gate import AvailabilityGate
from cachestats.core.ports import MeasuredCachePort, SortedSetStorePort


class SeriesComponent:
    """Base class holding the gate, config and store access for the series.

    The store is taken from the explicit override when given, otherwise from
    the measured cache's store handle. It is only resolved once the gate has
    confirmed the handle exists.
    """

    def __init__(
        self,
        cache: MeasuredCachePort,
        config: MetricsConfig | None = None,
        store: SortedSetStorePort | None = None,
        gate: AvailabilityGate | None = None,
    ) -> None:
        self.cache = cache
        self.config = config or MetricsConfig()
        self.gate = gate or AvailabilityGate(cache, self.config)
        self._store_override = store

    def store(self) -> SortedSetStorePort:
        """Return the sorted-set store holding the series."""
        if self._store_override is not None:
            return self._store_override
        return self.cache.store_handle()  # type: ignore[attr-defined]

    def series_key(self, store: SortedSetStorePort) -> str:
        """Return the namespaced key the series is stored under."""
        return store.build_key(self.config.key_name, self.config.key_group)
