"""In-memory sorted-set store adapter."""

import bisect
import itertools

from cachestats.adapters.storage.keys import build_key


class InMemorySortedSetStore:
    """In-memory implementation of SortedSetStorePort.

    Keeps one score-sorted list per key. Equal scores keep insertion order and
    identical payloads are stored as separate entries. Suitable for testing
    and single-process deployments where persistence is not required.
    """

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self._sets: dict[str, list[tuple[float, int, str]]] = {}
        self._sequence = itertools.count()

    def build_key(self, name: str, group: str) -> str:
        """Return the namespaced key for a logical collection."""
        return build_key(self.prefix, name, group)

    async def add_scored(self, key: str, score: float, payload: str) -> None:
        """Add a payload under key with the given score."""
        entries = self._sets.setdefault(key, [])
        bisect.insort(entries, (score, next(self._sequence), payload))

    async def range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> list[tuple[str, float]]:
        """Return (payload, score) pairs with min_score <= score <= max_score."""
        return [
            (payload, score)
            for score, _seq, payload in self._sets.get(key, [])
            if min_score <= score <= max_score
        ]

    async def remove_range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> int:
        """Remove payloads with min_score <= score <= max_score."""
        entries = self._sets.get(key, [])
        kept = [e for e in entries if not min_score <= e[0] <= max_score]
        removed = len(entries) - len(kept)
        if key in self._sets:
            self._sets[key] = kept
        return removed

    async def count(self, key: str) -> int:
        """Return the number of payloads stored under key."""
        return len(self._sets.get(key, []))

    async def clear(self) -> None:
        """Remove every key from the store."""
        self._sets.clear()
