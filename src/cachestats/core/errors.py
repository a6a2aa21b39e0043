"""Exception hierarchy for cachestats."""


class CacheStatsError(Exception):
    """Base class for all cachestats errors."""


class StoreError(CacheStatsError):
    """A sorted-set store call failed (connection, timeout, protocol)."""


class PayloadError(CacheStatsError):
    """A stored payload could not be turned into a Snapshot."""


class IncompatiblePayloadError(PayloadError):
    """The payload is not a native snapshot payload (foreign or legacy)."""


class MalformedPayloadError(PayloadError):
    """The payload carries the native tag but its content is corrupt."""
