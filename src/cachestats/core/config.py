"""Configuration for metrics collection.

Values come from constructor arguments or from environment variables:

- ``DISABLE_METRICS``: disable recording and reading (default false).
- ``METRICS_MAX_TIME``: retention horizon in seconds (default 3600).
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MINUTE_IN_SECONDS = 60
HOUR_IN_SECONDS = 3600

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_bool(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def _parse_seconds(name: str, value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, value)
        return None


@dataclass(frozen=True)
class MetricsConfig:
    """Static configuration for recording, reading and sweeping metrics.

    Attributes:
        disabled: True to turn metrics off entirely.
        max_time_override: Retention horizon in seconds, None for the default.
        key_name: Name of the sorted-set key holding the series.
        key_group: Namespace group the key lives in.
        store_timeout: Seconds a single store call may take before it is
            abandoned.
    """

    disabled: bool = False
    max_time_override: int | None = None
    key_name: str = "metrics"
    key_group: str = "cachestats"
    store_timeout: float = 1.0

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, prefix: str = ""
    ) -> "MetricsConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.
            prefix: Prefix prepended to every variable name
                (e.g. "CACHESTATS_" reads CACHESTATS_DISABLE_METRICS).

        Returns:
            MetricsConfig with values from the environment.
        """
        env = os.environ if environ is None else environ
        max_time_var = f"{prefix}METRICS_MAX_TIME"
        return cls(
            disabled=_parse_bool(env.get(f"{prefix}DISABLE_METRICS")),
            max_time_override=_parse_seconds(max_time_var, env.get(max_time_var)),
        )

    def max_time(self) -> int:
        """Return the retention horizon in seconds."""
        if self.max_time_override is not None:
            return int(self.max_time_override)
        return HOUR_IN_SECONDS
