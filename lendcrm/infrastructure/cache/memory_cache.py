"""In-memory TTL cache owned by a single record store.

Entries expire ttl_seconds after capture; an expired entry is a miss,
never an error, and is evicted on the read that notices it. Not shared
across instances or processes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from lendcrm.core.constants import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class RecordCache[V]:
    """Mapping of key -> (value, captured_at) with a fixed time-to-live.

    The clock must be monotonic (defaults to time.monotonic) so wall-clock
    adjustments cannot resurrect or prematurely expire entries.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[V, float]] = {}

    def get(self, key: str) -> V | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        value, captured_at = entry
        if self._clock() - captured_at >= self.ttl_seconds:
            del self._entries[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    def set(self, key: str, value: V) -> None:
        self._entries[key] = (value, self._clock())

    def delete(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            logger.debug("Cache DELETE: %s", key)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        return len(self._entries)
