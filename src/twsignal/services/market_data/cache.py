"""Expiring cache for fetched price series."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

from ...config.logging import get_logger
from ...core.models import PriceSeries
from .models import CacheStats

logger = get_logger(__name__)


class SeriesCache(ABC):
    """Cache interface injected into the market data service."""

    @abstractmethod
    def get(self, code: str) -> Optional[PriceSeries]:
        """Return the cached series or None."""

    @abstractmethod
    def set(self, code: str, series: PriceSeries, ttl: Optional[int] = None) -> None:
        """Store a series."""

    @abstractmethod
    def invalidate(self, code: str) -> bool:
        """Drop one entry; True if it existed."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Return usage counters."""


class InMemorySeriesCache(SeriesCache):
    """Process-local cache with a per-entry time to live."""

    def __init__(
        self, ttl_seconds: int = 300, clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, PriceSeries]] = {}
        self._stats = CacheStats()
        self.logger = logger.bind(component="series_cache")

    def get(self, code: str) -> Optional[PriceSeries]:
        entry = self._entries.get(code)
        if entry is None:
            self._stats.misses += 1
            return None

        expires_at, series = entry
        if self._clock() >= expires_at:
            del self._entries[code]
            self._stats.misses += 1
            self.logger.debug("Cache entry expired", code=code)
            return None

        self._stats.hits += 1
        self.logger.debug("Cache hit", code=code)
        return series

    def set(self, code: str, series: PriceSeries, ttl: Optional[int] = None) -> None:
        self._purge_expired()
        ttl = self.ttl_seconds if ttl is None else ttl
        self._entries[code] = (self._clock() + ttl, series)
        self._stats.sets += 1
        self.logger.debug("Cache set", code=code, ttl_seconds=ttl)

    def invalidate(self, code: str) -> bool:
        removed = self._entries.pop(code, None) is not None
        if removed:
            self.logger.debug("Cache entry invalidated", code=code)
        return removed

    def clear(self) -> None:
        self._entries.clear()
        self.logger.debug("Cache cleared")

    def stats(self) -> CacheStats:
        self._purge_expired()
        return CacheStats(
            hits=self._stats.hits,
            misses=self._stats.misses,
            sets=self._stats.sets,
            keys=len(self._entries),
        )

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [
            code
            for code, (expires_at, _) in self._entries.items()
            if now >= expires_at
        ]
        for code in expired:
            del self._entries[code]
        if expired:
            self.logger.debug("Expired cache entries purged", count=len(expired))
