"""Data models for the market data service."""

from dataclasses import dataclass
from typing import Tuple

LISTED_SUFFIX = ".TW"  # 上市
OTC_SUFFIX = ".TWO"  # 上櫃


@dataclass(frozen=True)
class RetryPolicy:
    """How hard the market data service tries before giving up on a code."""

    max_attempts: int = 3  # per transport and listing suffix
    backoff_seconds: float = 1.0
    suffixes: Tuple[str, ...] = (LISTED_SUFFIX, OTC_SUFFIX)
    transports: Tuple[str, ...] = ("yfinance", "chart")

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.fetch_max_attempts,
            backoff_seconds=settings.fetch_backoff_seconds,
            transports=tuple(settings.fetch_transports),
        )


@dataclass
class CacheStats:
    """Series cache counters."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    keys: int = 0
