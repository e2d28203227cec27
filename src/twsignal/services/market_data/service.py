"""Price history retrieval with retries, listing-suffix fallback and caching."""

import asyncio
from typing import Awaitable, Callable, List, Optional

from ...config.logging import get_logger
from ...core.exceptions import SourceUnavailableError
from ...core.models import PriceSeries
from .cache import InMemorySeriesCache, SeriesCache
from .models import RetryPolicy
from .transports import PriceTransport, build_transports

logger = get_logger(__name__)


class MarketDataService:
    """Fetches daily price series for Taiwan stock codes."""

    def __init__(
        self,
        transports: List[PriceTransport],
        policy: Optional[RetryPolicy] = None,
        cache: Optional[SeriesCache] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.transports = transports
        self.policy = policy or RetryPolicy()
        self.cache = cache
        self._sleep = sleep
        self.logger = logger.bind(component="market_data_service")

    @classmethod
    def from_settings(cls, settings) -> "MarketDataService":
        """Build the service, its transports and cache from settings."""
        policy = RetryPolicy.from_settings(settings)
        transports = build_transports(
            policy.transports,
            period=settings.fetch_range,
            timeout_seconds=settings.fetch_timeout_seconds,
            proxy_prefixes=settings.chart_proxy_prefixes,
        )
        cache = (
            InMemorySeriesCache(ttl_seconds=settings.cache_ttl_seconds)
            if settings.cache_enabled
            else None
        )
        return cls(transports, policy=policy, cache=cache)

    async def get_price_series(self, code: str) -> PriceSeries:
        """
        Get the daily series for a stock code.

        Each transport is tried in order; for each, the listed (.TW) ticker is
        tried before the OTC (.TWO) one, with up to ``max_attempts`` attempts per
        ticker. An empty answer moves straight on to the next ticker.

        Args:
            code: Stock code without suffix, e.g. "2330"

        Returns:
            PriceSeries as delivered by the source (not yet filtered)

        Raises:
            SourceUnavailableError: No transport produced data
        """
        if self.cache is not None:
            cached = self.cache.get(code)
            if cached is not None:
                return cached

        attempts = 0
        last_error: Optional[str] = None

        for transport in self.transports:
            for suffix in self.policy.suffixes:
                ticker = f"{code}{suffix}"
                for attempt in range(1, self.policy.max_attempts + 1):
                    attempts += 1
                    self.logger.debug(
                        "Fetching price history",
                        ticker=ticker,
                        transport=transport.name,
                        attempt=attempt,
                        max_attempts=self.policy.max_attempts,
                    )
                    try:
                        series = await transport.fetch(ticker)
                    except Exception as e:
                        last_error = str(e)
                        self.logger.warning(
                            "Price fetch attempt failed",
                            ticker=ticker,
                            transport=transport.name,
                            attempt=attempt,
                            error=last_error,
                        )
                        if attempt < self.policy.max_attempts:
                            await self._sleep(self.policy.backoff_seconds)
                        continue

                    if series is None or len(series) == 0:
                        self.logger.debug(
                            "No data for ticker",
                            ticker=ticker,
                            transport=transport.name,
                        )
                        break

                    self.logger.info(
                        "Price history fetched",
                        code=code,
                        ticker=ticker,
                        transport=transport.name,
                        points=len(series),
                    )
                    if self.cache is not None:
                        self.cache.set(code, series)
                    return series

        self.logger.warning(
            "Price source unavailable", code=code, attempts=attempts, error=last_error
        )
        raise SourceUnavailableError(code, attempts=attempts, last_error=last_error)
