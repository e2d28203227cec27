"""Transport strategies for fetching daily price history from Yahoo Finance."""

import asyncio
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import aiohttp
import pandas as pd
import yfinance as yf

from ...config.logging import get_logger
from ...core.models import PriceSeries

logger = get_logger(__name__)

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{ticker}"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value


class PriceTransport(ABC):
    """One way of reaching the price source."""

    name: str = "transport"

    @abstractmethod
    async def fetch(self, ticker: str) -> Optional[PriceSeries]:
        """
        Fetch daily history for a Yahoo ticker such as ``2330.TW``.

        Returns:
            PriceSeries, or None when the source has no data for the ticker

        Raises:
            Exception: Network or protocol failures, retried by the caller
        """


class YFinanceTransport(PriceTransport):
    """Fetch through the yfinance library."""

    name = "yfinance"

    def __init__(self, period: str = "1y"):
        self.period = period
        self.logger = logger.bind(component="yfinance_transport")

    async def fetch(self, ticker: str) -> Optional[PriceSeries]:
        hist = yf.Ticker(ticker).history(period=self.period, interval="1d")

        if hist.empty:
            self.logger.debug("No history returned", ticker=ticker)
            return None

        return self.frame_to_series(hist)

    @staticmethod
    def frame_to_series(hist: pd.DataFrame) -> PriceSeries:
        """Convert a yfinance history frame into a PriceSeries."""
        return PriceSeries(
            timestamps=[int(ts.timestamp()) for ts in hist.index],
            opens=[_optional_float(v) for v in hist["Open"]],
            highs=[_optional_float(v) for v in hist["High"]],
            lows=[_optional_float(v) for v in hist["Low"]],
            closes=[_optional_float(v) for v in hist["Close"]],
            volumes=[_optional_float(v) for v in hist["Volume"]],
        )


class YahooChartTransport(PriceTransport):
    """Fetch the v8 chart JSON directly, optionally through URL-prefix proxies."""

    name = "chart"

    def __init__(
        self,
        period: str = "1y",
        timeout_seconds: float = 10.0,
        proxy_prefixes: Sequence[str] = ("",),
    ):
        self.period = period
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.proxy_prefixes = list(proxy_prefixes) or [""]
        self.logger = logger.bind(component="yahoo_chart_transport")

    def build_urls(self, ticker: str) -> List[str]:
        """Target URL wrapped by each configured prefix, in order."""
        base_url = (
            CHART_URL.format(ticker=ticker) + f"?interval=1d&range={self.period}"
        )
        return [
            f"{prefix}{quote(base_url, safe='')}" if prefix else base_url
            for prefix in self.proxy_prefixes
        ]

    async def fetch(self, ticker: str) -> Optional[PriceSeries]:
        last_error: Optional[Exception] = None

        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        ) as session:
            for url in self.build_urls(ticker):
                try:
                    async with session.get(url) as response:
                        response.raise_for_status()
                        payload = await response.json(content_type=None)
                    return self.parse_chart(payload)
                except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                    last_error = e
                    self.logger.warning(
                        "Chart request failed", ticker=ticker, url=url, error=str(e)
                    )

        raise last_error

    @staticmethod
    def parse_chart(payload: Dict[str, Any]) -> Optional[PriceSeries]:
        """Extract the quote arrays from a chart response."""
        results = (payload.get("chart") or {}).get("result") or []
        if not results:
            return None

        result = results[0]
        quote_data = (result.get("indicators", {}).get("quote") or [{}])[0]
        closes = quote_data.get("close") or []
        if not closes:
            return None

        return PriceSeries(
            timestamps=list(result.get("timestamp") or []),
            opens=list(quote_data.get("open") or []),
            highs=list(quote_data.get("high") or []),
            lows=list(quote_data.get("low") or []),
            closes=list(closes),
            volumes=list(quote_data.get("volume") or [None] * len(closes)),
        )


def build_transports(
    names: Sequence[str],
    period: str = "1y",
    timeout_seconds: float = 10.0,
    proxy_prefixes: Sequence[str] = ("",),
) -> List[PriceTransport]:
    """Instantiate transports in the configured order."""
    factories = {
        YFinanceTransport.name: lambda: YFinanceTransport(period=period),
        YahooChartTransport.name: lambda: YahooChartTransport(
            period=period,
            timeout_seconds=timeout_seconds,
            proxy_prefixes=proxy_prefixes,
        ),
    }
    return [factories[name]() for name in names]
