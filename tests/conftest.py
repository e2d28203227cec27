"""Shared test configuration and fixtures."""

import sys
from typing import Dict, List, Optional, Union
from unittest.mock import AsyncMock

import pytest

sys.path.append("src")

from twsignal.core.models import IndicatorSnapshot, PriceSeries
from twsignal.services.market_data import PriceTransport

# 2023-11-15 in Taipei
START_TIMESTAMP = 1_700_000_000
DAY_SECONDS = 86_400


def make_series(
    closes: List[Optional[float]],
    highs: Optional[List[Optional[float]]] = None,
    lows: Optional[List[Optional[float]]] = None,
) -> PriceSeries:
    """Daily series with the given closes; highs/lows default to the closes."""
    return PriceSeries(
        timestamps=[START_TIMESTAMP + i * DAY_SECONDS for i in range(len(closes))],
        opens=list(closes),
        highs=list(highs) if highs is not None else list(closes),
        lows=list(lows) if lows is not None else list(closes),
        closes=list(closes),
        volumes=[1000.0] * len(closes),
    )


def make_uptrend(points: int = 200) -> PriceSeries:
    """Closes rising by 0.5 a day from 100 with a one point high/low band."""
    closes = [100 + i * 0.5 for i in range(points)]
    return make_series(
        closes,
        highs=[c + 1 for c in closes],
        lows=[c - 1 for c in closes],
    )


def make_snapshot(**overrides) -> IndicatorSnapshot:
    """Neutral bull snapshot; override any field."""
    values = dict(
        price=100.0,
        ma5=100.0,
        ma13=100.0,
        ma21=100.0,
        ma34=100.0,
        ma55=100.0,
        ma144=90.0,
        k=50.0,
        d=50.0,
        prev_k=50.0,
        prev_d=50.0,
    )
    values.update(overrides)
    return IndicatorSnapshot(**values)


class FakeTransport(PriceTransport):
    """Transport answering from a ticker table; exceptions in the table are raised."""

    name = "fake"

    def __init__(self, table: Dict[str, Union[PriceSeries, Exception, None]]):
        self.table = table
        self.calls: List[str] = []

    async def fetch(self, ticker: str) -> Optional[PriceSeries]:
        self.calls.append(ticker)
        value = self.table.get(ticker)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def flat_series():
    """144 points at a constant price of 100."""
    return make_series([100.0] * 144)


@pytest.fixture
def uptrend_series():
    return make_uptrend()


@pytest.fixture
def short_series():
    """Fewer points than the longest moving average."""
    return make_series([100.0 + i for i in range(100)])


@pytest.fixture
def no_sleep():
    return AsyncMock()
