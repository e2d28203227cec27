"""Moving averages and the KD stochastic oscillator."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import pandas as pd

from .exceptions import ComputationError
from .models import MA_PERIODS, IndicatorSeries

KD_PERIOD = 9
NEUTRAL_RSV = 50.0


@dataclass
class KDResult:
    """K, D and raw stochastic value sequences."""

    k: List[float]
    d: List[float]
    rsv: List[float]


def sma(series: Sequence[float], period: int) -> List[Optional[float]]:
    """
    Simple moving average.

    Args:
        series: Price values in ascending time order
        period: Window length

    Returns:
        List the same length as ``series``; the first ``period - 1`` entries are
        None, entry ``i`` is the mean of ``series[i - period + 1 : i + 1]``
    """
    if period < 1:
        raise ComputationError(f"Moving average period must be positive, got {period}")

    means = pd.Series(series, dtype="float64").rolling(window=period).mean()
    return [None if pd.isna(value) else float(value) for value in means]


def kd(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = KD_PERIOD,
) -> KDResult:
    """
    KD stochastic oscillator with 1/3 smoothing for both K and D.

    RSV is fixed at 50 until a full window exists and whenever the window's
    high equals its low. K and D start at 50.
    """
    if not len(highs) == len(lows) == len(closes):
        raise ComputationError(
            "KD inputs have mismatched lengths",
            details={"highs": len(highs), "lows": len(lows), "closes": len(closes)},
        )
    if len(closes) == 0:
        return KDResult(k=[], d=[], rsv=[])

    period_high = pd.Series(highs, dtype="float64").rolling(window=period).max()
    period_low = pd.Series(lows, dtype="float64").rolling(window=period).min()
    span = period_high - period_low

    rsv = []
    for close, low, width in zip(closes, period_low, span):
        if pd.isna(width) or width == 0:
            rsv.append(NEUTRAL_RSV)
        else:
            rsv.append(100 * (close - low) / width)

    k = [NEUTRAL_RSV]
    d = [NEUTRAL_RSV]
    for value in rsv[1:]:
        # Same as 2/3 * prev + 1/3 * new, but exact when the input is constant
        k.append(k[-1] + (value - k[-1]) / 3)
        d.append(d[-1] + (k[-1] - d[-1]) / 3)

    return KDResult(k=k, d=d, rsv=rsv)


def compute_indicators(
    closes: Sequence[float], highs: Sequence[float], lows: Sequence[float]
) -> IndicatorSeries:
    """Compute every moving average and the KD triple once for a whole series."""
    oscillator = kd(highs, lows, closes)
    return IndicatorSeries(
        closes=list(closes),
        ma={period: sma(closes, period) for period in MA_PERIODS},
        k=oscillator.k,
        d=oscillator.d,
        rsv=oscillator.rsv,
    )
