"""Historical check of how high-score days performed afterwards."""

from typing import List, Optional, Sequence, Tuple

from .models import BacktestResult, IndicatorSeries
from .scoring import score_signal
from .strategy import RECENT_HIGH_DAYS, analyze_strategy

LOOKBACK_DAYS = 120
SHORT_HORIZON_DAYS = 5
HORIZON_DAYS = 10
SIGNAL_THRESHOLD = 12


def find_signals(
    indicators: IndicatorSeries,
    highs: Sequence[float],
    lookback_days: int = LOOKBACK_DAYS,
    horizon_days: int = HORIZON_DAYS,
    short_horizon_days: int = SHORT_HORIZON_DAYS,
    threshold: int = SIGNAL_THRESHOLD,
    recent_high_days: int = RECENT_HIGH_DAYS,
) -> List[Tuple[float, float, float]]:
    """
    Replay the classifier and scorer over the trailing window.

    Only indices with a full ``horizon_days`` of future closes are evaluated,
    and the recent-high lookback sees highs up to the evaluated index only.
    Indices whose moving averages are still undefined are skipped.

    Returns:
        (entry close, close after short horizon, close after horizon) per signal
    """
    closes = indicators.closes
    total = len(closes)
    start = max(1, total - lookback_days)
    end = total - horizon_days

    signals = []
    for index in range(start, end):
        snapshot = indicators.snapshot_at(index)
        if snapshot is None:
            continue

        strategy = analyze_strategy(snapshot, highs[: index + 1], recent_high_days)
        if score_signal(snapshot, strategy).score >= threshold:
            signals.append(
                (
                    closes[index],
                    closes[index + short_horizon_days],
                    closes[index + horizon_days],
                )
            )
    return signals


def run_backtest(
    indicators: IndicatorSeries,
    highs: Sequence[float],
    lookback_days: int = LOOKBACK_DAYS,
    horizon_days: int = HORIZON_DAYS,
    threshold: int = SIGNAL_THRESHOLD,
    recent_high_days: int = RECENT_HIGH_DAYS,
) -> Optional[BacktestResult]:
    """
    Win rates 5 and 10 days after each signal, and the average 10-day return.

    Returns:
        BacktestResult, or None when no day in the window reached the threshold
    """
    signals = find_signals(
        indicators,
        highs,
        lookback_days=lookback_days,
        horizon_days=horizon_days,
        threshold=threshold,
        recent_high_days=recent_high_days,
    )
    if not signals:
        return None

    count = len(signals)
    wins_short = sum(1 for entry, short, _ in signals if short > entry)
    wins_long = sum(1 for entry, _, long in signals if long > entry)
    avg_profit = sum((long - entry) / entry for entry, _, long in signals) / count

    return BacktestResult(
        signal_count=count,
        win_rate_5_pct=wins_short / count * 100,
        win_rate_10_pct=wins_long / count * 100,
        avg_profit_10_pct=avg_profit * 100,
    )
