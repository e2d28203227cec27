"""Single-series analysis: indicators, strategy, score and backtest in one record."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config.logging import get_logger
from .backtest import run_backtest
from .exceptions import InsufficientDataError
from .indicators import compute_indicators
from .models import MA_PERIODS, AnalysisRecord, ChartData, PriceSeries
from .scoring import score_signal
from .strategy import analyze_strategy

logger = get_logger(__name__)

# Taiwan does not observe daylight saving time
TAIPEI = timezone(timedelta(hours=8), name="Asia/Taipei")


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunable windows and thresholds of the analysis pipeline."""

    min_history_points: int = 144
    chart_days: int = 30
    recent_high_days: int = 60
    backtest_lookback_days: int = 120
    backtest_horizon_days: int = 10
    backtest_signal_threshold: int = 12
    scan_min_score: int = 3
    request_delay_seconds: float = 1.0

    @classmethod
    def from_settings(cls, settings) -> "AnalysisConfig":
        return cls(
            min_history_points=settings.min_history_points,
            chart_days=settings.chart_days,
            recent_high_days=settings.recent_high_days,
            backtest_lookback_days=settings.backtest_lookback_days,
            backtest_horizon_days=settings.backtest_horizon_days,
            backtest_signal_threshold=settings.backtest_signal_threshold,
            scan_min_score=settings.scan_min_score,
            request_delay_seconds=settings.request_delay_seconds,
        )


def _trading_day(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=TAIPEI)


def analyze_series(
    code: str,
    series: PriceSeries,
    name: str,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisRecord:
    """
    Analyze one price series.

    Args:
        code: Stock code, e.g. "2330"
        series: Raw daily series; points missing close, high or low are dropped
        name: Display name
        config: Pipeline windows and thresholds

    Returns:
        AnalysisRecord for the latest trading day

    Raises:
        InsufficientDataError: Fewer valid points than the longest average needs
    """
    config = config or AnalysisConfig()
    valid = series.valid_points()
    required = max(config.min_history_points, max(MA_PERIODS))
    if len(valid) < required:
        raise InsufficientDataError(code, available=len(valid), required=required)

    closes = [float(value) for value in valid.closes]
    highs = [float(value) for value in valid.highs]
    lows = [float(value) for value in valid.lows]

    indicators = compute_indicators(closes, highs, lows)
    latest = len(closes) - 1
    snapshot = indicators.snapshot_at(latest)

    strategy = analyze_strategy(snapshot, highs, config.recent_high_days)
    score = score_signal(snapshot, strategy)
    backtest = run_backtest(
        indicators,
        highs,
        lookback_days=config.backtest_lookback_days,
        horizon_days=config.backtest_horizon_days,
        threshold=config.backtest_signal_threshold,
        recent_high_days=config.recent_high_days,
    )

    start = len(closes) - min(config.chart_days, len(closes))
    chart = ChartData(
        dates=[
            f"{day.month}/{day.day}"
            for day in map(_trading_day, valid.timestamps[start:])
        ],
        prices=closes[start:],
        ma={f"ma{period}": indicators.ma[period][start:] for period in MA_PERIODS},
        k_values=indicators.k[start:],
        d_values=indicators.d[start:],
    )

    logger.debug(
        "Series analyzed",
        code=code,
        points=len(closes),
        dropped=len(series) - len(valid),
        score=score.score,
        bias=strategy.bias.value,
        backtest_signals=backtest.signal_count if backtest else 0,
    )

    return AnalysisRecord(
        code=code,
        name=name,
        date=_trading_day(valid.timestamps[latest]).date().isoformat(),
        price=closes[latest],
        open=valid.opens[latest],
        high=highs[latest],
        low=lows[latest],
        close=closes[latest],
        volume=valid.volumes[latest],
        snapshot=snapshot,
        strategy=strategy,
        score=score,
        backtest=backtest,
        chart=chart,
    )
