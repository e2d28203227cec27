"""Analysis engine: indicators, strategy classifier, scorer and backtest."""

from .backtest import run_backtest
from .engine import AnalysisConfig, analyze_series
from .exceptions import (
    ComputationError,
    InsufficientDataError,
    SourceUnavailableError,
    TwSignalError,
    UnknownSectorError,
)
from .indicators import compute_indicators, kd, sma
from .models import (
    AnalysisRecord,
    BacktestResult,
    IndicatorSnapshot,
    KDTrend,
    MarketBias,
    PriceSeries,
    PriceType,
    RiskLevel,
    ScoreResult,
    StrategyResult,
)
from .scoring import score_signal
from .strategy import analyze_strategy, classify_kd_trend

__all__ = [
    "AnalysisConfig",
    "AnalysisRecord",
    "BacktestResult",
    "ComputationError",
    "IndicatorSnapshot",
    "InsufficientDataError",
    "KDTrend",
    "MarketBias",
    "PriceSeries",
    "PriceType",
    "RiskLevel",
    "ScoreResult",
    "SourceUnavailableError",
    "StrategyResult",
    "TwSignalError",
    "UnknownSectorError",
    "analyze_series",
    "analyze_strategy",
    "classify_kd_trend",
    "compute_indicators",
    "kd",
    "run_backtest",
    "score_signal",
    "sma",
]
