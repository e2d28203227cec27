"""Data models for the analysis engine."""

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ComputationError

# Fibonacci moving-average windows and their informal meaning.
MA_PERIODS = (5, 13, 21, 34, 55, 144)
MA_MEANINGS = {
    5: "情緒",  # sentiment
    13: "方向",  # direction
    21: "態度",  # attitude
    34: "趨勢",  # trend
    55: "生命",  # life
    144: "生死",  # life or death
}

MAX_SCORE = 20


class KDTrend(str, Enum):
    """KD oscillator trend labels."""

    GOLDEN_CROSS = "黃金交叉 (看漲)"
    DEATH_CROSS = "死亡交叉 (看跌)"
    OVERBOUGHT = "超買區 (可能回檔)"
    OVERSOLD = "超賣區 (可能反彈)"
    NEUTRAL = "中性整理"


class MarketBias(str, Enum):
    """Market phase labels produced by the strategy classifier."""

    PRIMARY_UPLEG = "主升段 (強多)"
    SHORT_TERM_BULL = "短多啟動"
    BULL_PULLBACK = "多頭回檔"
    BEAR = "空頭 (小心)"


class PriceType(str, Enum):
    """How the suggested entry price should be read."""

    SUPPORT_BUY = "支撐(買)"
    DEFENSIVE_BUY = "防守(買)"
    SHORT_SUPPORT = "短撐(險)"
    STAND_ASIDE = "觀望"


class RiskLevel(str, Enum):
    """Qualitative risk levels."""

    MEDIUM_LOW = "中低"
    MEDIUM = "中"
    MEDIUM_HIGH = "中高"
    HIGH = "高"


def _plain(value: Any) -> Any:
    """Convert enums nested in containers to their labels."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


@dataclass
class PriceSeries:
    """Parallel daily OHLCV sequences, ascending by timestamp (epoch seconds)."""

    timestamps: List[int]
    opens: List[Optional[float]]
    highs: List[Optional[float]]
    lows: List[Optional[float]]
    closes: List[Optional[float]]
    volumes: List[Optional[float]]

    def __post_init__(self):
        lengths = {
            "timestamps": len(self.timestamps),
            "opens": len(self.opens),
            "highs": len(self.highs),
            "lows": len(self.lows),
            "closes": len(self.closes),
            "volumes": len(self.volumes),
        }
        if len(set(lengths.values())) > 1:
            raise ComputationError(
                "Price series sequences have mismatched lengths",
                details={"lengths": lengths},
            )

    def __len__(self) -> int:
        return len(self.timestamps)

    def valid_points(self) -> "PriceSeries":
        """Drop, in lock-step, every point whose close, high or low is missing."""
        keep = [
            i
            for i in range(len(self))
            if not (
                _is_missing(self.closes[i])
                or _is_missing(self.highs[i])
                or _is_missing(self.lows[i])
            )
        ]
        return PriceSeries(
            timestamps=[self.timestamps[i] for i in keep],
            opens=[self.opens[i] for i in keep],
            highs=[self.highs[i] for i in keep],
            lows=[self.lows[i] for i in keep],
            closes=[self.closes[i] for i in keep],
            volumes=[self.volumes[i] for i in keep],
        )


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicator values at one index of a series."""

    price: float
    ma5: float
    ma13: float
    ma21: float
    ma34: float
    ma55: float
    ma144: float
    k: float
    d: float
    prev_k: float
    prev_d: float

    def moving_averages(self) -> Dict[str, float]:
        return {
            "ma5": self.ma5,
            "ma13": self.ma13,
            "ma21": self.ma21,
            "ma34": self.ma34,
            "ma55": self.ma55,
            "ma144": self.ma144,
        }


@dataclass
class IndicatorSeries:
    """Full-length moving averages and KD sequences for one price series."""

    closes: List[float]
    ma: Dict[int, List[Optional[float]]]
    k: List[float]
    d: List[float]
    rsv: List[float]

    def snapshot_at(self, index: int) -> Optional[IndicatorSnapshot]:
        """
        Build the snapshot at ``index`` from already computed values.

        Returns None when the previous KD pair does not exist or any moving
        average is still undefined at that index.
        """
        if index < 1 or index >= len(self.closes):
            return None

        averages = [self.ma[period][index] for period in MA_PERIODS]
        if any(value is None for value in averages):
            return None

        return IndicatorSnapshot(
            self.closes[index],
            *averages,
            k=self.k[index],
            d=self.d[index],
            prev_k=self.k[index - 1],
            prev_d=self.d[index - 1],
        )


@dataclass(frozen=True)
class StrategyResult:
    """Classifier output: market phase, suggestion and entry/exit levels."""

    bias: MarketBias
    suggestion: str
    entry_price: float  # 0 means no entry
    exit_price: float  # 0 means no target
    price_type: PriceType
    kd_trend: KDTrend
    is_bull_market: bool

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class ScoreResult:
    """Composite score with its rating and justification tags."""

    score: int
    confidence_pct: int
    stars: str
    rating: str
    risk_level: RiskLevel
    reasons: List[str] = field(default_factory=list)
    max_score: int = MAX_SCORE

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class BacktestResult:
    """Forward win rates of historical high-score days."""

    signal_count: int
    win_rate_5_pct: float
    win_rate_10_pct: float
    avg_profit_10_pct: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ChartData:
    """Trailing slice of closes, moving averages and KD for charting."""

    dates: List[str]
    prices: List[float]
    ma: Dict[str, List[Optional[float]]]
    k_values: List[float]
    d_values: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AnalysisRecord:
    """Complete analysis of one stock."""

    code: str
    name: str
    date: str
    price: float
    open: Optional[float]
    high: float
    low: float
    close: float
    volume: Optional[float]
    snapshot: IndicatorSnapshot
    strategy: StrategyResult
    score: ScoreResult
    backtest: Optional[BacktestResult]
    chart: ChartData

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "date": self.date,
            "price": self.price,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "ma": self.snapshot.moving_averages(),
            "kd": {"k": self.snapshot.k, "d": self.snapshot.d},
            "prev_kd": {"k": self.snapshot.prev_k, "d": self.snapshot.prev_d},
            "strategy": self.strategy.to_dict(),
            "score": self.score.to_dict(),
            "backtest": self.backtest.to_dict() if self.backtest else None,
            "chart": self.chart.to_dict(),
        }
