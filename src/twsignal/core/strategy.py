"""Market regime classification and entry/exit suggestions."""

from typing import Sequence

from .models import IndicatorSnapshot, KDTrend, MarketBias, PriceType, StrategyResult

RECENT_HIGH_DAYS = 60
OVERBOUGHT_K = 80
OVERSOLD_K = 20
PRIMARY_UPLEG_TARGET = 1.10

SUGGEST_PRIMARY_UPLEG = "主升段預備鐘聲響！抱緊處理 🍯"
SUGGEST_SHORT_TERM_BULL = "短多活蹦亂跳，拉回偏買"
SUGGEST_BULL_PULLBACK = "守 34 保波段，守 55 保趨勢"
SUGGEST_BEAR = "故事變了，反彈偏賣，保守操作"
SUGGEST_BEAR_REBOUND = "空頭反彈，搶短手腳要快"
SUGGEST_BEAR_NO_ENTRY = "空頭排列嚴重，上方壓力重重，不建議進場"
SUGGEST_NO_ROOM = "空間不足，建議觀望"


def classify_kd_trend(k: float, d: float, prev_k: float, prev_d: float) -> KDTrend:
    """Label the KD state; crossovers take precedence over extremes."""
    if k > d and prev_k <= prev_d:
        return KDTrend.GOLDEN_CROSS
    if k < d and prev_k >= prev_d:
        return KDTrend.DEATH_CROSS
    if k > OVERBOUGHT_K:
        return KDTrend.OVERBOUGHT
    if k < OVERSOLD_K:
        return KDTrend.OVERSOLD
    return KDTrend.NEUTRAL


def recent_high(highs: Sequence[float], days: int = RECENT_HIGH_DAYS) -> float:
    """Highest high over the trailing ``days`` points."""
    return max(highs[-days:])


def analyze_strategy(
    snapshot: IndicatorSnapshot,
    highs: Sequence[float],
    recent_high_days: int = RECENT_HIGH_DAYS,
) -> StrategyResult:
    """
    Classify the market phase and derive entry and exit levels.

    The 144-day average splits bull from bear. In a bull market the position of
    the price against MA55, MA13 and MA21 picks the sub-phase; in a bear market
    a close above MA5 marks a tradable rebound. A final pass rejects setups
    whose exit does not sit above the entry.

    Args:
        snapshot: Indicator values at the evaluated point
        highs: High prices up to and including the evaluated point
        recent_high_days: Lookback for the recent high

    Returns:
        StrategyResult for the snapshot
    """
    price = snapshot.price
    kd_trend = classify_kd_trend(
        snapshot.k, snapshot.d, snapshot.prev_k, snapshot.prev_d
    )
    is_bull_market = price > snapshot.ma144
    high = recent_high(highs, recent_high_days)

    if is_bull_market:
        if price > snapshot.ma55:
            bias = MarketBias.PRIMARY_UPLEG
            suggestion = SUGGEST_PRIMARY_UPLEG
            entry_price = snapshot.ma34
            price_type = PriceType.SUPPORT_BUY
            exit_price = max(high, price * PRIMARY_UPLEG_TARGET)
        elif price > snapshot.ma13 and price > snapshot.ma21:
            bias = MarketBias.SHORT_TERM_BULL
            suggestion = SUGGEST_SHORT_TERM_BULL
            entry_price = snapshot.ma13
            price_type = PriceType.SUPPORT_BUY
            exit_price = high
        else:
            bias = MarketBias.BULL_PULLBACK
            suggestion = SUGGEST_BULL_PULLBACK
            entry_price = snapshot.ma55
            price_type = PriceType.DEFENSIVE_BUY
            exit_price = snapshot.ma21
    elif price > snapshot.ma5:
        bias = MarketBias.BEAR
        suggestion = SUGGEST_BEAR_REBOUND
        entry_price = snapshot.ma5
        price_type = PriceType.SHORT_SUPPORT
        exit_price = snapshot.ma34
    else:
        bias = MarketBias.BEAR
        suggestion = SUGGEST_BEAR
        entry_price = 0.0
        price_type = PriceType.STAND_ASIDE
        exit_price = snapshot.ma144

    if entry_price > 0 and exit_price > 0 and exit_price <= entry_price:
        if not is_bull_market:
            suggestion = SUGGEST_BEAR_NO_ENTRY
            entry_price = 0.0
            price_type = PriceType.STAND_ASIDE
        else:
            exit_price = max(exit_price, high)
            if exit_price <= entry_price:
                suggestion = SUGGEST_NO_ROOM
                entry_price = 0.0
                price_type = PriceType.STAND_ASIDE

    return StrategyResult(
        bias=bias,
        suggestion=suggestion,
        entry_price=entry_price,
        exit_price=exit_price,
        price_type=price_type,
        kd_trend=kd_trend,
        is_bull_market=is_bull_market,
    )
