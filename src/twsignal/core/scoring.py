"""Composite 0-20 signal score.

Five additive rubrics, each capped, evaluated in a fixed order:

    oscillator      K < 20 -> 3, K < 30 -> 2, golden cross -> 2
    MA alignment    one point per ordered pair MA5>MA13>MA21>MA34>MA55 and price>MA144
    price position  one point per MA5/MA13/MA21 the price is above
    trend strength  primary up-leg 4, short-term bull 3, bull pullback 2, other bull 1
    entry           entry price 1, plus 2 (>15%) or 1 (>8%) for the return to exit

The same scorer serves single-stock analysis, universe scans and backtests.
"""

from typing import List, Tuple

from .models import (
    MAX_SCORE,
    IndicatorSnapshot,
    KDTrend,
    MarketBias,
    RiskLevel,
    ScoreResult,
    StrategyResult,
)

# (minimum score, stars, rating), highest first
RATING_LEVELS: Tuple[Tuple[int, str, str], ...] = (
    (15, "⭐⭐⭐⭐⭐", "強烈推薦"),
    (12, "⭐⭐⭐⭐", "推薦"),
    (9, "⭐⭐⭐", "可考慮"),
    (6, "⭐⭐", "觀察"),
    (3, "⭐", "謹慎"),
)
NO_STARS = ""
NOT_RECOMMENDED = "不推薦"

TREND_POINTS = {
    MarketBias.PRIMARY_UPLEG: 4,
    MarketBias.SHORT_TERM_BULL: 3,
    MarketBias.BULL_PULLBACK: 2,
}

OVERSOLD_K = 20
LOW_K = 30
OVERBOUGHT_K = 80
STRONG_RETURN_PCT = 15
MODERATE_RETURN_PCT = 8
LOW_RISK_SCORE = 12


def _oscillator_points(snapshot: IndicatorSnapshot, strategy: StrategyResult):
    points = 0
    reasons = []
    if snapshot.k < OVERSOLD_K:
        points += 3
        reasons.append(f"🔥 KD超賣 (K={snapshot.k:.1f})")
    elif snapshot.k < LOW_K:
        points += 2
        reasons.append(f"📉 KD低檔 (K={snapshot.k:.1f})")

    if strategy.kd_trend is KDTrend.GOLDEN_CROSS:
        points += 2
        reasons.append("✨ KD黃金交叉")
    return points, reasons


def _alignment_points(snapshot: IndicatorSnapshot):
    checks = [
        snapshot.ma5 > snapshot.ma13,
        snapshot.ma13 > snapshot.ma21,
        snapshot.ma21 > snapshot.ma34,
        snapshot.ma34 > snapshot.ma55,
        snapshot.price > snapshot.ma144,
    ]
    points = sum(checks)
    reasons = [f"📊 均線多頭排列 {points}/5"] if points else []
    return points, reasons


def _position_points(snapshot: IndicatorSnapshot):
    checks = [
        snapshot.price > snapshot.ma5,
        snapshot.price > snapshot.ma13,
        snapshot.price > snapshot.ma21,
    ]
    points = sum(checks)
    reasons = [f"💪 站上短期均線 {points}/3"] if points else []
    return points, reasons


def _trend_points(strategy: StrategyResult):
    if strategy.bias in TREND_POINTS:
        return TREND_POINTS[strategy.bias], [f"🚀 趨勢 {strategy.bias.value}"]
    if strategy.is_bull_market:
        return 1, ["🐂 多頭格局"]
    return 0, []


def _entry_points(strategy: StrategyResult):
    if strategy.entry_price <= 0:
        return 0, []

    points = 1
    reasons = ["🎯 有明確進場點"]
    if strategy.exit_price > strategy.entry_price:
        return_pct = (
            (strategy.exit_price - strategy.entry_price) / strategy.entry_price * 100
        )
        if return_pct > STRONG_RETURN_PCT:
            points += 2
            reasons.append(f"💰 潛在報酬 {return_pct:.1f}%")
        elif return_pct > MODERATE_RETURN_PCT:
            points += 1
            reasons.append(f"💵 潛在報酬 {return_pct:.1f}%")
    return points, reasons


def rate(score: int) -> Tuple[str, str]:
    """Stars and qualitative rating for a score."""
    for minimum, stars, rating in RATING_LEVELS:
        if score >= minimum:
            return stars, rating
    return NO_STARS, NOT_RECOMMENDED


def assess_risk(
    snapshot: IndicatorSnapshot, strategy: StrategyResult, score: int
) -> RiskLevel:
    """Bear markets are high risk; otherwise overbought beats a strong score."""
    if not strategy.is_bull_market:
        return RiskLevel.HIGH
    if snapshot.k > OVERBOUGHT_K:
        return RiskLevel.MEDIUM_HIGH
    if score >= LOW_RISK_SCORE:
        return RiskLevel.MEDIUM_LOW
    return RiskLevel.MEDIUM


def score_signal(snapshot: IndicatorSnapshot, strategy: StrategyResult) -> ScoreResult:
    """
    Score one snapshot and its strategy.

    Args:
        snapshot: Indicator values at the evaluated point
        strategy: Classifier output for the same snapshot

    Returns:
        ScoreResult with reasons in rubric order
    """
    score = 0
    reasons: List[str] = []
    for points, tags in (
        _oscillator_points(snapshot, strategy),
        _alignment_points(snapshot),
        _position_points(snapshot),
        _trend_points(strategy),
        _entry_points(strategy),
    ):
        score += points
        reasons.extend(tags)

    score = min(score, MAX_SCORE)
    stars, rating = rate(score)

    return ScoreResult(
        score=score,
        confidence_pct=min(100, round(score / MAX_SCORE * 100)),
        stars=stars,
        rating=rating,
        risk_level=assess_risk(snapshot, strategy, score),
        reasons=reasons,
    )
