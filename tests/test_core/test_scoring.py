"""Tests for the composite signal scorer."""

import sys

import pytest

sys.path.append("src")

from conftest import make_snapshot
from twsignal.core.models import KDTrend, MarketBias, PriceType, RiskLevel
from twsignal.core.models import StrategyResult
from twsignal.core.scoring import MAX_SCORE, assess_risk, rate, score_signal
from twsignal.core.strategy import analyze_strategy


def make_strategy(**overrides) -> StrategyResult:
    values = dict(
        bias=MarketBias.BEAR,
        suggestion="",
        entry_price=0.0,
        exit_price=0.0,
        price_type=PriceType.STAND_ASIDE,
        kd_trend=KDTrend.NEUTRAL,
        is_bull_market=False,
    )
    values.update(overrides)
    return StrategyResult(**values)


class TestScoreSignal:
    """Test rubric points, reasons and derived fields."""

    def test_maximum_score(self):
        snapshot = make_snapshot(
            price=200,
            ma5=190,
            ma13=180,
            ma21=170,
            ma34=160,
            ma55=150,
            ma144=100,
            k=15,
            d=10,
            prev_k=5,
            prev_d=8,
        )
        strategy = analyze_strategy(snapshot, [250.0])

        result = score_signal(snapshot, strategy)

        # 3 + 2 + 5 + 3 + 4 + 1 + 2
        assert result.score == MAX_SCORE
        assert result.max_score == 20
        assert result.confidence_pct == 100
        assert result.stars == "⭐⭐⭐⭐⭐"
        assert result.rating == "強烈推薦"
        assert result.risk_level is RiskLevel.MEDIUM_LOW
        assert result.reasons == [
            "🔥 KD超賣 (K=15.0)",
            "✨ KD黃金交叉",
            "📊 均線多頭排列 5/5",
            "💪 站上短期均線 3/3",
            "🚀 趨勢 主升段 (強多)",
            "🎯 有明確進場點",
            "💰 潛在報酬 56.2%",
        ]

    def test_flat_snapshot_scores_zero(self):
        snapshot = make_snapshot(
            price=100, ma5=100, ma13=100, ma21=100, ma34=100, ma55=100, ma144=100
        )
        strategy = analyze_strategy(snapshot, [100.0])

        result = score_signal(snapshot, strategy)

        assert result.score == 0
        assert result.confidence_pct == 0
        assert result.stars == ""
        assert result.rating == "不推薦"
        assert result.risk_level is RiskLevel.HIGH
        assert result.reasons == []

    def test_low_k_points(self):
        snapshot = make_snapshot(
            price=100, ma5=100, ma13=100, ma21=100, ma34=100, ma55=100, ma144=100, k=25
        )

        result = score_signal(snapshot, make_strategy())

        assert result.score == 2
        assert result.reasons == ["📉 KD低檔 (K=25.0)"]

    def test_other_bull_bias_gets_one_point(self):
        snapshot = make_snapshot(
            price=100, ma5=100, ma13=100, ma21=100, ma34=100, ma55=100, ma144=100
        )
        strategy = make_strategy(bias=MarketBias.BEAR, is_bull_market=True)

        result = score_signal(snapshot, strategy)

        assert result.score == 1
        assert result.reasons == ["🐂 多頭格局"]

    @pytest.mark.parametrize(
        "exit_price,expected_points",
        [(130.0, 3), (110.0, 2), (105.0, 1), (90.0, 1)],
    )
    def test_entry_return_points(self, exit_price, expected_points):
        snapshot = make_snapshot(
            price=100, ma5=100, ma13=100, ma21=100, ma34=100, ma55=100, ma144=100
        )
        strategy = make_strategy(entry_price=100.0, exit_price=exit_price)

        result = score_signal(snapshot, strategy)

        assert result.score == expected_points
        assert result.reasons[0] == "🎯 有明確進場點"

    def test_score_never_exceeds_maximum(self):
        snapshot = make_snapshot(
            price=1000,
            ma5=900,
            ma13=800,
            ma21=700,
            ma34=600,
            ma55=500,
            ma144=100,
            k=1,
            d=0.5,
            prev_k=0,
            prev_d=1,
        )
        strategy = analyze_strategy(snapshot, [5000.0])

        assert score_signal(snapshot, strategy).score <= MAX_SCORE

    def test_confidence_rounding(self):
        snapshot = make_snapshot(
            price=100, ma5=100, ma13=100, ma21=100, ma34=100, ma55=100, ma144=100, k=25
        )

        # 2 / 20
        assert score_signal(snapshot, make_strategy()).confidence_pct == 10


class TestRate:
    @pytest.mark.parametrize(
        "score,stars,rating",
        [
            (20, "⭐⭐⭐⭐⭐", "強烈推薦"),
            (15, "⭐⭐⭐⭐⭐", "強烈推薦"),
            (14, "⭐⭐⭐⭐", "推薦"),
            (12, "⭐⭐⭐⭐", "推薦"),
            (9, "⭐⭐⭐", "可考慮"),
            (6, "⭐⭐", "觀察"),
            (3, "⭐", "謹慎"),
            (2, "", "不推薦"),
        ],
    )
    def test_thresholds(self, score, stars, rating):
        assert rate(score) == (stars, rating)


class TestAssessRisk:
    def test_bear_is_high(self):
        snapshot = make_snapshot(k=90)
        assert assess_risk(snapshot, make_strategy(), 20) is RiskLevel.HIGH

    def test_overbought_bull(self):
        snapshot = make_snapshot(k=85)
        strategy = make_strategy(is_bull_market=True)
        assert assess_risk(snapshot, strategy, 15) is RiskLevel.MEDIUM_HIGH

    def test_strong_bull(self):
        strategy = make_strategy(is_bull_market=True)
        assert assess_risk(make_snapshot(), strategy, 12) is RiskLevel.MEDIUM_LOW

    def test_default_medium(self):
        strategy = make_strategy(is_bull_market=True)
        assert assess_risk(make_snapshot(), strategy, 11) is RiskLevel.MEDIUM
