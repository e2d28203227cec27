"""Tests for single-series analysis."""

import sys

import pytest

sys.path.append("src")

from conftest import make_series, make_uptrend
from twsignal.core.engine import AnalysisConfig, analyze_series
from twsignal.core.exceptions import InsufficientDataError
from twsignal.core.models import KDTrend, MarketBias, RiskLevel


class TestAnalyzeSeries:
    """Test the composed analysis record."""

    def test_flat_series(self, flat_series):
        record = analyze_series("1101", flat_series, "台泥")

        snapshot = record.snapshot
        for value in snapshot.moving_averages().values():
            assert value == 100.0
        assert snapshot.k == snapshot.d == 50.0
        assert snapshot.prev_k == snapshot.prev_d == 50.0

        assert record.strategy.is_bull_market is False
        assert record.strategy.bias is MarketBias.BEAR
        assert record.strategy.kd_trend is KDTrend.NEUTRAL
        assert record.score.score == 0
        assert record.score.risk_level is RiskLevel.HIGH
        assert record.backtest is None

    def test_uptrend_series(self, uptrend_series):
        record = analyze_series("2330", uptrend_series, "台積電")

        assert record.price == 199.5
        assert record.close == 199.5
        assert record.high == 200.5
        assert record.low == 198.5
        assert record.volume == 1000.0

        assert record.strategy.bias is MarketBias.PRIMARY_UPLEG
        assert record.strategy.entry_price == pytest.approx(191.25)
        assert record.strategy.exit_price == pytest.approx(219.45)
        assert record.strategy.kd_trend is KDTrend.OVERBOUGHT

        # alignment 5 + position 3 + trend 4 + entry 1 + return 14.7% 1
        assert record.score.score == 14
        assert record.score.rating == "推薦"
        assert record.score.risk_level is RiskLevel.MEDIUM_HIGH
        assert record.backtest.signal_count == 47

    def test_too_short(self, short_series):
        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_series("2330", short_series, "台積電")

        assert exc_info.value.available == 100
        assert exc_info.value.required == 144

    def test_empty_series(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_series("2330", make_series([]), "台積電")

        assert exc_info.value.available == 0

    def test_missing_points_dropped_before_length_check(self):
        closes = [100.0] * 150
        for index in range(0, 150, 15):
            closes[index] = None

        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_series("2330", make_series(closes), "台積電")

        assert exc_info.value.available == 140

    def test_missing_points_dropped_in_lock_step(self):
        series = make_uptrend(160)
        series.highs[10] = float("nan")

        record = analyze_series("2330", series, "台積電")

        assert len(record.chart.prices) == 30
        assert record.price == series.closes[-1]

    def test_chart_slice(self, uptrend_series):
        record = analyze_series("2330", uptrend_series, "台積電")
        chart = record.chart

        assert len(chart.dates) == 30
        assert chart.prices == uptrend_series.closes[-30:]
        assert set(chart.ma) == {"ma5", "ma13", "ma21", "ma34", "ma55", "ma144"}
        assert all(len(values) == 30 for values in chart.ma.values())
        assert len(chart.k_values) == len(chart.d_values) == 30
        assert chart.dates[0].count("/") == 1

    def test_dates_in_taipei_time(self):
        series = make_series([100.0] * 144)
        # 2024-01-01 17:00 UTC is already 2 January in Taipei
        series.timestamps[-1] = 1_704_128_400

        record = analyze_series("2330", series, "台積電")

        assert record.date == "2024-01-02"
        assert record.chart.dates[-1] == "1/2"

    def test_config_windows(self, uptrend_series):
        config = AnalysisConfig(chart_days=10, backtest_signal_threshold=21)

        record = analyze_series("2330", uptrend_series, "台積電", config)

        assert len(record.chart.prices) == 10
        assert record.backtest is None

    def test_min_history_config(self, uptrend_series):
        config = AnalysisConfig(min_history_points=250)

        with pytest.raises(InsufficientDataError) as exc_info:
            analyze_series("2330", uptrend_series, "台積電", config)

        assert exc_info.value.required == 250

    def test_to_dict(self, uptrend_series):
        data = analyze_series("2330", uptrend_series, "台積電").to_dict()

        assert set(data) == {
            "code",
            "name",
            "date",
            "price",
            "open",
            "high",
            "low",
            "close",
            "volume",
            "ma",
            "kd",
            "prev_kd",
            "strategy",
            "score",
            "backtest",
            "chart",
        }
        assert data["name"] == "台積電"
        assert data["strategy"]["bias"] == "主升段 (強多)"
        assert data["score"]["risk_level"] == "中高"
        assert data["score"]["max_score"] == 20
        assert data["backtest"]["signal_count"] == 47
        assert set(data["kd"]) == {"k", "d"}
