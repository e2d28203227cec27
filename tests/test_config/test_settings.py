"""Tests for application settings."""

import os
import sys
from unittest.mock import patch

import pytest
from pydantic import ValidationError

sys.path.append("src")

from twsignal.config.settings import Settings
from twsignal.core.engine import AnalysisConfig
from twsignal.services.market_data import RetryPolicy


class TestSettings:
    """Test defaults, environment overrides and validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.min_history_points == 144
        assert settings.backtest_signal_threshold == 12
        assert settings.fetch_transports == ["yfinance", "chart"]
        assert settings.cache_ttl_seconds == 300
        assert settings.environment == "development"

    def test_environment_override(self):
        env = {
            "TWSIGNAL_SCAN_MIN_SCORE": "9",
            "TWSIGNAL_FETCH_TRANSPORTS": '["chart"]',
            "TWSIGNAL_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=False):
            settings = Settings(_env_file=None)

        assert settings.scan_min_score == 9
        assert settings.fetch_transports == ["chart"]
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("fetch_transports", ["carrier-pigeon"]),
            ("fetch_transports", []),
            ("backtest_horizon_days", 3),
            ("chart_days", 0),
            ("request_delay_seconds", -1.0),
            ("endpoint_port", 70000),
            ("log_format", "xml"),
            ("environment", "staging"),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})

    def test_analysis_config_from_settings(self):
        settings = Settings(_env_file=None, chart_days=20, request_delay_seconds=0.5)

        config = AnalysisConfig.from_settings(settings)

        assert config.chart_days == 20
        assert config.request_delay_seconds == 0.5
        assert config.min_history_points == 144

    def test_retry_policy_from_settings(self):
        settings = Settings(
            _env_file=None, fetch_max_attempts=4, fetch_transports=["chart"]
        )

        policy = RetryPolicy.from_settings(settings)

        assert policy.max_attempts == 4
        assert policy.transports == ("chart",)
        assert policy.suffixes == (".TW", ".TWO")
