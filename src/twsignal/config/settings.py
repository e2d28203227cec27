"""Application settings and configuration management using Pydantic."""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings

KNOWN_TRANSPORTS = ("yfinance", "chart")


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Environment and deployment
    environment: str = "development"
    debug: bool = False

    # Analysis settings
    min_history_points: int = 144
    chart_days: int = 30
    recent_high_days: int = 60
    backtest_lookback_days: int = 120
    backtest_horizon_days: int = 10
    backtest_signal_threshold: int = 12
    scan_min_score: int = 3

    # Batch pacing
    request_delay_seconds: float = 1.0

    # Price fetching settings
    fetch_max_attempts: int = 3
    fetch_backoff_seconds: float = 1.0
    fetch_timeout_seconds: float = 10.0
    fetch_range: str = "1y"
    fetch_transports: List[str] = ["yfinance", "chart"]
    chart_proxy_prefixes: List[str] = [""]

    # Series cache settings
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300

    # API settings
    endpoint_host: str = "0.0.0.0"
    endpoint_port: int = 8000
    api_reload: bool = False
    api_log_level: str = "INFO"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "structured"  # 'structured' or 'plain'
    log_file_enabled: bool = False
    log_file_path: str = "data/twsignal.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TWSIGNAL_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "testing", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator(
        "min_history_points",
        "chart_days",
        "recent_high_days",
        "backtest_lookback_days",
        "backtest_horizon_days",
        "fetch_max_attempts",
        "cache_ttl_seconds",
    )
    @classmethod
    def validate_positive(cls, v):
        """Validate window sizes and counts are positive."""
        if v < 1:
            raise ValueError("Value must be a positive integer")
        return v

    @field_validator("backtest_horizon_days")
    @classmethod
    def validate_horizon(cls, v):
        """The long horizon must cover the fixed 5-day short horizon."""
        if v < 5:
            raise ValueError("Backtest horizon must be at least 5 days")
        return v

    @field_validator(
        "request_delay_seconds", "fetch_backoff_seconds", "fetch_timeout_seconds"
    )
    @classmethod
    def validate_non_negative(cls, v):
        """Validate delays are not negative."""
        if v < 0:
            raise ValueError("Delay must not be negative")
        return v

    @field_validator("fetch_transports")
    @classmethod
    def validate_transports(cls, v):
        """Validate transport names against the known strategies."""
        if not v:
            raise ValueError("At least one transport must be configured")
        unknown = [name for name in v if name not in KNOWN_TRANSPORTS]
        if unknown:
            raise ValueError(
                f"Unknown transports {unknown}; must be among: {list(KNOWN_TRANSPORTS)}"
            )
        return v

    @field_validator("endpoint_port")
    @classmethod
    def validate_port(cls, v):
        """Validate port number is in valid range."""
        if v < 1 or v > 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("log_level", "api_log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["structured", "plain"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
