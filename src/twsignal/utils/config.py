"""Application start-up helpers."""

from ..config.logging import get_logger, setup_logging
from ..config.settings import Settings, get_settings


def initialize_application() -> Settings:
    """Load settings and configure logging from them."""
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        file_enabled=settings.log_file_enabled,
        file_path=settings.log_file_path,
        max_file_size=settings.log_max_file_size,
        backup_count=settings.log_backup_count,
    )

    logger = get_logger(__name__)
    logger.info(
        "Application initialized successfully",
        environment=settings.environment,
        debug=settings.debug,
        transports=settings.fetch_transports,
    )
    return settings
