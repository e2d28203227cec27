"""Tests for application start-up."""

import sys
from unittest.mock import patch

sys.path.append("src")

from twsignal.config.settings import Settings


class TestInitializeApplication:
    @patch("twsignal.utils.config.setup_logging")
    @patch("twsignal.utils.config.get_settings")
    def test_logging_configured_from_settings(self, mock_get_settings, mock_setup):
        from twsignal.utils.config import initialize_application

        settings = Settings(_env_file=None, log_level="debug", log_format="plain")
        mock_get_settings.return_value = settings

        assert initialize_application() is settings
        mock_setup.assert_called_once_with(
            level="DEBUG",
            format_type="plain",
            file_enabled=False,
            file_path="data/twsignal.log",
            max_file_size="10MB",
            backup_count=5,
        )
