"""Unit tests for the settings model."""

import pytest

from hypervel_support.core.config import LoggingConfig, SupportSettings, get_settings


class TestSupportSettingsDefaults:
    """Test default values when no environment variable is set."""

    @pytest.fixture
    def clean_env(self, monkeypatch):
        for name in (
            "HYPERVEL_SUPPORT_LOG_LEVEL",
            "HYPERVEL_SUPPORT_LOG_FORMAT",
            "HYPERVEL_SUPPORT_DATE_FORMAT",
            "HYPERVEL_SUPPORT_DATA_OBJECT_AUTO_CASTING",
            "HYPERVEL_SUPPORT_ONCE_ENABLED",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self, clean_env):
        settings = SupportSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_format == "detailed"
        assert settings.enable_file_logging is False
        assert settings.date_format == "%Y-%m-%d %H:%M:%S"
        assert settings.data_object_auto_casting is True
        assert settings.once_enabled is True


class TestSupportSettingsEnvironment:
    """Test values bound from environment variables."""

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("HYPERVEL_SUPPORT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HYPERVEL_SUPPORT_ONCE_ENABLED", "false")
        monkeypatch.setenv("HYPERVEL_SUPPORT_DATA_OBJECT_AUTO_CASTING", "0")

        settings = SupportSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.once_enabled is False
        assert settings.data_object_auto_casting is False

    def test_logging_group(self, monkeypatch):
        monkeypatch.setenv("HYPERVEL_SUPPORT_LOG_FORMAT", "json")
        monkeypatch.setenv("HYPERVEL_SUPPORT_ENABLE_FILE_LOGGING", "true")

        logging_config = SupportSettings(_env_file=None).logging

        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.format == "json"
        assert logging_config.enable_file is True


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_fixture_provides_settings(test_config):
    assert isinstance(test_config, SupportSettings)
