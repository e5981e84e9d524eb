"""Tests for settings and logging configuration."""

from __future__ import annotations

import pytest
from bastion_utils import Settings, get_logger, get_settings
from pydantic import ValidationError


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default values with a clean environment."""
        for name in ("APP_MODE", "LOG_LEVEL", "PATTERN_CACHE_SIZE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.app_mode == "development"
        assert settings.log_level == "INFO"
        assert settings.pattern_cache_size == 512
        assert not settings.is_production
        assert not settings.is_silent

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values are read from the environment."""
        monkeypatch.setenv("APP_MODE", "production")
        monkeypatch.setenv("LOG_LEVEL", "silent")
        monkeypatch.setenv("PATTERN_CACHE_SIZE", "64")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.is_production
        assert settings.is_silent
        assert settings.pattern_cache_size == 64

    def test_invalid_values_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test bad environment values fail loudly."""
        monkeypatch.setenv("LOG_LEVEL", "TRACE")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_cache_size_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the regex cache cannot be sized to zero."""
        monkeypatch.setenv("PATTERN_CACHE_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_get_settings_is_cached(self) -> None:
        """Test the settings instance is shared."""
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for logger access."""

    def test_get_logger_binds_service(self) -> None:
        """Test loggers can be fetched and used without output in tests."""
        log = get_logger("tests.logging")

        log.info("test_event", key="value")
        log.debug("test_debug")
