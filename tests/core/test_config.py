"""Tests for library settings."""

import pytest
from pydantic import ValidationError

from graphlayers.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults, overrides and validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("LOG_LEVEL", "LOG_FILE", "DEFAULT_MAX_LAYER_SIZE", "DEBUG"):
            monkeypatch.delenv(f"GRAPHLAYERS_{name}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.PROJECT_NAME == "graphlayers"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FILE is None
        assert settings.DEFAULT_MAX_LAYER_SIZE == 4
        assert settings.DEBUG is False

    def test_log_level_is_normalized(self) -> None:
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
        assert Settings(LOG_LEVEL=" Warning ").LOG_LEVEL == "WARNING"

    def test_numeric_log_level_is_accepted(self) -> None:
        assert Settings(LOG_LEVEL=40).LOG_LEVEL == "ERROR"

    def test_unknown_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_max_layer_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(DEFAULT_MAX_LAYER_SIZE=0)

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAPHLAYERS_LOG_LEVEL", "warning")
        monkeypatch.setenv("GRAPHLAYERS_DEFAULT_MAX_LAYER_SIZE", "7")
        monkeypatch.setenv("GRAPHLAYERS_LOG_JSON_FORMAT", "true")

        settings = Settings()

        assert settings.LOG_LEVEL == "WARNING"
        assert settings.DEFAULT_MAX_LAYER_SIZE == 7
        assert settings.LOG_JSON_FORMAT is True

    def test_unprefixed_environment_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GRAPHLAYERS_DEFAULT_MAX_LAYER_SIZE", raising=False)
        monkeypatch.setenv("DEFAULT_MAX_LAYER_SIZE", "9")

        assert Settings(_env_file=None).DEFAULT_MAX_LAYER_SIZE == 4

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
