"""Tests for configuration management."""

from __future__ import annotations

import pytest

from idle_rpg.core.config import (
    AuthSettings,
    GameSettings,
    ServerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from idle_rpg.core.exceptions import ConfigurationError


class TestAuthSettings:
    """Tests for AuthSettings configuration."""

    def test_default_values(self) -> None:
        settings = AuthSettings()

        assert settings.jwt_algorithm == "HS256"
        assert settings.token_expiry_hours == 24
        assert settings.bcrypt_rounds == 12

    def test_secret_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the signing secret is read from the environment."""
        monkeypatch.setenv("IDLE_RPG_AUTH_JWT_SECRET", "from-env")

        settings = AuthSettings()

        assert settings.jwt_secret is not None
        assert settings.jwt_secret.get_secret_value() == "from-env"
        assert "from-env" not in repr(settings)

    def test_bcrypt_rounds_bounds(self) -> None:
        with pytest.raises(ValueError):
            AuthSettings(bcrypt_rounds=3)


class TestGameSettings:
    """Tests for GameSettings configuration."""

    def test_default_values(self) -> None:
        """Test default game rule settings."""
        settings = GameSettings()

        assert settings.max_characters_per_user == 5
        assert settings.starting_gold == 100
        assert settings.default_area == "starting-area"
        assert settings.monster_level_margin == 2
        assert settings.action_retry_attempts == 3
        assert settings.rng_seed is None

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IDLE_RPG_GAME_MAX_CHARACTERS_PER_USER", "8")

        assert GameSettings().max_characters_per_user == 8


class TestServerSettings:
    """Tests for ServerSettings configuration."""

    def test_default_values(self) -> None:
        settings = ServerSettings()

        assert settings.port == 3001
        assert settings.api_prefix == "/api"

    @pytest.mark.parametrize("prefix", ["api", "/api/"])
    def test_api_prefix_validation(self, prefix: str) -> None:
        """Test that malformed prefixes are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            ServerSettings(api_prefix=prefix)

        assert exc_info.value.details["config_key"] == "api_prefix"


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default settings values."""
        settings = Settings()

        assert settings.app_name == "Idle RPG"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.is_production is True

    def test_nested_settings(self) -> None:
        settings = Settings()

        assert isinstance(settings.auth, AuthSettings)
        assert isinstance(settings.game, GameSettings)
        assert isinstance(settings.server, ServerSettings)


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_returns_cached_instance(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that clearing the cache picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("IDLE_RPG_APP_NAME", "Other Name")
        clear_settings_cache()

        second = get_settings()

        assert second is not first
        assert second.app_name == "Other Name"

    def test_invalid_settings_raise_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("IDLE_RPG_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
