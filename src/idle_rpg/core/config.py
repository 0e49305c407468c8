"""Configuration management for the Idle RPG backend.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.
The token signing secret is handled using SecretStr.

Example:
    >>> from idle_rpg.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'Idle RPG'

Environment Variables:
    IDLE_RPG_AUTH_JWT_SECRET: Secret used to sign bearer tokens
    IDLE_RPG_AUTH_TOKEN_EXPIRY_HOURS: Lifetime of issued tokens
    IDLE_RPG_GAME_MAX_CHARACTERS_PER_USER: Character slots per account
    IDLE_RPG_SERVER_PORT: Port the HTTP server listens on
    IDLE_RPG_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from idle_rpg.core.exceptions import ConfigurationError


class AuthSettings(BaseSettings):
    """Configuration for password hashing and bearer tokens.

    Attributes:
        jwt_secret: HMAC secret for signing tokens. Token operations fail
            with ConfigurationError while it is unset.
        jwt_algorithm: JWT signing algorithm.
        token_expiry_hours: Lifetime of issued tokens.
        bcrypt_rounds: bcrypt cost factor for password hashes.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLE_RPG_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr | None = Field(
        default=None,
        description="Secret used to sign bearer tokens",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    token_expiry_hours: int = Field(
        default=24,
        ge=1,
        le=24 * 30,
        description="Token lifetime in hours",
    )
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=16,
        description="bcrypt cost factor",
    )


class GameSettings(BaseSettings):
    """Configuration for game rules and action processing.

    Attributes:
        max_characters_per_user: Character slots per account.
        starting_gold: Gold granted with a freshly created game state.
        default_area: Area used when startCombat names none.
        monster_level_margin: How many levels above the character a
            monster may be and still be eligible.
        action_retry_attempts: Attempts made when a state write loses a
            compare-and-swap race.
        rng_seed: Optional seed for encounter and loot randomness.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLE_RPG_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_characters_per_user: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum characters per user",
    )
    starting_gold: int = Field(
        default=100,
        ge=0,
        description="Gold in a new game state",
    )
    default_area: str = Field(
        default="starting-area",
        min_length=1,
        description="Default combat area",
    )
    monster_level_margin: int = Field(
        default=2,
        ge=0,
        description="Monster level allowance above the character level",
    )
    action_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a conflicting state write",
    )
    rng_seed: int | None = Field(
        default=None,
        description="Seed for encounter and loot randomness",
    )


class ServerSettings(BaseSettings):
    """Configuration for the HTTP server.

    Attributes:
        host: Interface to bind.
        port: Port to listen on.
        api_prefix: Path prefix for all routes.
        cors_origins: Origins allowed to call the API from a browser.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLE_RPG_SERVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3001, ge=1, le=65535, description="Listen port")
    api_prefix: str = Field(default="/api", description="Route prefix")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Allowed CORS origins",
    )

    @model_validator(mode="after")
    def validate_api_prefix(self) -> "ServerSettings":
        """Ensure the API prefix is an absolute path without a trailing slash.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the prefix is malformed.
        """
        if self.api_prefix and (
            not self.api_prefix.startswith("/") or self.api_prefix.endswith("/")
        ):
            raise ConfigurationError(
                f"api_prefix must start with '/' and not end with '/': {self.api_prefix!r}",
                config_key="api_prefix",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        auth: Token and password settings.
        game: Game rule settings.
        server: HTTP server settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDLE_RPG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Application metadata
    app_name: str = Field(default="Idle RPG", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    auth: AuthSettings = Field(default_factory=AuthSettings)
    game: GameSettings = Field(default_factory=GameSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "AuthSettings",
    "GameSettings",
    "ServerSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
