"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        IdleRpgError: Base exception for all application errors.
        ActionError: Base for rule violations raised by the action resolver.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from idle_rpg.core.config import (
    AuthSettings,
    GameSettings,
    ServerSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from idle_rpg.core.exceptions import (
    ActionError,
    AlreadyInCombatError,
    AuthError,
    AuthenticationRequiredError,
    CharacterError,
    CharacterLimitReachedError,
    CharacterNameTakenError,
    CharacterNotFoundError,
    ConfigurationError,
    EmailTakenError,
    GameEngineError,
    GameStateNotFoundError,
    IdleRpgError,
    InsufficientPointsError,
    InvalidActionError,
    InvalidCredentialsError,
    InvalidSlotError,
    InvalidStatError,
    InvalidTokenError,
    ItemNotFoundError,
    ItemNotUsableError,
    NoEligibleMonstersError,
    NoPointsAvailableError,
    NotInCombatError,
    StaleWriteError,
    StorageError,
    UserAlreadyExistsError,
    UsernameTakenError,
    UserNotFoundError,
    ValidationError,
)
from idle_rpg.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "IdleRpgError",
    # Game engine exceptions
    "GameEngineError",
    "ActionError",
    "InvalidActionError",
    "AlreadyInCombatError",
    "NotInCombatError",
    "NoEligibleMonstersError",
    "ItemNotFoundError",
    "InvalidSlotError",
    "ItemNotUsableError",
    "NoPointsAvailableError",
    "InvalidStatError",
    "InsufficientPointsError",
    "GameStateNotFoundError",
    # Storage exceptions
    "StorageError",
    "StaleWriteError",
    # Character exceptions
    "CharacterError",
    "CharacterNotFoundError",
    "CharacterNameTakenError",
    "CharacterLimitReachedError",
    # Identity exceptions
    "AuthError",
    "AuthenticationRequiredError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "UserAlreadyExistsError",
    "UsernameTakenError",
    "EmailTakenError",
    "UserNotFoundError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "AuthSettings",
    "GameSettings",
    "ServerSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
