"""Custom exception hierarchy for the Idle RPG backend.

This module defines the exception hierarchy used across the game engine,
the services and the HTTP layer. All exceptions inherit from IdleRpgError,
enabling unified error handling at the request boundary while preserving
domain-specific context in ``details``.

Every exception carries an HTTP ``status_code`` used by the API layer when
mapping failures to responses. Unknown exceptions map to HTTP 500.

Example:
    >>> from idle_rpg.core.exceptions import ItemNotFoundError
    >>> raise ItemNotFoundError("Item not found in inventory", item_id="health-potion")
"""

from __future__ import annotations

from typing import Any


class IdleRpgError(Exception):
    """Base exception for all Idle RPG errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
        status_code: HTTP status used when the error reaches the API boundary.
    """

    status_code: int = 500

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(IdleRpgError):
    """Base exception for all game engine errors.

    Raised when there are issues with game state management or
    action resolution.
    """


class ActionError(GameEngineError):
    """Raised when an action cannot be applied to a game state.

    The game state is never modified when this is raised.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize action error with action context.

        Args:
            message: Human-readable error description.
            action: Name of the action that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action:
            combined_details["action"] = action
        super().__init__(message, details=combined_details)


class InvalidActionError(ActionError):
    """Raised when the requested action name is not recognized."""


class AlreadyInCombatError(ActionError):
    """Raised when starting combat while an encounter is already active."""


class NotInCombatError(ActionError):
    """Raised when stopping combat while no encounter is active."""


class NoEligibleMonstersError(ActionError):
    """Raised when no monster template matches the character's level."""

    def __init__(
        self,
        message: str,
        *,
        character_level: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if character_level is not None:
            combined_details["character_level"] = character_level
        super().__init__(message, action="startCombat", details=combined_details)


class ItemNotFoundError(ActionError):
    """Raised when an item id is not present in the inventory."""

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize item error with the missing item id.

        Args:
            message: Human-readable error description.
            item_id: The item id that was looked up.
            action: Name of the action that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if item_id:
            combined_details["item_id"] = item_id
        super().__init__(message, action=action, details=combined_details)


class InvalidSlotError(ActionError):
    """Raised when an equipment slot name is not one of the ten slots."""


class ItemNotUsableError(ActionError):
    """Raised when using an item that is not a consumable."""


class NoPointsAvailableError(ActionError):
    """Raised when spending a stat point with none available."""


class InvalidStatError(ActionError):
    """Raised when a stat name is not an allocatable attribute."""


class InsufficientPointsError(ActionError):
    """Raised when a stat allocation uses more points than the pool holds."""

    def __init__(
        self,
        message: str,
        *,
        points_used: int | None = None,
        points_available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize allocation error with the pool figures.

        Args:
            message: Human-readable error description.
            points_used: Points requested by the allocation.
            points_available: Total points in the character's pool.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if points_used is not None:
            combined_details["points_used"] = points_used
        if points_available is not None:
            combined_details["points_available"] = points_available
        super().__init__(message, details=combined_details)


class GameStateNotFoundError(GameEngineError):
    """Raised when acting on a character whose game state was never loaded."""

    status_code = 404


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(IdleRpgError):
    """Base exception for repository errors."""


class StaleWriteError(StorageError):
    """Raised when a compare-and-swap write loses against a newer version."""

    status_code = 409

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        expected_version: int | None = None,
        actual_version: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize stale write error with version context.

        Args:
            message: Human-readable error description.
            key: Repository key that was written.
            expected_version: Version the writer read.
            actual_version: Version currently stored.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        if expected_version is not None:
            combined_details["expected_version"] = expected_version
        if actual_version is not None:
            combined_details["actual_version"] = actual_version
        super().__init__(message, details=combined_details)


# =============================================================================
# Character Domain Exceptions
# =============================================================================


class CharacterError(IdleRpgError):
    """Base exception for character roster errors."""

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if character_id:
            combined_details["character_id"] = character_id
        super().__init__(message, details=combined_details)


class CharacterNotFoundError(CharacterError):
    """Raised when a character does not exist or belongs to another user."""

    status_code = 404


class CharacterNameTakenError(CharacterError):
    """Raised when a user already has a character with the requested name."""


class CharacterLimitReachedError(CharacterError):
    """Raised when a user already owns the maximum number of characters."""


# =============================================================================
# Identity Domain Exceptions
# =============================================================================


class AuthError(IdleRpgError):
    """Base exception for authentication and account errors."""

    status_code = 401


class AuthenticationRequiredError(AuthError):
    """Raised when a protected endpoint is called without a bearer token."""


class InvalidTokenError(AuthError):
    """Raised when a bearer token is malformed, forged or expired."""

    status_code = 403


class InvalidCredentialsError(AuthError):
    """Raised when an email and password pair does not match a user."""


class UserAlreadyExistsError(AuthError):
    """Raised when registering with an email or username already in use."""

    status_code = 400


class UsernameTakenError(UserAlreadyExistsError):
    """Raised when a profile update picks another user's username."""


class EmailTakenError(UserAlreadyExistsError):
    """Raised when a profile update picks another user's email."""


class UserNotFoundError(AuthError):
    """Raised when a token refers to a user that no longer exists."""

    status_code = 404


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(IdleRpgError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(IdleRpgError):
    """Raised when data validation fails.

    This includes malformed action payloads and constraint violations
    in user input.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


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
]
