"""Application-wide constants for the Idle RPG backend.

This module defines the fixed game rules shared by the models, the
engine and the request validation layer.
"""

from __future__ import annotations

# =============================================================================
# Characters
# =============================================================================

STARTING_LEVEL = 1
"""Level of a newly created character."""

# =============================================================================
# Game State Defaults
# =============================================================================

PLACEHOLDER_CHARACTER_NAME = "New Character"
"""Name given to the character of a game state created without a roster entry."""

GOLD_CURRENCY = "gold"
"""Currency type credited for gold drops and starting funds."""

GOLD_ITEM_ID = "gold-coin"
"""Loot id that is converted to gold instead of an inventory item."""

# =============================================================================
# Validation Limits
# =============================================================================

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
CHARACTER_NAME_MIN_LENGTH = 2
CHARACTER_NAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*"
"""A password must contain at least one of these characters."""


__all__ = [
    "STARTING_LEVEL",
    "PLACEHOLDER_CHARACTER_NAME",
    "GOLD_CURRENCY",
    "GOLD_ITEM_ID",
    "USERNAME_MIN_LENGTH",
    "USERNAME_MAX_LENGTH",
    "CHARACTER_NAME_MIN_LENGTH",
    "CHARACTER_NAME_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "PASSWORD_SPECIAL_CHARACTERS",
]
