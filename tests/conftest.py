"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Idle RPG backend test suite.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from idle_rpg.core.config import AuthSettings, GameSettings, Settings
from idle_rpg.engine.bestiary import ITEM_CATALOG, Bestiary
from idle_rpg.engine.resolver import ActionResolver
from idle_rpg.models.character import Character
from idle_rpg.models.combat import CombatState
from idle_rpg.models.enums import ItemType
from idle_rpg.models.game_state import CurrencyAmount, GameState
from idle_rpg.models.items import InventoryItem, Item, ItemStats


if TYPE_CHECKING:
    from collections.abc import Generator


TEST_JWT_SECRET = "test-secret-key-for-signing-tokens"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from idle_rpg.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with a signing secret and the cheapest bcrypt cost."""
    return AuthSettings(jwt_secret=TEST_JWT_SECRET, bcrypt_rounds=4)


@pytest.fixture
def game_settings() -> GameSettings:
    """Game settings with a fixed random seed."""
    return GameSettings(rng_seed=42)


@pytest.fixture
def settings(auth_settings: AuthSettings, game_settings: GameSettings) -> Settings:
    """Complete application settings for tests."""
    return Settings(auth=auth_settings, game=game_settings)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def health_potion() -> Item:
    return ITEM_CATALOG["health-potion"].model_copy(deep=True)


@pytest.fixture
def iron_sword() -> Item:
    return ITEM_CATALOG["iron-sword"].model_copy(deep=True)


@pytest.fixture
def steel_sword() -> Item:
    return Item(
        id="steel-sword",
        name="Steel Sword",
        type=ItemType.WEAPON,
        level=5,
        stats=ItemStats(damage=20),
    )


@pytest.fixture
def character() -> Character:
    """A level 1 warrior with default stats."""
    return Character(id="1", user_id="1", name="Tester")


@pytest.fixture
def game_state(
    character: Character,
    health_potion: Item,
    iron_sword: Item,
    steel_sword: Item,
) -> GameState:
    """An idle game state with two potions and two swords in the grid.

    Returns:
        GameState with inventory positions 0 (potions), 1 (iron sword)
        and 2 (steel sword).
    """
    return GameState(
        character=character,
        combat=CombatState(character_id=character.id),
        inventory=[
            InventoryItem(item=health_potion, quantity=2, position=0),
            InventoryItem(item=iron_sword, quantity=1, position=1),
            InventoryItem(item=steel_sword, quantity=1, position=2),
        ],
        currencies=[CurrencyAmount(type="gold", amount=100)],
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def resolver(rng: random.Random) -> ActionResolver:
    """Resolver over the built-in bestiary with a seeded random source."""
    return ActionResolver(bestiary=Bestiary(), rng=rng)
