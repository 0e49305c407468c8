"""Game state models for the Idle RPG backend.

GameState is the unit of mutation: the action resolver receives one,
changes it in place and the game service stores it back as a whole.

Models:
    CurrencyAmount: Balance of one currency.
    Achievement: Progress towards one achievement.
    PlayerSettings: Client-side gameplay preferences.
    GameState: Everything the game screen needs for one character.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from idle_rpg.models.base import ApiModel
from idle_rpg.models.character import Character
from idle_rpg.models.combat import CombatState
from idle_rpg.models.items import InventoryItem


class CurrencyAmount(ApiModel):
    """Balance of a single currency type."""

    type: str = Field(min_length=1)
    amount: Annotated[int, Field(ge=0)] = 0


class Achievement(ApiModel):
    """Progress towards an achievement."""

    id: str
    name: str
    description: str = ""
    completed: bool = False
    completed_at: datetime | None = None
    progress: Annotated[int, Field(ge=0)] = 0
    max_progress: Annotated[int, Field(ge=1)] = 1


class PlayerSettings(ApiModel):
    """Gameplay preferences stored with the game state."""

    combat_speed: Annotated[float, Field(gt=0)] = 1
    auto_advance: bool = False
    auto_loot: bool = False
    auto_sell: bool = False
    notifications: bool = True
    sound_enabled: bool = True
    music_enabled: bool = True


class GameState(ApiModel):
    """Complete mutable game state of one character.

    Attributes:
        character: The character, including stats and equipment.
        combat: Idle-combat state.
        inventory: Held items. Equipped items stay in the list with
            ``position=None``.
        currencies: Currency balances.
        achievements: Achievement progress.
        settings: Gameplay preferences.
    """

    character: Character
    combat: CombatState
    inventory: list[InventoryItem] = Field(default_factory=list)
    currencies: list[CurrencyAmount] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)
    settings: PlayerSettings = Field(default_factory=PlayerSettings)

    def find_item(self, item_id: str) -> InventoryItem | None:
        """Return the first inventory entry wrapping ``item_id``."""
        for entry in self.inventory:
            if entry.item.id == item_id:
                return entry
        return None

    def used_positions(self) -> set[int]:
        """Grid positions currently occupied."""
        return {entry.position for entry in self.inventory if entry.position is not None}

    def next_free_position(self) -> int:
        """Lowest grid position not held by any inventory entry."""
        used = self.used_positions()
        position = 0
        while position in used:
            position += 1
        return position

    def currency(self, currency_type: str) -> int:
        """Balance of ``currency_type`` (0 when absent)."""
        for entry in self.currencies:
            if entry.type == currency_type:
                return entry.amount
        return 0

    def add_currency(self, currency_type: str, amount: int) -> int:
        """Credit ``amount`` of ``currency_type`` and return the new balance."""
        for entry in self.currencies:
            if entry.type == currency_type:
                entry.amount += amount
                return entry.amount
        self.currencies.append(CurrencyAmount(type=currency_type, amount=amount))
        return amount

    def item_count(self) -> int:
        """Total number of item units held, equipped or not."""
        return sum(entry.quantity for entry in self.inventory)


__all__ = [
    "CurrencyAmount",
    "Achievement",
    "PlayerSettings",
    "GameState",
]
