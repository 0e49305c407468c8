"""Pydantic V2 models for the Idle RPG backend.

All models serialize with camelCase field names through ``to_api()``.
"""

from __future__ import annotations

from idle_rpg.models.base import ApiModel, utcnow
from idle_rpg.models.character import (
    Character,
    CharacterStats,
    Equipment,
    SkillProgress,
)
from idle_rpg.models.combat import (
    CombatState,
    CombatSummary,
    LootEntry,
    Monster,
    MonsterAbility,
    StatusEffect,
)
from idle_rpg.models.enums import (
    AffixType,
    CharacterClass,
    EquipmentSlot,
    ItemRarity,
    ItemType,
    StatName,
)
from idle_rpg.models.game_state import (
    Achievement,
    CurrencyAmount,
    GameState,
    PlayerSettings,
)
from idle_rpg.models.items import (
    InventoryItem,
    Item,
    ItemAffix,
    ItemRequirements,
    ItemStats,
)
from idle_rpg.models.user import User, UserProfile


__all__ = [
    # Base
    "ApiModel",
    "utcnow",
    # Enums
    "AffixType",
    "CharacterClass",
    "EquipmentSlot",
    "ItemRarity",
    "ItemType",
    "StatName",
    # Character
    "Character",
    "CharacterStats",
    "Equipment",
    "SkillProgress",
    # Items
    "Item",
    "ItemAffix",
    "ItemRequirements",
    "ItemStats",
    "InventoryItem",
    # Combat
    "CombatState",
    "CombatSummary",
    "LootEntry",
    "Monster",
    "MonsterAbility",
    "StatusEffect",
    # Game state
    "Achievement",
    "CurrencyAmount",
    "GameState",
    "PlayerSettings",
    # Users
    "User",
    "UserProfile",
]
