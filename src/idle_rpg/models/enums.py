"""Enumeration types for the Idle RPG backend.

These enums define the closed vocabularies of the game: character
classes, item types and rarities, equipment slots and allocatable stats.
"""

from __future__ import annotations

from enum import StrEnum


class CharacterClass(StrEnum):
    """Playable character classes."""

    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"
    PALADIN = "paladin"
    NECROMANCER = "necromancer"


class ItemType(StrEnum):
    """Item categories.

    Only consumables can be used; the rest are equipped.
    """

    WEAPON = "weapon"
    ARMOR = "armor"
    HELMET = "helmet"
    BOOTS = "boots"
    GLOVES = "gloves"
    BELT = "belt"
    RING = "ring"
    AMULET = "amulet"
    SHIELD = "shield"
    CONSUMABLE = "consumable"

    @property
    def is_usable(self) -> bool:
        """Whether an item of this type can be consumed with useItem."""
        return self is ItemType.CONSUMABLE


class ItemRarity(StrEnum):
    """Item rarity tiers, lowest first."""

    COMMON = "common"
    MAGIC = "magic"
    RARE = "rare"
    SET = "set"
    UNIQUE = "unique"


class AffixType(StrEnum):
    """Position of an affix in an item's name."""

    PREFIX = "prefix"
    SUFFIX = "suffix"


class EquipmentSlot(StrEnum):
    """The ten named equipment slots."""

    WEAPON = "weapon"
    ARMOR = "armor"
    HELMET = "helmet"
    BOOTS = "boots"
    GLOVES = "gloves"
    BELT = "belt"
    RING1 = "ring1"
    RING2 = "ring2"
    AMULET = "amulet"
    SHIELD = "shield"


class StatName(StrEnum):
    """Attributes that stat points can be allocated to."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    VITALITY = "vitality"


__all__ = [
    "CharacterClass",
    "ItemType",
    "ItemRarity",
    "AffixType",
    "EquipmentSlot",
    "StatName",
]
