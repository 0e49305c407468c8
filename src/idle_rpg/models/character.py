"""Pydantic V2 schemas for characters, their stats and equipment.

Models:
    CharacterStats: The four allocatable attributes plus unspent points.
    Equipment: The ten named equipment slots.
    SkillProgress: Progress of one skill.
    Character: A player character owned by a user.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from idle_rpg.core.constants import STARTING_LEVEL
from idle_rpg.models.base import ApiModel, utcnow
from idle_rpg.models.enums import CharacterClass, EquipmentSlot, StatName


class CharacterStats(ApiModel):
    """Allocatable attributes and the pool of unspent points.

    The stat pool (the four attributes plus ``available_points``) only
    grows when points are granted; spending a point moves it from
    ``available_points`` into an attribute.

    Attributes:
        strength: Strength attribute.
        dexterity: Dexterity attribute.
        intelligence: Intelligence attribute.
        vitality: Vitality attribute.
        available_points: Points not yet allocated.
    """

    strength: Annotated[int, Field(ge=0)] = 10
    dexterity: Annotated[int, Field(ge=0)] = 10
    intelligence: Annotated[int, Field(ge=0)] = 10
    vitality: Annotated[int, Field(ge=0)] = 10
    available_points: Annotated[int, Field(ge=0)] = 0

    @property
    def allocated_points(self) -> int:
        """Sum of the four attributes."""
        return sum(getattr(self, stat.value) for stat in StatName)

    @property
    def total_pool(self) -> int:
        """Sum of the four attributes and the unspent points."""
        return self.allocated_points + self.available_points

    def get(self, stat: StatName) -> int:
        """Read one attribute by name."""
        return getattr(self, stat.value)


class Equipment(ApiModel):
    """Item ids held in each of the ten equipment slots."""

    weapon: str | None = None
    armor: str | None = None
    helmet: str | None = None
    boots: str | None = None
    gloves: str | None = None
    belt: str | None = None
    ring1: str | None = None
    ring2: str | None = None
    amulet: str | None = None
    shield: str | None = None

    def get(self, slot: EquipmentSlot) -> str | None:
        """Return the item id in ``slot``, if any."""
        return getattr(self, slot.value)

    def put(self, slot: EquipmentSlot, item_id: str | None) -> None:
        """Place ``item_id`` in ``slot``, or empty the slot with ``None``."""
        setattr(self, slot.value, item_id)

    def slot_of(self, item_id: str) -> EquipmentSlot | None:
        """Find the slot currently holding ``item_id``."""
        for slot in EquipmentSlot:
            if self.get(slot) == item_id:
                return slot
        return None

    def equipped_ids(self) -> list[str]:
        """Ids of all equipped items in slot order."""
        return [item_id for slot in EquipmentSlot if (item_id := self.get(slot))]


class SkillProgress(ApiModel):
    """Progress of a single skill."""

    level: Annotated[int, Field(ge=0)] = 0
    experience: Annotated[int, Field(ge=0)] = 0
    unlocked: bool = False


class Character(ApiModel):
    """A player character.

    Attributes:
        id: Character identifier.
        user_id: Owning user.
        name: Display name, unique per user.
        character_class: Character class (``class`` on the wire).
        level: Character level.
        experience: Experience towards the next level.
        stats: Attribute allocation.
        equipment: Equipped item ids.
        skills: Skill progress keyed by skill id.
        created_at: Creation time.
        last_active: Last time the character was modified.
    """

    id: str = Field(min_length=1)
    user_id: str
    name: str = Field(min_length=1)
    character_class: CharacterClass = Field(default=CharacterClass.WARRIOR, alias="class")
    level: Annotated[int, Field(ge=1)] = STARTING_LEVEL
    experience: Annotated[int, Field(ge=0)] = 0
    stats: CharacterStats = Field(default_factory=CharacterStats)
    equipment: Equipment = Field(default_factory=Equipment)
    skills: dict[str, SkillProgress] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    last_active: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        """Mark the character as active now."""
        self.last_active = utcnow()


__all__ = [
    "CharacterStats",
    "Equipment",
    "SkillProgress",
    "Character",
]
