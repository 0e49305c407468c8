"""Pydantic V2 schemas for monsters and idle combat.

Monster templates are process-wide reference data. Starting an encounter
places a deep copy of a template on the character's CombatState so that
nothing done to the encounter's monster reaches the template.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import Field, model_validator

from idle_rpg.models.base import ApiModel, utcnow


class StatusEffect(ApiModel):
    """A timed buff or debuff applied by a monster ability."""

    type: str
    duration: Annotated[float, Field(ge=0)]
    value: float
    is_debuff: bool = True


class MonsterAbility(ApiModel):
    """A special attack a monster can use."""

    name: str
    damage: Annotated[float, Field(ge=0)]
    cooldown: Annotated[float, Field(ge=0)]
    effects: list[StatusEffect] | None = None


class LootEntry(ApiModel):
    """One row of a monster's loot table.

    Attributes:
        item_id: Item (or ``gold-coin``) that drops.
        drop_rate: Probability in [0, 1] that the entry drops.
        quantity: Units dropped.
        min_level: Lowest character level the entry can drop for.
        max_level: Highest character level the entry can drop for.
    """

    item_id: str
    drop_rate: Annotated[float, Field(ge=0.0, le=1.0)]
    quantity: Annotated[int, Field(ge=1)] = 1
    min_level: int | None = None
    max_level: int | None = None

    def applies_to(self, character_level: int) -> bool:
        """Check the entry's level window against a character level."""
        if self.min_level is not None and character_level < self.min_level:
            return False
        if self.max_level is not None and character_level > self.max_level:
            return False
        return True


class Monster(ApiModel):
    """A monster, either a bestiary template or an encounter instance.

    Attributes:
        id: Template identifier.
        name: Display name.
        level: Monster level, used for encounter eligibility.
        health: Current health.
        max_health: Health when spawned.
        damage: Damage per hit.
        defense: Damage reduction.
        attack_speed: Attacks per second.
        experience: Experience granted on kill.
        loot_table: Possible drops.
        abilities: Special attacks.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    level: Annotated[int, Field(ge=1)]
    health: Annotated[float, Field(ge=0)]
    max_health: Annotated[float, Field(gt=0)]
    damage: Annotated[float, Field(ge=0)]
    defense: Annotated[float, Field(ge=0)] = 0
    attack_speed: Annotated[float, Field(gt=0)] = 1.0
    experience: Annotated[int, Field(ge=0)] = 0
    loot_table: list[LootEntry] = Field(default_factory=list)
    abilities: list[MonsterAbility] | None = None


class CombatSummary(ApiModel):
    """Running combat totals reported when combat stops."""

    total_damage_dealt: float = 0
    total_damage_received: float = 0
    monsters_killed: int = 0
    experience_gained: int = 0


class CombatState(ApiModel):
    """A character's idle-combat state.

    At most one encounter is active per character. ``current_monster``
    is set only while ``is_active`` is true.

    Attributes:
        character_id: Character the state belongs to.
        current_area: Area the character fights in.
        current_monster: Monster of the active encounter.
        is_active: Whether an encounter is running.
        start_time: When the current or last encounter started.
        last_update: Last time the state changed.
        total_damage_dealt: Damage dealt since the encounter started.
        total_damage_received: Damage taken since the encounter started.
        monsters_killed: Kills since the encounter started.
        experience_gained: Experience since the encounter started.
    """

    character_id: str
    current_area: str = "starting-area"
    current_monster: Monster | None = None
    is_active: bool = False
    start_time: datetime = Field(default_factory=utcnow)
    last_update: datetime = Field(default_factory=utcnow)
    total_damage_dealt: Annotated[float, Field(ge=0)] = 0
    total_damage_received: Annotated[float, Field(ge=0)] = 0
    monsters_killed: Annotated[int, Field(ge=0)] = 0
    experience_gained: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def check_monster_requires_active(self) -> "CombatState":
        """Reject a monster on an inactive combat state.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If ``current_monster`` is set while inactive.
        """
        if self.current_monster is not None and not self.is_active:
            raise ValueError("current_monster can only be set while combat is active")
        return self

    def summary(self) -> CombatSummary:
        """Snapshot of the running totals."""
        return CombatSummary(
            total_damage_dealt=self.total_damage_dealt,
            total_damage_received=self.total_damage_received,
            monsters_killed=self.monsters_killed,
            experience_gained=self.experience_gained,
        )

    def to_summary(self) -> dict[str, Any]:
        """Compact description used in log events."""
        return {
            "area": self.current_area,
            "active": self.is_active,
            "monster": self.current_monster.id if self.current_monster else None,
        }


__all__ = [
    "StatusEffect",
    "MonsterAbility",
    "LootEntry",
    "Monster",
    "CombatSummary",
    "CombatState",
]
