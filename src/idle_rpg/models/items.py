"""Pydantic V2 schemas for items and inventory entries.

Items are descriptive records; everything that changes during play
(quantity, grid position) lives on the wrapping InventoryItem.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from idle_rpg.models.base import ApiModel
from idle_rpg.models.enums import AffixType, CharacterClass, ItemRarity, ItemType


class ItemStats(ApiModel):
    """Numeric bonuses granted by an item. Unset stats grant nothing."""

    damage: float | None = None
    armor: float | None = None
    health: float | None = None
    mana: float | None = None
    attack_speed: float | None = None
    critical_chance: float | None = None
    critical_damage: float | None = None
    elemental_resistance: float | None = None

    def effects(self) -> dict[str, float]:
        """Return the stats this item actually sets, keyed by client name.

        Returns:
            Mapping of camelCase stat name to value for every non-empty stat.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


class ItemAffix(ApiModel):
    """A rolled modifier attached to an item.

    Attributes:
        id: Affix identifier.
        name: Display name merged into the item name.
        type: Whether the affix is a prefix or a suffix.
        tier: Affix tier, higher is stronger.
        value: Rolled magnitude.
        stat_type: Name of the stat the affix modifies.
    """

    id: str
    name: str
    type: AffixType
    tier: Annotated[int, Field(ge=1)] = 1
    value: float
    stat_type: str


class ItemRequirements(ApiModel):
    """Minimum character attributes needed to wear an item."""

    level: Annotated[int, Field(ge=1)] = 1
    strength: int | None = None
    dexterity: int | None = None
    intelligence: int | None = None
    vitality: int | None = None
    # "class" is a keyword, so the attribute carries a different name
    classes: list[CharacterClass] | None = Field(default=None, alias="class")


class Item(ApiModel):
    """An item definition.

    Attributes:
        id: Unique item identifier, also used as the inventory lookup key.
        name: Display name.
        type: Item category; decides whether it can be used or equipped.
        rarity: Rarity tier.
        level: Item level.
        stats: Stat bonuses.
        affixes: Rolled affixes.
        durability: Current durability.
        max_durability: Durability when new.
        requirements: Wear requirements.
        description: Tooltip text.
        flavor_text: Optional lore line.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: ItemType
    rarity: ItemRarity = ItemRarity.COMMON
    level: Annotated[int, Field(ge=1)] = 1
    stats: ItemStats = Field(default_factory=ItemStats)
    affixes: list[ItemAffix] = Field(default_factory=list)
    durability: Annotated[int, Field(ge=0)] = 100
    max_durability: Annotated[int, Field(ge=0)] = 100
    requirements: ItemRequirements = Field(default_factory=ItemRequirements)
    description: str = ""
    flavor_text: str | None = None


class InventoryItem(ApiModel):
    """An item held by a character.

    Attributes:
        item: The item definition.
        quantity: Stack size.
        position: Index in the visible inventory grid; ``None`` means the
            item is equipped and not shown in the grid.
    """

    item: Item
    quantity: Annotated[int, Field(ge=0)] = 1
    position: Annotated[int, Field(ge=0)] | None = None

    @property
    def item_id(self) -> str:
        """Shortcut for the wrapped item's id."""
        return self.item.id

    def to_summary(self) -> dict[str, Any]:
        """Compact description used in log events."""
        return {"item_id": self.item.id, "quantity": self.quantity, "position": self.position}


__all__ = [
    "ItemStats",
    "ItemAffix",
    "ItemRequirements",
    "Item",
    "InventoryItem",
]
