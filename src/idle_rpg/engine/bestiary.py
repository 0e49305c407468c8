"""Monster templates, the item catalog and loot table lookup.

Templates are read-only reference data shared by every game state.
Encounters always receive a deep copy of a template.

Example:
    >>> bestiary = Bestiary()
    >>> monster = bestiary.choose_encounter(character_level=1, rng=random.Random(7))
    >>> monster.level <= 3
    True
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from idle_rpg.core.constants import GOLD_CURRENCY, GOLD_ITEM_ID
from idle_rpg.core.exceptions import NoEligibleMonstersError
from idle_rpg.core.logging import get_logger
from idle_rpg.models.combat import LootEntry, Monster
from idle_rpg.models.enums import ItemRarity, ItemType
from idle_rpg.models.game_state import GameState
from idle_rpg.models.items import InventoryItem, Item, ItemStats


logger = get_logger(__name__)


# =============================================================================
# Reference Data
# =============================================================================

DEFAULT_MONSTERS: tuple[Monster, ...] = (
    Monster(
        id="goblin-1",
        name="Goblin Warrior",
        level=1,
        health=50,
        max_health=50,
        damage=8,
        defense=2,
        attack_speed=1.5,
        experience=25,
        loot_table=[
            LootEntry(item_id="gold-coin", drop_rate=0.8, quantity=5),
            LootEntry(item_id="health-potion", drop_rate=0.3, quantity=1),
        ],
    ),
    Monster(
        id="orc-1",
        name="Orc Berserker",
        level=3,
        health=120,
        max_health=120,
        damage=18,
        defense=5,
        attack_speed=1.2,
        experience=60,
        loot_table=[
            LootEntry(item_id="gold-coin", drop_rate=0.9, quantity=12),
            LootEntry(item_id="health-potion", drop_rate=0.4, quantity=1),
            LootEntry(item_id="iron-sword", drop_rate=0.1, quantity=1),
        ],
    ),
    Monster(
        id="skeleton-1",
        name="Skeleton Archer",
        level=2,
        health=80,
        max_health=80,
        damage=12,
        defense=3,
        attack_speed=2.0,
        experience=40,
        loot_table=[
            LootEntry(item_id="gold-coin", drop_rate=0.7, quantity=8),
            LootEntry(item_id="mana-potion", drop_rate=0.3, quantity=1),
        ],
    ),
)

ITEM_CATALOG: dict[str, Item] = {
    item.id: item
    for item in (
        Item(
            id="health-potion",
            name="Health Potion",
            type=ItemType.CONSUMABLE,
            stats=ItemStats(health=50),
            description="Restores 50 health.",
        ),
        Item(
            id="mana-potion",
            name="Mana Potion",
            type=ItemType.CONSUMABLE,
            stats=ItemStats(mana=30),
            description="Restores 30 mana.",
        ),
        Item(
            id="iron-sword",
            name="Iron Sword",
            type=ItemType.WEAPON,
            rarity=ItemRarity.COMMON,
            level=3,
            stats=ItemStats(damage=12, attack_speed=1.1),
            description="A plain but reliable blade.",
        ),
    )
}
"""Items that loot tables can drop, keyed by id. Gold is a currency, not an item."""


@dataclass(frozen=True)
class LootDrop:
    """One rolled loot entry.

    Attributes:
        item_id: Dropped item id, or ``gold-coin``.
        quantity: Units dropped.
    """

    item_id: str
    quantity: int

    @property
    def is_gold(self) -> bool:
        return self.item_id == GOLD_ITEM_ID


# =============================================================================
# Bestiary
# =============================================================================


class Bestiary:
    """Lookup over monster templates.

    Args:
        templates: Monster templates; defaults to the built-in set.
    """

    def __init__(self, templates: Iterable[Monster] | None = None) -> None:
        self._templates: tuple[Monster, ...] = tuple(
            DEFAULT_MONSTERS if templates is None else templates
        )

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def templates(self) -> Sequence[Monster]:
        """All templates, in definition order."""
        return self._templates

    def get(self, monster_id: str) -> Monster | None:
        """Return a copy of the template with ``monster_id``."""
        for template in self._templates:
            if template.id == monster_id:
                return template.model_copy(deep=True)
        return None

    def eligible(self, character_level: int, *, level_margin: int = 2) -> list[Monster]:
        """Templates a character of ``character_level`` may encounter.

        A monster is eligible when its level is at most
        ``character_level + level_margin``.
        """
        max_level = character_level + level_margin
        return [t for t in self._templates if t.level <= max_level]

    def choose_encounter(
        self,
        character_level: int,
        *,
        rng: random.Random,
        level_margin: int = 2,
    ) -> Monster:
        """Pick an eligible template uniformly at random and copy it.

        Args:
            character_level: Level of the character starting combat.
            rng: Random source.
            level_margin: Allowed level gap above the character.

        Returns:
            A fresh Monster instance independent of the template.

        Raises:
            NoEligibleMonstersError: If no template is eligible.
        """
        pool = self.eligible(character_level, level_margin=level_margin)
        if not pool:
            raise NoEligibleMonstersError(
                "No monsters available for this level",
                character_level=character_level,
            )
        template = pool[rng.randrange(len(pool))]
        logger.debug(
            "Encounter chosen",
            monster=template.id,
            pool_size=len(pool),
            character_level=character_level,
        )
        return template.model_copy(deep=True)


# =============================================================================
# Loot
# =============================================================================


def roll_loot(monster: Monster, character_level: int, rng: random.Random) -> list[LootDrop]:
    """Roll a monster's loot table.

    Each entry whose level window admits ``character_level`` drops
    independently with probability ``drop_rate``.

    Args:
        monster: Defeated monster.
        character_level: Level of the character receiving the loot.
        rng: Random source.

    Returns:
        Drops in loot-table order.
    """
    drops = [
        LootDrop(item_id=entry.item_id, quantity=entry.quantity)
        for entry in monster.loot_table
        if entry.applies_to(character_level) and rng.random() < entry.drop_rate
    ]
    logger.debug("Loot rolled", monster=monster.id, drops=[d.item_id for d in drops])
    return drops


def award_loot(
    state: GameState,
    drops: Iterable[LootDrop],
    *,
    catalog: dict[str, Item] | None = None,
) -> list[LootDrop]:
    """Credit loot drops to a game state.

    Gold becomes currency. Items stack onto an existing inventory entry
    with the same id or take the lowest free grid position. Drops for
    ids missing from the catalog are skipped.

    Args:
        state: Game state to modify in place.
        drops: Rolled drops.
        catalog: Item definitions; defaults to ITEM_CATALOG.

    Returns:
        The drops that were actually awarded.
    """
    catalog = ITEM_CATALOG if catalog is None else catalog
    awarded: list[LootDrop] = []

    for drop in drops:
        if drop.is_gold:
            state.add_currency(GOLD_CURRENCY, drop.quantity)
            awarded.append(drop)
            continue

        item = catalog.get(drop.item_id)
        if item is None:
            logger.warning("Unknown loot item skipped", item_id=drop.item_id)
            continue

        existing = state.find_item(drop.item_id)
        if existing is not None:
            existing.quantity += drop.quantity
        else:
            state.inventory.append(
                InventoryItem(
                    item=item.model_copy(deep=True),
                    quantity=drop.quantity,
                    position=state.next_free_position(),
                )
            )
        awarded.append(drop)

    return awarded


__all__ = [
    "DEFAULT_MONSTERS",
    "ITEM_CATALOG",
    "LootDrop",
    "Bestiary",
    "roll_loot",
    "award_loot",
]
