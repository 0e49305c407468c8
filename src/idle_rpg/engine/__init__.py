"""Game engine for the Idle RPG backend.

Submodules:
    actions: Typed actions decoded from request bodies.
    resolver: The action state machine.
    bestiary: Monster templates, encounter selection and loot.
    stats: Stat point spending and re-allocation.

Example:
    >>> from idle_rpg.engine import ActionResolver, parse_action
    >>> resolver = ActionResolver()
    >>> result = resolver.apply(state, parse_action("levelUp", {"stat": "vitality"}))
"""

from __future__ import annotations

from idle_rpg.engine.actions import (
    ACTION_NAMES,
    EquipItem,
    GameAction,
    LevelUp,
    StartCombat,
    StopCombat,
    UseItem,
    parse_action,
)
from idle_rpg.engine.bestiary import (
    DEFAULT_MONSTERS,
    ITEM_CATALOG,
    Bestiary,
    LootDrop,
    award_loot,
    roll_loot,
)
from idle_rpg.engine.resolver import (
    ActionResolver,
    ActionResult,
    CombatStarted,
    CombatStopped,
    ItemEquipped,
    ItemUsed,
    StatIncreased,
)
from idle_rpg.engine.stats import (
    StatAllocation,
    allocate_stats,
    resolve_stat,
    spend_point,
)


__all__ = [
    # Actions
    "ACTION_NAMES",
    "GameAction",
    "StartCombat",
    "StopCombat",
    "EquipItem",
    "UseItem",
    "LevelUp",
    "parse_action",
    # Resolver
    "ActionResolver",
    "ActionResult",
    "CombatStarted",
    "CombatStopped",
    "ItemEquipped",
    "ItemUsed",
    "StatIncreased",
    # Bestiary
    "DEFAULT_MONSTERS",
    "ITEM_CATALOG",
    "Bestiary",
    "LootDrop",
    "roll_loot",
    "award_loot",
    # Stats
    "StatAllocation",
    "allocate_stats",
    "resolve_stat",
    "spend_point",
]
