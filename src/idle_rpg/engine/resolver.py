"""Action resolver: the idle-combat and inventory state machine.

The resolver applies exactly one typed action to a GameState and returns
a structured result. All preconditions are checked before anything is
changed, so a failing action leaves the state untouched.

Combat sub-machine::

    Idle --startCombat--> Engaged --stopCombat--> Idle

Example:
    >>> resolver = ActionResolver(rng=random.Random(1))
    >>> result = resolver.apply(state, parse_action("startCombat", {"area": "forest"}))
    >>> result.to_api()["combatStarted"]
    True
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any

from idle_rpg.core.exceptions import (
    AlreadyInCombatError,
    InvalidActionError,
    InvalidSlotError,
    ItemNotFoundError,
    ItemNotUsableError,
    NotInCombatError,
)
from idle_rpg.core.logging import get_logger
from idle_rpg.engine.actions import (
    EquipItem,
    GameAction,
    LevelUp,
    StartCombat,
    StopCombat,
    UseItem,
)
from idle_rpg.engine.bestiary import Bestiary
from idle_rpg.engine.stats import spend_point
from idle_rpg.models.base import ApiModel, utcnow
from idle_rpg.models.combat import CombatState, CombatSummary, Monster
from idle_rpg.models.enums import EquipmentSlot
from idle_rpg.models.game_state import GameState
from idle_rpg.models.items import InventoryItem, Item


logger = get_logger(__name__)


# =============================================================================
# Results
# =============================================================================


class CombatStarted(ApiModel):
    combat_started: bool = True
    monster: Monster


class CombatStopped(ApiModel):
    combat_stopped: bool = True
    stats: CombatSummary


class ItemEquipped(ApiModel):
    item_equipped: bool = True
    slot: EquipmentSlot
    item: Item
    unequipped_item_id: str | None = None


class ItemUsed(ApiModel):
    item_used: bool = True
    item_id: str
    remaining_quantity: int
    effects: dict[str, float]


class StatIncreased(ApiModel):
    level_up: bool = True
    stat: str
    new_value: int
    remaining_points: int


ActionResult = CombatStarted | CombatStopped | ItemEquipped | ItemUsed | StatIncreased


# =============================================================================
# Resolver
# =============================================================================


class ActionResolver:
    """Apply game actions to game states.

    Args:
        bestiary: Monster templates for encounters.
        rng: Random source for encounter selection.
        default_area: Area used when startCombat names none.
        level_margin: Allowed monster level above the character level.
    """

    def __init__(
        self,
        *,
        bestiary: Bestiary | None = None,
        rng: random.Random | None = None,
        default_area: str = "starting-area",
        level_margin: int = 2,
    ) -> None:
        self._bestiary = bestiary or Bestiary()
        self._rng = rng or random.Random()
        self._default_area = default_area
        self._level_margin = level_margin
        self._handlers: dict[type[Any], Callable[[GameState, Any], ActionResult]] = {
            StartCombat: self._start_combat,
            StopCombat: self._stop_combat,
            EquipItem: self._equip_item,
            UseItem: self._use_item,
            LevelUp: self._level_up,
        }

    def apply(self, state: GameState, action: GameAction) -> ActionResult:
        """Apply one action to ``state`` in place.

        Args:
            state: The character's game state.
            action: A decoded action.

        Returns:
            The action's result payload.

        Raises:
            ActionError: If the action's preconditions do not hold. The
                state is not modified.
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise InvalidActionError("Invalid action", action=getattr(action, "action", None))

        result = handler(state, action)
        logger.info(
            "Action applied",
            action=action.action,
            character_id=state.character.id,
            combat=state.combat.to_summary(),
        )
        return result

    # -------------------------------------------------------------------------
    # Combat
    # -------------------------------------------------------------------------

    def _start_combat(self, state: GameState, action: StartCombat) -> CombatStarted:
        if state.combat.is_active:
            raise AlreadyInCombatError("Combat is already active", action=action.action)

        monster = self._bestiary.choose_encounter(
            state.character.level,
            rng=self._rng,
            level_margin=self._level_margin,
        )
        now = utcnow()
        state.combat = CombatState(
            character_id=state.character.id,
            current_area=action.area or self._default_area,
            current_monster=monster,
            is_active=True,
            start_time=now,
            last_update=now,
        )
        return CombatStarted(monster=monster.model_copy(deep=True))

    def _stop_combat(self, state: GameState, action: StopCombat) -> CombatStopped:
        combat = state.combat
        if not combat.is_active:
            raise NotInCombatError("Combat is not active", action=action.action)

        # Clear the monster first so the state never holds a monster while inactive
        combat.current_monster = None
        combat.is_active = False
        combat.last_update = utcnow()
        return CombatStopped(stats=combat.summary())

    # -------------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------------

    def _require_item(self, state: GameState, item_id: str | None, action: str) -> InventoryItem:
        entry = state.find_item(item_id) if item_id else None
        if entry is None:
            raise ItemNotFoundError("Item not found in inventory", item_id=item_id, action=action)
        return entry

    def _equip_item(self, state: GameState, action: EquipItem) -> ItemEquipped:
        entry = self._require_item(state, action.item_id, action.action)
        try:
            slot = EquipmentSlot(action.slot)
        except ValueError:
            raise InvalidSlotError(
                "Invalid equipment slot",
                action=action.action,
                details={"slot": action.slot},
            ) from None

        equipment = state.character.equipment
        item_id = entry.item.id
        displaced_id = equipment.get(slot)
        if displaced_id == item_id:
            displaced_id = None

        previous_slot = equipment.slot_of(item_id)
        if previous_slot is not None and previous_slot != slot:
            equipment.put(previous_slot, None)

        # Free the target's grid position before placing the displaced item
        entry.position = None
        equipment.put(slot, item_id)

        if displaced_id is not None:
            displaced = state.find_item(displaced_id)
            if displaced is not None:
                displaced.position = state.next_free_position()

        return ItemEquipped(
            slot=slot,
            item=entry.item.model_copy(deep=True),
            unequipped_item_id=displaced_id,
        )

    def _use_item(self, state: GameState, action: UseItem) -> ItemUsed:
        entry = self._require_item(state, action.item_id, action.action)
        if not entry.item.type.is_usable:
            raise ItemNotUsableError(
                "Item cannot be used",
                action=action.action,
                details={"item_id": entry.item.id, "item_type": entry.item.type.value},
            )

        if entry.quantity > 1:
            entry.quantity -= 1
            remaining = entry.quantity
        else:
            state.inventory.remove(entry)
            remaining = 0
            slot = state.character.equipment.slot_of(entry.item.id)
            if slot is not None:
                state.character.equipment.put(slot, None)

        return ItemUsed(
            item_id=entry.item.id,
            remaining_quantity=remaining,
            effects=entry.item.stats.effects(),
        )

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def _level_up(self, state: GameState, action: LevelUp) -> StatIncreased:
        stats = state.character.stats
        new_value = spend_point(stats, action.stat)
        return StatIncreased(
            stat=str(action.stat),
            new_value=new_value,
            remaining_points=stats.available_points,
        )


__all__ = [
    "ActionResolver",
    "ActionResult",
    "CombatStarted",
    "CombatStopped",
    "ItemEquipped",
    "ItemUsed",
    "StatIncreased",
]
