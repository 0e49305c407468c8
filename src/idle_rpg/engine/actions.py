"""Typed game actions decoded from ``{action, data}`` request bodies.

Each action name has its own payload model. The request boundary calls
``parse_action`` once; everything past it works with typed actions.

Example:
    >>> action = parse_action("levelUp", {"stat": "strength"})
    >>> isinstance(action, LevelUp)
    True
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from idle_rpg.core.exceptions import InvalidActionError, ValidationError


class _ActionModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class StartCombat(_ActionModel):
    """Start an encounter, optionally in a named area."""

    action: Literal["startCombat"] = "startCombat"
    area: str | None = Field(default=None, min_length=1)


class StopCombat(_ActionModel):
    """Leave the active encounter."""

    action: Literal["stopCombat"] = "stopCombat"


class EquipItem(_ActionModel):
    """Equip an inventory item into a slot.

    ``item_id`` and ``slot`` are checked by the resolver so that unknown
    values surface as ItemNotFound / InvalidSlot.
    """

    action: Literal["equipItem"] = "equipItem"
    item_id: str | None = None
    slot: str | None = None


class UseItem(_ActionModel):
    """Consume one unit of an inventory item."""

    action: Literal["useItem"] = "useItem"
    item_id: str | None = None


class LevelUp(_ActionModel):
    """Spend one stat point on an attribute."""

    action: Literal["levelUp"] = "levelUp"
    stat: str | None = None


GameAction = Annotated[
    StartCombat | StopCombat | EquipItem | UseItem | LevelUp,
    Field(discriminator="action"),
]
"""Discriminated union of all game actions, tagged by ``action``."""

ACTION_NAMES: tuple[str, ...] = ("startCombat", "stopCombat", "equipItem", "useItem", "levelUp")

_adapter: TypeAdapter[Any] = TypeAdapter(GameAction)


def parse_action(name: str, data: dict[str, Any] | None = None) -> GameAction:
    """Decode an action name and its payload into a typed action.

    Args:
        name: Action name as sent by the client.
        data: Optional action payload.

    Returns:
        The typed action.

    Raises:
        InvalidActionError: If ``name`` is not a known action.
        ValidationError: If the payload has the wrong shape.
    """
    if name not in ACTION_NAMES:
        raise InvalidActionError("Invalid action", action=name)

    payload = {**(data or {}), "action": name}
    try:
        return _adapter.validate_python(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"][1:]) or None
        raise ValidationError(
            f"Invalid payload for action '{name}': {first['msg']}",
            field_name=field_name,
            details={"action": name},
        ) from exc


__all__ = [
    "StartCombat",
    "StopCombat",
    "EquipItem",
    "UseItem",
    "LevelUp",
    "GameAction",
    "ACTION_NAMES",
    "parse_action",
]
