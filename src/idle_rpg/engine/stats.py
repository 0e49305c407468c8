"""Stat point bookkeeping.

Two ways change a character's attributes:

* ``spend_point`` moves one unspent point into an attribute (levelUp).
* ``allocate_stats`` re-assigns attributes from a profile update.
  The points a request uses are the sum of the attributes it names;
  attributes it leaves out count as zero towards that sum but keep
  their stored value.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from idle_rpg.core.exceptions import (
    InsufficientPointsError,
    InvalidStatError,
    NoPointsAvailableError,
)
from idle_rpg.core.logging import get_logger
from idle_rpg.models.character import CharacterStats
from idle_rpg.models.enums import StatName


logger = get_logger(__name__)


class StatAllocation(BaseModel):
    """Requested attribute values. Omitted attributes are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    strength: Annotated[int, Field(ge=0)] | None = None
    dexterity: Annotated[int, Field(ge=0)] | None = None
    intelligence: Annotated[int, Field(ge=0)] | None = None
    vitality: Annotated[int, Field(ge=0)] | None = None

    @property
    def points_used(self) -> int:
        """Sum of the requested attributes, omitted ones counted as 0."""
        return sum(getattr(self, stat.value) or 0 for stat in StatName)


def resolve_stat(name: str | None) -> StatName:
    """Map a client stat name to a StatName.

    Raises:
        InvalidStatError: If ``name`` is not an allocatable attribute.
    """
    try:
        return StatName(name)
    except ValueError:
        raise InvalidStatError("Invalid stat", action="levelUp", details={"stat": name}) from None


def spend_point(stats: CharacterStats, stat_name: str | None) -> int:
    """Move one unspent point into an attribute.

    Args:
        stats: Stats to modify in place.
        stat_name: Attribute to raise.

    Returns:
        The attribute's new value.

    Raises:
        NoPointsAvailableError: If there are no unspent points.
        InvalidStatError: If the attribute name is unknown.
    """
    if stats.available_points <= 0:
        raise NoPointsAvailableError("No stat points available", action="levelUp")

    stat = resolve_stat(stat_name)
    new_value = stats.get(stat) + 1
    setattr(stats, stat.value, new_value)
    stats.available_points -= 1
    return new_value


def allocate_stats(stats: CharacterStats, allocation: StatAllocation) -> CharacterStats:
    """Apply a stat re-allocation.

    Args:
        stats: Stats to modify in place.
        allocation: Requested attribute values.

    Returns:
        The modified stats.

    Raises:
        InsufficientPointsError: If the request uses more points than the
            character's pool holds. ``stats`` is unchanged in that case.
    """
    points_available = stats.total_pool
    points_used = allocation.points_used

    if points_used > points_available:
        raise InsufficientPointsError(
            "Not enough stat points available",
            points_used=points_used,
            points_available=points_available,
        )

    for stat in StatName:
        value = getattr(allocation, stat.value)
        if value is not None:
            setattr(stats, stat.value, value)
    stats.available_points = points_available - points_used

    logger.debug(
        "Stats allocated",
        points_used=points_used,
        points_available=points_available,
        remaining=stats.available_points,
    )
    return stats


__all__ = [
    "StatAllocation",
    "resolve_stat",
    "spend_point",
    "allocate_stats",
]
