"""Character roster: creation, lookup, profile updates and deletion.

A user owns up to ``max_characters_per_user`` characters with distinct
names. Characters of other users are reported as not found.
"""

from __future__ import annotations

import itertools
import threading

from idle_rpg.core.config import GameSettings
from idle_rpg.core.exceptions import (
    CharacterLimitReachedError,
    CharacterNameTakenError,
    CharacterNotFoundError,
)
from idle_rpg.core.logging import get_logger
from idle_rpg.engine.stats import StatAllocation, allocate_stats
from idle_rpg.models.character import Character, CharacterStats
from idle_rpg.models.enums import CharacterClass
from idle_rpg.storage.repository import InMemoryRepository, Repository


logger = get_logger(__name__)


CLASS_BASE_STATS: dict[CharacterClass, CharacterStats] = {
    CharacterClass.WARRIOR: CharacterStats(strength=15, dexterity=10, intelligence=8, vitality=12),
    CharacterClass.MAGE: CharacterStats(strength=8, dexterity=10, intelligence=15, vitality=12),
    CharacterClass.ROGUE: CharacterStats(strength=10, dexterity=15, intelligence=10, vitality=10),
    CharacterClass.PALADIN: CharacterStats(strength=12, dexterity=10, intelligence=12, vitality=11),
    CharacterClass.NECROMANCER: CharacterStats(strength=8, dexterity=12, intelligence=15, vitality=10),
}
"""Starting attributes per class; new characters have no unspent points."""


class CharacterService:
    """Per-user character roster.

    Args:
        settings: Game rule settings (character slot count).
        characters: Repository holding characters keyed by id.
    """

    def __init__(
        self,
        settings: GameSettings,
        characters: Repository[Character] | None = None,
    ) -> None:
        self._settings = settings
        self._characters = (
            characters if characters is not None else InMemoryRepository[Character]("characters")
        )
        self._ids = itertools.count(len(self._characters.values()) + 1)
        self._lock = threading.Lock()

    def _owned_by(self, user_id: str) -> list[Character]:
        return [c for c in self._characters.values() if c.user_id == user_id]

    def create(self, user_id: str, name: str, character_class: CharacterClass) -> Character:
        """Create a level 1 character with its class's base stats.

        Raises:
            CharacterNameTakenError: If the user has a character named ``name``.
            CharacterLimitReachedError: If the user's slots are full.
        """
        with self._lock:
            owned = self._owned_by(user_id)
            if any(c.name == name for c in owned):
                raise CharacterNameTakenError("Character with this name already exists")

            limit = self._settings.max_characters_per_user
            if len(owned) >= limit:
                raise CharacterLimitReachedError(
                    f"Maximum character limit reached ({limit} characters)",
                    details={"limit": limit},
                )

            character = Character(
                id=str(next(self._ids)),
                user_id=user_id,
                name=name,
                character_class=character_class,
                stats=CLASS_BASE_STATS[character_class].model_copy(),
            )
            self._characters.set(character.id, character)

        logger.info(
            "Character created",
            user_id=user_id,
            character_id=character.id,
            character_class=character_class.value,
        )
        return character

    def list_characters(self, user_id: str) -> list[Character]:
        """All characters of ``user_id`` in creation order."""
        return self._owned_by(user_id)

    def find(self, character_id: str) -> Character | None:
        """Look a character up regardless of owner."""
        stored = self._characters.get(character_id)
        return stored.value if stored is not None else None

    def get(self, user_id: str, character_id: str) -> Character:
        """Return a character owned by ``user_id``.

        Raises:
            CharacterNotFoundError: If missing or owned by someone else.
        """
        character = self.find(character_id)
        if character is None or character.user_id != user_id:
            raise CharacterNotFoundError("Character not found", character_id=character_id)
        return character

    def update(
        self,
        user_id: str,
        character_id: str,
        *,
        name: str | None = None,
        stats: StatAllocation | None = None,
    ) -> Character:
        """Rename a character and/or re-allocate its stats.

        Raises:
            CharacterNotFoundError: If missing or owned by someone else.
            CharacterNameTakenError: If another of the user's characters has ``name``.
            InsufficientPointsError: If ``stats`` uses more points than the pool.
        """
        with self._lock:
            character = self.get(user_id, character_id)

            if name and name != character.name:
                if any(c.name == name and c.id != character_id for c in self._owned_by(user_id)):
                    raise CharacterNameTakenError(
                        "Character name already taken",
                        character_id=character_id,
                    )
                character.name = name

            if stats is not None:
                allocate_stats(character.stats, stats)

            character.touch()
            self._characters.set(character.id, character)

        logger.info("Character updated", user_id=user_id, character_id=character_id)
        return character

    def delete(self, user_id: str, character_id: str) -> None:
        """Delete a character owned by ``user_id``.

        Raises:
            CharacterNotFoundError: If missing or owned by someone else.
        """
        with self._lock:
            self.get(user_id, character_id)
            self._characters.delete(character_id)
        logger.info("Character deleted", user_id=user_id, character_id=character_id)


__all__ = [
    "CLASS_BASE_STATS",
    "CharacterService",
]
