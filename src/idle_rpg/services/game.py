"""Game state loading and action processing.

Actions on one character are serialized with a per-character lock and
committed with compare-and-swap against the version that was read. The
resolver works on a private copy of the state, so a failing action is
never written. A write that loses a race (possible when the repository
is shared with another process) is retried from a fresh read.
"""

from __future__ import annotations

import random
import threading

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from idle_rpg.core.config import GameSettings
from idle_rpg.core.constants import GOLD_CURRENCY, PLACEHOLDER_CHARACTER_NAME
from idle_rpg.core.exceptions import (
    CharacterNotFoundError,
    GameStateNotFoundError,
    StaleWriteError,
)
from idle_rpg.core.logging import get_logger
from idle_rpg.engine.actions import GameAction
from idle_rpg.engine.bestiary import Bestiary
from idle_rpg.engine.resolver import ActionResolver, ActionResult
from idle_rpg.models.character import Character
from idle_rpg.models.combat import CombatState
from idle_rpg.models.game_state import CurrencyAmount, GameState, PlayerSettings
from idle_rpg.storage.repository import InMemoryRepository, Repository, Versioned


logger = get_logger(__name__)


def new_game_state(
    character_id: str,
    user_id: str,
    *,
    character: Character | None = None,
    settings: GameSettings | None = None,
) -> GameState:
    """Build the initial game state for a character.

    Args:
        character_id: Id the state is stored under.
        user_id: Owner of the state.
        character: Roster character to start from. Without one a
            placeholder level 1 warrior is used.
        settings: Game settings for starting gold and area.

    Returns:
        A fresh, idle game state.
    """
    settings = settings or GameSettings()
    if character is None:
        character = Character(id=character_id, user_id=user_id, name=PLACEHOLDER_CHARACTER_NAME)
    else:
        character = character.model_copy(deep=True)

    return GameState(
        character=character,
        combat=CombatState(character_id=character_id, current_area=settings.default_area),
        currencies=[CurrencyAmount(type=GOLD_CURRENCY, amount=settings.starting_gold)],
        settings=PlayerSettings(),
    )




class GameService:
    """Owns the game-state repository and runs actions against it.

    Args:
        settings: Game rule settings.
        states: Repository holding game states keyed by character id.
        resolver: Action resolver; built from ``settings`` when omitted.
    """

    def __init__(
        self,
        settings: GameSettings,
        states: Repository[GameState] | None = None,
        resolver: ActionResolver | None = None,
    ) -> None:
        self._settings = settings
        self._states = states if states is not None else InMemoryRepository[GameState]("game_states")
        self._resolver = resolver or ActionResolver(
            bestiary=Bestiary(),
            rng=random.Random(settings.rng_seed),
            default_area=settings.default_area,
            level_margin=settings.monster_level_margin,
        )
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, character_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(character_id, threading.Lock())

    def _load(self, character_id: str) -> Versioned[GameState]:
        stored = self._states.get(character_id)
        if stored is None:
            raise GameStateNotFoundError(
                "Game state not found", details={"character_id": character_id}
            )
        return stored

    def _owned_state(
        self,
        character_id: str,
        stored: Versioned[GameState],
        character: Character | None,
    ) -> GameState:
        """The stored state, or a fresh one if it does not belong to the roster owner."""
        state = stored.value
        if character is None or state.character.user_id == character.user_id:
            return state

        logger.warning(
            "Game state reseeded for roster owner",
            character_id=character_id,
            previous_user_id=state.character.user_id,
            user_id=character.user_id,
        )
        return new_game_state(
            character_id, character.user_id, character=character, settings=self._settings
        )

    def get_state(
        self,
        user_id: str,
        character_id: str,
        *,
        character: Character | None = None,
    ) -> GameState:
        """Return the game state of a character, creating it on first access.

        A state stored under the id of a roster character always belongs
        to that character's owner. One left behind by another user is
        replaced with a state seeded from ``character``.

        Args:
            user_id: Requesting user.
            character_id: Character whose state is wanted.
            character: Roster entry for ``character_id``, if there is one.

        Raises:
            CharacterNotFoundError: If the state belongs to another user.
        """
        with self._lock_for(character_id):
            stored = self._states.set_if_absent(
                character_id,
                lambda: new_game_state(
                    character_id, user_id, character=character, settings=self._settings
                ),
            )
            state = self._owned_state(character_id, stored, character)
            if state is not stored.value:
                self._states.compare_and_swap(character_id, stored.version, state)

        if state.character.user_id != user_id:
            raise CharacterNotFoundError("Character not found", character_id=character_id)
        return state

    def perform_action(
        self,
        user_id: str,
        character_id: str,
        action: GameAction,
        *,
        character: Character | None = None,
    ) -> ActionResult:
        """Apply an action to a character's stored game state.

        Args:
            user_id: Requesting user.
            character_id: Character to act on.
            action: Decoded action.
            character: Roster entry for ``character_id``, if there is one.

        Returns:
            The resolver's result.

        Raises:
            GameStateNotFoundError: If the state was never loaded.
            CharacterNotFoundError: If the state belongs to another user.
            ActionError: If the action's rules reject it; nothing is stored.
            StaleWriteError: If every retry lost a concurrent write.
        """
        self._load(character_id)

        retrying = Retrying(
            retry=retry_if_exception_type(StaleWriteError),
            stop=stop_after_attempt(self._settings.action_retry_attempts),
            wait=wait_exponential(multiplier=0.01, max=0.1),
            reraise=True,
        )
        with self._lock_for(character_id):
            return retrying(self._apply_once, user_id, character_id, action, character)

    def _apply_once(
        self,
        user_id: str,
        character_id: str,
        action: GameAction,
        character: Character | None,
    ) -> ActionResult:
        stored = self._load(character_id)
        state = self._owned_state(character_id, stored, character)
        if state.character.user_id != user_id:
            raise CharacterNotFoundError("Character not found", character_id=character_id)

        result = self._resolver.apply(state, action)
        state.character.touch()
        version = self._states.compare_and_swap(character_id, stored.version, state)
        logger.debug("Game state saved", character_id=character_id, version=version)
        return result

    def discard(self, character_id: str) -> bool:
        """Drop a character's game state and its lock.

        Returns:
            Whether a stored state was removed.
        """
        with self._lock_for(character_id):
            removed = self._states.delete(character_id)
        with self._locks_guard:
            self._locks.pop(character_id, None)

        if removed:
            logger.info("Game state discarded", character_id=character_id)
        return removed


__all__ = [
    "new_game_state",
    "GameService",
]
