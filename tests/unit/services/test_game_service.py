"""Tests for game-state loading and action processing."""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from idle_rpg.core.config import GameSettings
from idle_rpg.core.exceptions import (
    AlreadyInCombatError,
    CharacterNotFoundError,
    GameStateNotFoundError,
    NotInCombatError,
    StaleWriteError,
)
from idle_rpg.engine.actions import parse_action
from idle_rpg.engine.resolver import CombatStarted
from idle_rpg.models.character import Character, CharacterStats
from idle_rpg.models.enums import CharacterClass
from idle_rpg.models.game_state import GameState
from idle_rpg.services.game import GameService, new_game_state
from idle_rpg.storage.repository import InMemoryRepository, Repository, Versioned


class InterferingRepository(InMemoryRepository[GameState]):
    """Repository that lets another writer sneak in before some swaps."""

    def __init__(self, conflicts: int) -> None:
        super().__init__("game_states")
        self.conflicts = conflicts
        self.swap_attempts = 0

    def compare_and_swap(self, key: str, expected_version: int, value: GameState) -> int:
        self.swap_attempts += 1
        if self.conflicts > 0:
            self.conflicts -= 1
            current = self.get(key)
            assert current is not None
            self.set(key, current.value)
        return super().compare_and_swap(key, expected_version, value)


class DictRepository:
    """Minimal single-threaded Repository backed by a plain dict."""

    def __init__(self) -> None:
        self.items: dict[str, Versioned[GameState]] = {}

    def get(self, key: str) -> Versioned[GameState] | None:
        stored = self.items.get(key)
        if stored is None:
            return None
        return Versioned(stored.value.model_copy(deep=True), stored.version)

    def set(self, key: str, value: GameState) -> int:
        stored = self.items.get(key)
        version = stored.version + 1 if stored is not None else 1
        self.items[key] = Versioned(value.model_copy(deep=True), version)
        return version

    def set_if_absent(
        self, key: str, factory: Callable[[], GameState]
    ) -> Versioned[GameState]:
        if key not in self.items:
            self.set(key, factory())
        stored = self.get(key)
        assert stored is not None
        return stored

    def compare_and_swap(self, key: str, expected_version: int, value: GameState) -> int:
        stored = self.items.get(key)
        if (stored.version if stored is not None else 0) != expected_version:
            raise StaleWriteError("Record was modified concurrently", key=key)
        return self.set(key, value)

    def delete(self, key: str) -> bool:
        return self.items.pop(key, None) is not None

    def values(self) -> list[GameState]:
        return [stored.value.model_copy(deep=True) for stored in self.items.values()]


@pytest.fixture
def game(game_settings: GameSettings) -> GameService:
    return GameService(game_settings)


class TestNewGameState:
    """Tests for initial game states."""

    def test_placeholder_character(self) -> None:
        state = new_game_state("7", "1")

        assert state.character.id == "7"
        assert state.character.user_id == "1"
        assert state.character.name == "New Character"
        assert state.character.character_class is CharacterClass.WARRIOR
        assert state.character.level == 1
        assert state.currency("gold") == 100
        assert state.inventory == []
        assert not state.combat.is_active
        assert state.combat.current_area == "starting-area"

    def test_seeded_from_roster(self) -> None:
        """Test that a roster character is copied into the state."""
        character = Character(
            id="3",
            user_id="1",
            name="Morgana",
            character_class=CharacterClass.MAGE,
            stats=CharacterStats(strength=8, dexterity=10, intelligence=15, vitality=12),
        )

        state = new_game_state("3", "1", character=character)
        state.character.name = "Changed"

        assert state.character.character_class is CharacterClass.MAGE
        assert state.character.stats.intelligence == 15
        assert character.name == "Morgana"

    def test_settings_apply(self) -> None:
        state = new_game_state(
            "1", "1", settings=GameSettings(starting_gold=5, default_area="crypt")
        )

        assert state.currency("gold") == 5
        assert state.combat.current_area == "crypt"


class TestGetState:
    """Tests for get_state."""

    def test_created_on_first_access(self, game: GameService) -> None:
        first = game.get_state("1", "10")
        first.character.name = "Local change"

        second = game.get_state("1", "10")

        assert second.character.name == "New Character"

    def test_other_user(self, game: GameService) -> None:
        game.get_state("1", "10")

        with pytest.raises(CharacterNotFoundError):
            game.get_state("2", "10")


class TestPerformAction:
    """Tests for perform_action."""

    def test_requires_existing_state(self, game: GameService) -> None:
        with pytest.raises(GameStateNotFoundError):
            game.perform_action("1", "10", parse_action("stopCombat"))

    def test_success_is_stored(self, game: GameService) -> None:
        """Test that a successful action is visible on the next read."""
        game.get_state("1", "10")

        result = game.perform_action("1", "10", parse_action("startCombat", {"area": "forest"}))

        assert isinstance(result, CombatStarted)
        state = game.get_state("1", "10")
        assert state.combat.is_active
        assert state.combat.current_area == "forest"
        assert state.combat.current_monster == result.monster

    def test_failure_is_not_stored(self, game_settings: GameSettings) -> None:
        """Test that a rejected action leaves the stored state and version alone."""
        states = InMemoryRepository[GameState]("game_states")
        game = GameService(game_settings, states=states)
        game.get_state("1", "10")
        before = states.get("10")
        assert before is not None

        with pytest.raises(NotInCombatError):
            game.perform_action("1", "10", parse_action("stopCombat"))

        after = states.get("10")
        assert after is not None
        assert after.version == before.version
        assert after.value == before.value

    def test_other_user(self, game: GameService) -> None:
        game.get_state("1", "10")

        with pytest.raises(CharacterNotFoundError):
            game.perform_action("2", "10", parse_action("startCombat"))

    def test_stale_write_is_retried(self, game_settings: GameSettings) -> None:
        """Test that a lost race is retried from a fresh read."""
        states = InterferingRepository(conflicts=1)
        game = GameService(game_settings, states=states)
        game.get_state("1", "10")

        game.perform_action("1", "10", parse_action("startCombat"))

        assert states.swap_attempts == 2
        assert game.get_state("1", "10").combat.is_active

    def test_retries_exhausted(self) -> None:
        settings = GameSettings(action_retry_attempts=2)
        states = InterferingRepository(conflicts=10)
        game = GameService(settings, states=states)
        game.get_state("1", "10")

        with pytest.raises(StaleWriteError):
            game.perform_action("1", "10", parse_action("startCombat"))

        assert states.swap_attempts == 2

    def test_rule_errors_are_not_retried(self, game_settings: GameSettings) -> None:
        states = InterferingRepository(conflicts=0)
        game = GameService(game_settings, states=states)
        game.get_state("1", "10")
        game.perform_action("1", "10", parse_action("startCombat"))

        with pytest.raises(AlreadyInCombatError):
            game.perform_action("1", "10", parse_action("startCombat"))

        assert states.swap_attempts == 1

    def test_concurrent_actions_are_serialized(self, game: GameService) -> None:
        """Test that only one of many simultaneous starts succeeds."""
        game.get_state("1", "10")
        outcomes: list[str] = []
        barrier = threading.Barrier(6)

        def start() -> None:
            barrier.wait()
            try:
                game.perform_action("1", "10", parse_action("startCombat"))
                outcomes.append("started")
            except AlreadyInCombatError:
                outcomes.append("rejected")

        threads = [threading.Thread(target=start) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("started") == 1
        assert outcomes.count("rejected") == 5


class TestRosterOwnership:
    """Tests for states stored under ids the roster later assigns."""

    @pytest.fixture
    def roster_character(self) -> Character:
        return Character(id="1", user_id="bob", name="Bob", character_class=CharacterClass.ROGUE)

    def test_owner_reclaims_squatted_state(
        self, game: GameService, roster_character: Character
    ) -> None:
        """Test that a placeholder made by another user is replaced for the owner."""
        game.get_state("mallory", "1")

        state = game.get_state("bob", "1", character=roster_character)

        assert state.character.user_id == "bob"
        assert state.character.name == "Bob"
        assert state.character.character_class is CharacterClass.ROGUE
        with pytest.raises(CharacterNotFoundError):
            game.get_state("mallory", "1")

    def test_owner_acts_on_squatted_state(
        self, game: GameService, roster_character: Character
    ) -> None:
        game.get_state("mallory", "1")

        result = game.perform_action(
            "bob", "1", parse_action("startCombat"), character=roster_character
        )

        assert isinstance(result, CombatStarted)
        assert game.get_state("bob", "1", character=roster_character).combat.is_active
        with pytest.raises(CharacterNotFoundError):
            game.perform_action("mallory", "1", parse_action("stopCombat"))

    def test_owned_state_is_kept(self, game: GameService, roster_character: Character) -> None:
        game.get_state("bob", "1", character=roster_character)
        game.perform_action("bob", "1", parse_action("startCombat"), character=roster_character)

        state = game.get_state("bob", "1", character=roster_character)

        assert state.combat.is_active


class TestDiscard:
    """Tests for discard."""

    def test_removes_state_and_lock(self, game: GameService) -> None:
        game.get_state("1", "10")
        game.perform_action("1", "10", parse_action("startCombat"))

        assert game.discard("10") is True

        assert "10" not in game._locks
        with pytest.raises(GameStateNotFoundError):
            game.perform_action("1", "10", parse_action("stopCombat"))

    def test_missing_state(self, game: GameService) -> None:
        assert game.discard("10") is False
        assert game._locks == {}

    def test_unknown_id_does_not_allocate_a_lock(self, game: GameService) -> None:
        with pytest.raises(GameStateNotFoundError):
            game.perform_action("1", "missing", parse_action("stopCombat"))

        assert "missing" not in game._locks


class TestRepositoryInjection:
    """Tests for running the service on another Repository implementation."""

    def test_implementations_satisfy_protocol(self) -> None:
        assert isinstance(InMemoryRepository[GameState](), Repository)
        assert isinstance(DictRepository(), Repository)

    def test_actions_on_injected_repository(self, game_settings: GameSettings) -> None:
        states = DictRepository()
        game = GameService(game_settings, states=states)
        game.get_state("1", "10")

        game.perform_action("1", "10", parse_action("startCombat", {"area": "forest"}))

        assert states.items["10"].version == 2
        assert states.items["10"].value.combat.current_area == "forest"
