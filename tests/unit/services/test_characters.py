"""Tests for the character roster service."""

from __future__ import annotations

import pytest

from idle_rpg.core.config import GameSettings
from idle_rpg.core.exceptions import (
    CharacterLimitReachedError,
    CharacterNameTakenError,
    CharacterNotFoundError,
    InsufficientPointsError,
)
from idle_rpg.engine.stats import StatAllocation
from idle_rpg.models.enums import CharacterClass
from idle_rpg.services.characters import CLASS_BASE_STATS, CharacterService


@pytest.fixture
def characters(game_settings: GameSettings) -> CharacterService:
    return CharacterService(game_settings)


class TestCreate:
    """Tests for character creation."""

    @pytest.mark.parametrize("character_class", list(CharacterClass))
    def test_class_base_stats(
        self, characters: CharacterService, character_class: CharacterClass
    ) -> None:
        """Test that each class starts with its base stats and no free points."""
        character = characters.create("1", "Hero", character_class)

        assert character.stats == CLASS_BASE_STATS[character_class]
        assert character.stats.available_points == 0
        assert character.level == 1

    def test_warrior_stats(self, characters: CharacterService) -> None:
        stats = characters.create("1", "Conan", CharacterClass.WARRIOR).stats

        assert (stats.strength, stats.dexterity, stats.intelligence, stats.vitality) == (
            15,
            10,
            8,
            12,
        )

    def test_sequential_ids(self, characters: CharacterService) -> None:
        first = characters.create("1", "One", CharacterClass.MAGE)
        second = characters.create("2", "Two", CharacterClass.ROGUE)

        assert (first.id, second.id) == ("1", "2")

    def test_name_taken_per_user(self, characters: CharacterService) -> None:
        """Test that names are unique per user only."""
        characters.create("1", "Hero", CharacterClass.MAGE)

        with pytest.raises(CharacterNameTakenError):
            characters.create("1", "Hero", CharacterClass.ROGUE)

        assert characters.create("2", "Hero", CharacterClass.ROGUE).user_id == "2"

    def test_limit_reached(self, characters: CharacterService) -> None:
        for n in range(5):
            characters.create("1", f"Hero{n}", CharacterClass.PALADIN)

        with pytest.raises(CharacterLimitReachedError) as exc_info:
            characters.create("1", "OneTooMany", CharacterClass.PALADIN)

        assert exc_info.value.details["limit"] == 5
        assert len(characters.list_characters("1")) == 5

    def test_custom_limit(self) -> None:
        characters = CharacterService(GameSettings(max_characters_per_user=1))
        characters.create("1", "Solo", CharacterClass.NECROMANCER)

        with pytest.raises(CharacterLimitReachedError):
            characters.create("1", "Duo", CharacterClass.NECROMANCER)


class TestLookup:
    """Tests for listing and fetching characters."""

    def test_list_only_own(self, characters: CharacterService) -> None:
        characters.create("1", "Mine", CharacterClass.MAGE)
        characters.create("2", "Theirs", CharacterClass.MAGE)

        assert [c.name for c in characters.list_characters("1")] == ["Mine"]

    def test_get_other_users_character(self, characters: CharacterService) -> None:
        """Test that other users' characters are reported as missing."""
        created = characters.create("2", "Theirs", CharacterClass.MAGE)

        with pytest.raises(CharacterNotFoundError):
            characters.get("1", created.id)

        assert characters.find(created.id) is not None

    def test_get_missing(self, characters: CharacterService) -> None:
        with pytest.raises(CharacterNotFoundError):
            characters.get("1", "99")


class TestUpdate:
    """Tests for renaming and stat re-allocation."""

    def test_rename(self, characters: CharacterService) -> None:
        created = characters.create("1", "Old", CharacterClass.ROGUE)

        updated = characters.update("1", created.id, name="New")

        assert updated.name == "New"
        assert characters.get("1", created.id).name == "New"

    def test_rename_to_taken_name(self, characters: CharacterService) -> None:
        characters.create("1", "Taken", CharacterClass.ROGUE)
        other = characters.create("1", "Other", CharacterClass.ROGUE)

        with pytest.raises(CharacterNameTakenError):
            characters.update("1", other.id, name="Taken")

    def test_reallocate_stats(self, characters: CharacterService) -> None:
        """Test a full re-allocation keeps the pool size."""
        created = characters.create("1", "Tank", CharacterClass.WARRIOR)

        updated = characters.update(
            "1",
            created.id,
            stats=StatAllocation(strength=10, dexterity=10, intelligence=10, vitality=10),
        )

        assert updated.stats.strength == 10
        assert updated.stats.available_points == 5
        assert updated.stats.total_pool == created.stats.total_pool

    def test_over_allocation_is_rejected(self, characters: CharacterService) -> None:
        created = characters.create("1", "Greedy", CharacterClass.WARRIOR)

        with pytest.raises(InsufficientPointsError):
            characters.update("1", created.id, stats=StatAllocation(strength=50))

        assert characters.get("1", created.id).stats == created.stats

    def test_update_touches_last_active(self, characters: CharacterService) -> None:
        created = characters.create("1", "Busy", CharacterClass.WARRIOR)

        updated = characters.update("1", created.id, name="Busier")

        assert updated.last_active >= created.last_active


class TestDelete:
    """Tests for character deletion."""

    def test_delete(self, characters: CharacterService) -> None:
        created = characters.create("1", "Doomed", CharacterClass.MAGE)

        characters.delete("1", created.id)

        assert characters.list_characters("1") == []

    def test_delete_other_users_character(self, characters: CharacterService) -> None:
        created = characters.create("2", "Safe", CharacterClass.MAGE)

        with pytest.raises(CharacterNotFoundError):
            characters.delete("1", created.id)

        assert characters.find(created.id) is not None

    def test_delete_frees_a_slot(self) -> None:
        characters = CharacterService(GameSettings(max_characters_per_user=1))
        created = characters.create("1", "First", CharacterClass.MAGE)

        characters.delete("1", created.id)

        assert characters.create("1", "Second", CharacterClass.MAGE).name == "Second"
