"""Tests for the Pydantic data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from idle_rpg.engine.bestiary import DEFAULT_MONSTERS
from idle_rpg.models.character import Character, CharacterStats, Equipment
from idle_rpg.models.combat import CombatState, LootEntry
from idle_rpg.models.enums import CharacterClass, EquipmentSlot, ItemType
from idle_rpg.models.game_state import GameState
from idle_rpg.models.items import InventoryItem, Item, ItemRequirements, ItemStats
from idle_rpg.models.user import User


class TestCharacterStats:
    """Tests for CharacterStats."""

    def test_defaults(self) -> None:
        stats = CharacterStats()

        assert stats.allocated_points == 40
        assert stats.available_points == 0
        assert stats.total_pool == 40

    def test_negative_values_rejected(self) -> None:
        """Test that stats cannot go below zero."""
        with pytest.raises(ValidationError):
            CharacterStats(strength=-1)

        stats = CharacterStats()
        with pytest.raises(ValidationError):
            stats.available_points = -1

    def test_camel_case_round_trip(self) -> None:
        stats = CharacterStats(available_points=3)

        data = stats.to_api()

        assert data["availablePoints"] == 3
        assert CharacterStats.model_validate(data) == stats


class TestEquipment:
    """Tests for Equipment slots."""

    def test_all_slots_empty_by_default(self) -> None:
        equipment = Equipment()

        assert equipment.equipped_ids() == []
        assert all(equipment.get(slot) is None for slot in EquipmentSlot)

    def test_put_and_find(self) -> None:
        equipment = Equipment()

        equipment.put(EquipmentSlot.RING2, "gold-ring")

        assert equipment.ring2 == "gold-ring"
        assert equipment.slot_of("gold-ring") is EquipmentSlot.RING2
        assert equipment.slot_of("other") is None

    def test_ten_slots(self) -> None:
        assert len(EquipmentSlot) == 10
        assert set(Equipment.model_fields) == {slot.value for slot in EquipmentSlot}


class TestCharacter:
    """Tests for the Character model."""

    def test_class_alias(self) -> None:
        """Test that the class field uses the ``class`` wire name."""
        character = Character.model_validate(
            {"id": "1", "userId": "9", "name": "Hero", "class": "mage"}
        )

        assert character.character_class is CharacterClass.MAGE
        assert character.to_api()["class"] == "mage"
        assert "characterClass" not in character.to_api()

    def test_touch_updates_last_active(self) -> None:
        character = Character(id="1", user_id="1", name="Hero")
        before = character.last_active

        character.touch()

        assert character.last_active >= before

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Character.model_validate({"id": "1", "userId": "1", "name": "Hero", "mana": 5})


class TestItems:
    """Tests for Item and InventoryItem."""

    def test_effects_only_lists_set_stats(self) -> None:
        stats = ItemStats(health=50, attack_speed=1.2)

        assert stats.effects() == {"health": 50, "attackSpeed": 1.2}

    def test_requirements_class_alias(self) -> None:
        requirements = ItemRequirements.model_validate({"level": 3, "class": ["warrior"]})

        assert requirements.classes == [CharacterClass.WARRIOR]

    def test_consumable_is_usable(self) -> None:
        assert ItemType.CONSUMABLE.is_usable
        assert not ItemType.WEAPON.is_usable

    def test_quantity_cannot_be_negative(self, health_potion: Item) -> None:
        with pytest.raises(ValidationError):
            InventoryItem(item=health_potion, quantity=-1)

    def test_position_none_means_equipped(self, health_potion: Item) -> None:
        entry = InventoryItem(item=health_potion)

        assert entry.position is None
        assert entry.item_id == "health-potion"


class TestCombatState:
    """Tests for the CombatState invariant."""

    def test_monster_requires_active(self) -> None:
        """Test that a monster on an inactive state is rejected."""
        with pytest.raises(ValidationError):
            CombatState(
                character_id="1",
                current_monster=DEFAULT_MONSTERS[0],
                is_active=False,
            )

    def test_active_with_monster(self) -> None:
        combat = CombatState(
            character_id="1",
            current_monster=DEFAULT_MONSTERS[0],
            is_active=True,
        )

        assert combat.to_summary() == {
            "area": "starting-area",
            "active": True,
            "monster": "goblin-1",
        }

    def test_deactivating_with_monster_rejected(self) -> None:
        combat = CombatState(character_id="1", current_monster=DEFAULT_MONSTERS[0], is_active=True)

        with pytest.raises(ValidationError):
            combat.is_active = False

    def test_loot_entry_level_window(self) -> None:
        entry = LootEntry(item_id="x", drop_rate=0.5, min_level=2, max_level=4)

        assert not entry.applies_to(1)
        assert entry.applies_to(3)
        assert not entry.applies_to(5)

    def test_drop_rate_bounds(self) -> None:
        with pytest.raises(ValidationError):
            LootEntry(item_id="x", drop_rate=1.5)


class TestGameState:
    """Tests for GameState helpers."""

    def test_find_item(self, game_state: GameState) -> None:
        assert game_state.find_item("iron-sword") is not None
        assert game_state.find_item("missing") is None

    def test_next_free_position_fills_gaps(self, game_state: GameState) -> None:
        """Test that the allocator returns the lowest unused position."""
        assert game_state.next_free_position() == 3

        game_state.inventory[1].position = None

        assert game_state.next_free_position() == 1

    def test_currency(self, game_state: GameState) -> None:
        assert game_state.currency("gold") == 100
        assert game_state.currency("gems") == 0

        assert game_state.add_currency("gold", 5) == 105
        assert game_state.add_currency("gems", 2) == 2
        assert game_state.currency("gems") == 2

    def test_item_count(self, game_state: GameState) -> None:
        assert game_state.item_count() == 4

    def test_to_api_uses_camel_case(self, game_state: GameState) -> None:
        data = game_state.to_api()

        assert data["combat"]["isActive"] is False
        assert data["character"]["stats"]["availablePoints"] == 0
        assert data["settings"]["combatSpeed"] == 1


class TestUser:
    """Tests for the User model."""

    def test_profile_hides_password_hash(self) -> None:
        user = User(id="1", username="alice", email="a@example.com", password_hash="secret-hash")

        profile = user.to_profile().to_api()

        assert "passwordHash" not in profile
        assert profile["username"] == "alice"
        assert "secret-hash" not in repr(user)
