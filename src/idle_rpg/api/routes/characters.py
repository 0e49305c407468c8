"""Character roster routes. All of them require authentication."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from idle_rpg.api.deps import CurrentUser, ServicesDep
from idle_rpg.api.schemas import CreateCharacterRequest, UpdateCharacterRequest, envelope


router = APIRouter(prefix="/characters", tags=["characters"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_character(
    body: CreateCharacterRequest,
    user: CurrentUser,
    services: ServicesDep,
) -> dict[str, Any]:
    character = services.characters.create(user.id, body.name, body.character_class)
    return envelope(character.to_api(), message="Character created successfully")


@router.get("")
def list_characters(user: CurrentUser, services: ServicesDep) -> dict[str, Any]:
    characters = services.characters.list_characters(user.id)
    return envelope(
        [c.to_api() for c in characters],
        message="Characters retrieved successfully",
    )


@router.get("/{character_id}")
def get_character(character_id: str, user: CurrentUser, services: ServicesDep) -> dict[str, Any]:
    character = services.characters.get(user.id, character_id)
    return envelope(character.to_api(), message="Character retrieved successfully")


@router.put("/{character_id}")
def update_character(
    character_id: str,
    body: UpdateCharacterRequest,
    user: CurrentUser,
    services: ServicesDep,
) -> dict[str, Any]:
    character = services.characters.update(
        user.id,
        character_id,
        name=body.name,
        stats=body.stats,
    )
    return envelope(character.to_api(), message="Character updated successfully")


@router.delete("/{character_id}")
def delete_character(character_id: str, user: CurrentUser, services: ServicesDep) -> dict[str, Any]:
    services.characters.delete(user.id, character_id)
    services.game.discard(character_id)
    return envelope(message="Character deleted successfully")
