"""Game routes: fetch a character's game state and perform actions."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from idle_rpg.api.deps import CurrentUser, Services, ServicesDep
from idle_rpg.api.schemas import GameActionRequest, envelope
from idle_rpg.core.exceptions import CharacterNotFoundError
from idle_rpg.core.logging import bind_context, get_logger
from idle_rpg.engine.actions import parse_action
from idle_rpg.models.character import Character
from idle_rpg.services.identity import TokenClaims


logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


def _roster_character(
    services: Services, user: TokenClaims, character_id: str
) -> Character | None:
    # Unknown ids get a placeholder character; roster ids must be the caller's
    character = services.characters.find(character_id)
    if character is not None and character.user_id != user.id:
        raise CharacterNotFoundError("Character not found", character_id=character_id)
    return character


@router.get("/{character_id}/state")
def get_game_state(character_id: str, user: CurrentUser, services: ServicesDep) -> dict[str, Any]:
    bind_context(character_id=character_id)
    character = _roster_character(services, user, character_id)
    state = services.game.get_state(user.id, character_id, character=character)
    return envelope(state.to_api(), message="Game state retrieved successfully")


@router.post("/{character_id}/action")
def perform_game_action(
    character_id: str,
    body: GameActionRequest,
    user: CurrentUser,
    services: ServicesDep,
) -> dict[str, Any]:
    bind_context(character_id=character_id, action=body.action)
    action = parse_action(body.action, body.data)
    character = _roster_character(services, user, character_id)
    result = services.game.perform_action(user.id, character_id, action, character=character)
    return envelope(result.to_api(), message=f"Action '{body.action}' performed successfully")
