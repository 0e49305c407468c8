"""Application services used by the HTTP layer.

Submodules:
    identity: Accounts, password hashing and bearer tokens.
    characters: Per-user character roster.
    game: Game state loading and action processing.
"""

from __future__ import annotations

from idle_rpg.services.characters import CLASS_BASE_STATS, CharacterService
from idle_rpg.services.game import GameService, new_game_state
from idle_rpg.services.identity import (
    AuthResult,
    IdentityService,
    TokenClaims,
    hash_password,
    verify_password,
)


__all__ = [
    "CLASS_BASE_STATS",
    "CharacterService",
    "GameService",
    "new_game_state",
    "AuthResult",
    "IdentityService",
    "TokenClaims",
    "hash_password",
    "verify_password",
]
