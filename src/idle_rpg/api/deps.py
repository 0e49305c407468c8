"""FastAPI dependencies: service container and the authenticated user."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from idle_rpg.core.config import Settings
from idle_rpg.core.exceptions import AuthenticationRequiredError
from idle_rpg.core.logging import bind_context
from idle_rpg.services.characters import CharacterService
from idle_rpg.services.game import GameService
from idle_rpg.services.identity import IdentityService, TokenClaims


@dataclass
class Services:
    """Services shared by all requests of one application instance."""

    identity: IdentityService
    characters: CharacterService
    game: GameService

    @classmethod
    def from_settings(cls, settings: Settings) -> Services:
        """Build services with fresh in-memory repositories."""
        return cls(
            identity=IdentityService(settings.auth),
            characters=CharacterService(settings.game),
            game=GameService(settings.game),
        )


_bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_current_user(
    services: Annotated[Services, Depends(get_services)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> TokenClaims:
    """Resolve the bearer token of the request to a user identity.

    Raises:
        AuthenticationRequiredError: If no bearer token was sent.
        InvalidTokenError: If the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError("Access token required")
    claims = services.identity.verify_token(credentials.credentials)
    bind_context(user_id=claims.id)
    return claims


ServicesDep = Annotated[Services, Depends(get_services)]
CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]


__all__ = [
    "Services",
    "get_services",
    "get_current_user",
    "ServicesDep",
    "CurrentUser",
]
