"""Request bodies and the response envelope of the HTTP API.

Request models reject malformed bodies before any service runs; the
application maps their failures to HTTP 400.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from idle_rpg.core.constants import (
    CHARACTER_NAME_MAX_LENGTH,
    CHARACTER_NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    PASSWORD_SPECIAL_CHARACTERS,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from idle_rpg.engine.stats import StatAllocation
from idle_rpg.models.enums import CharacterClass


Username = Annotated[
    str,
    StringConstraints(
        pattern=r"^[A-Za-z0-9]+$",
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
    ),
]

CharacterName = Annotated[
    str,
    StringConstraints(
        pattern=r"^[A-Za-z0-9]+$",
        min_length=CHARACTER_NAME_MIN_LENGTH,
        max_length=CHARACTER_NAME_MAX_LENGTH,
    ),
]


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")


class RegisterRequest(_Request):
    """Body of ``POST /users/register``."""

    username: Username
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        """Require lower and upper case letters, a digit and a special character."""
        if not (
            any(c.islower() for c in value)
            and any(c.isupper() for c in value)
            and any(c.isdigit() for c in value)
            and any(c in PASSWORD_SPECIAL_CHARACTERS for c in value)
        ):
            raise ValueError(
                "Password must contain at least one lowercase letter, one uppercase "
                "letter, one number, and one special character"
            )
        return value


class LoginRequest(_Request):
    """Body of ``POST /users/login``."""

    email: EmailStr
    password: str = Field(min_length=1)


class ProfileUpdateRequest(_Request):
    """Body of ``PUT /users/profile``."""

    username: Username | None = None
    email: EmailStr | None = None


class CreateCharacterRequest(BaseModel):
    """Body of ``POST /characters``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: CharacterName
    character_class: CharacterClass = Field(alias="class")


class UpdateCharacterRequest(_Request):
    """Body of ``PUT /characters/{id}``."""

    name: CharacterName | None = None
    stats: StatAllocation | None = None


class GameActionRequest(_Request):
    """Body of ``POST /game/{characterId}/action``."""

    action: str = Field(min_length=1)
    data: dict[str, Any] | None = None


def envelope(
    data: Any = None,
    *,
    message: str | None = None,
    success: bool = True,
    error: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the uniform ``{success, data?, error?, message?}`` response body."""
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if error is not None:
        body["error"] = error
    if message is not None:
        body["message"] = message
    body.update(extra)
    return body


__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "CreateCharacterRequest",
    "UpdateCharacterRequest",
    "GameActionRequest",
    "envelope",
]
