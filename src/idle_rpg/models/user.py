"""User account models.

The stored ``User`` keeps the password hash; every response uses the
``UserProfile`` projection instead.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from idle_rpg.models.base import ApiModel, utcnow


class User(ApiModel):
    """A registered account.

    Attributes:
        id: User identifier.
        username: Unique alphanumeric handle.
        email: Unique login email.
        password_hash: bcrypt hash of the password.
        created_at: Registration time.
        last_login: Time of the last successful login.
        is_verified: Whether the email address was verified.
    """

    id: str
    username: str
    email: str
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=utcnow)
    last_login: datetime | None = None
    is_verified: bool = False

    def to_profile(self) -> UserProfile:
        """Public view of the account."""
        return UserProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
            last_login=self.last_login,
            is_verified=self.is_verified,
        )


class UserProfile(ApiModel):
    """Account fields safe to return to clients."""

    id: str
    username: str
    email: str
    created_at: datetime
    last_login: datetime | None = None
    is_verified: bool = False


__all__ = ["User", "UserProfile"]
