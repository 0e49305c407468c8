"""User accounts, password hashing and bearer tokens.

Passwords are stored as bcrypt hashes. Tokens are HS256 JWTs whose
``user`` claim carries the id, username and email of the account.
"""

from __future__ import annotations

import itertools
import threading
from datetime import timedelta
from typing import Any

import bcrypt
import jwt

from idle_rpg.core.config import AuthSettings
from idle_rpg.core.exceptions import (
    ConfigurationError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
    UsernameTakenError,
    UserNotFoundError,
)
from idle_rpg.core.logging import get_logger
from idle_rpg.models.base import ApiModel, utcnow
from idle_rpg.models.user import User, UserProfile
from idle_rpg.storage.repository import InMemoryRepository, Repository


logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


class TokenClaims(ApiModel):
    """Identity carried by a verified bearer token."""

    id: str
    username: str
    email: str


class AuthResult(ApiModel):
    """Response payload of register and login."""

    user: UserProfile
    token: str


def hash_password(password: str, *, rounds: int = 12) -> str:
    """Hash a password with bcrypt.

    Args:
        password: Plain-text password.
        rounds: bcrypt cost factor.

    Returns:
        The encoded hash.
    """
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, password_hash.encode("ascii"))
    except ValueError:
        logger.warning("Malformed password hash")
        return False


class IdentityService:
    """Registration, login, profiles and token handling.

    Args:
        settings: Token and hashing settings.
        users: Repository holding user records keyed by id.
    """

    def __init__(
        self,
        settings: AuthSettings,
        users: Repository[User] | None = None,
    ) -> None:
        self._settings = settings
        self._users = users if users is not None else InMemoryRepository[User]("users")
        self._ids = itertools.count(len(self._users.values()) + 1)
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def _secret(self) -> str:
        if self._settings.jwt_secret is None:
            logger.error("JWT secret not configured")
            raise ConfigurationError("JWT secret not configured", config_key="jwt_secret")
        return self._settings.jwt_secret.get_secret_value()

    def issue_token(self, user: User) -> str:
        """Create a signed bearer token for ``user``."""
        now = utcnow()
        payload: dict[str, Any] = {
            "user": {"id": user.id, "username": user.username, "email": user.email},
            "iat": now,
            "exp": now + timedelta(hours=self._settings.token_expiry_hours),
        }
        return jwt.encode(payload, self._secret(), algorithm=self._settings.jwt_algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """Verify a bearer token and return its identity.

        Raises:
            InvalidTokenError: If the token is forged, malformed or expired.
            ConfigurationError: If no signing secret is configured.
        """
        secret = self._secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self._settings.jwt_algorithm])
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Invalid or expired token", details={"reason": "expired"}) from None
        except jwt.InvalidTokenError:
            raise InvalidTokenError("Invalid or expired token") from None

        try:
            return TokenClaims.model_validate(payload.get("user") or {})
        except ValueError:
            raise InvalidTokenError("Invalid or expired token", details={"reason": "claims"}) from None

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def _find(self, *, email: str | None = None, username: str | None = None) -> User | None:
        for user in self._users.values():
            if (email is not None and user.email == email) or (
                username is not None and user.username == username
            ):
                return user
        return None

    def _load(self, user_id: str) -> User:
        stored = self._users.get(user_id)
        if stored is None:
            raise UserNotFoundError("User not found", details={"user_id": user_id})
        return stored.value

    def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and sign the new user in.

        Raises:
            UserAlreadyExistsError: If the email or username is in use.
        """
        password_hash = hash_password(password, rounds=self._settings.bcrypt_rounds)
        with self._lock:
            if self._find(email=email, username=username) is not None:
                raise UserAlreadyExistsError("User with this email or username already exists")
            user = User(
                id=str(next(self._ids)),
                username=username,
                email=email,
                password_hash=password_hash,
            )
            self._users.set(user.id, user)

        logger.info("User registered", user_id=user.id, username=username)
        return AuthResult(user=user.to_profile(), token=self.issue_token(user))

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password wrong.
        """
        user = self._find(email=email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected", email=email)
            raise InvalidCredentialsError("Invalid email or password")

        user.last_login = utcnow()
        self._users.set(user.id, user)
        logger.info("User logged in", user_id=user.id)
        return AuthResult(user=user.to_profile(), token=self.issue_token(user))

    def get_profile(self, user_id: str) -> UserProfile:
        """Public profile of ``user_id``."""
        return self._load(user_id).to_profile()

    def update_profile(
        self,
        user_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
    ) -> UserProfile:
        """Change username and/or email.

        Raises:
            UsernameTakenError: If another account uses ``username``.
            EmailTakenError: If another account uses ``email``.
        """
        with self._lock:
            user = self._load(user_id)

            if username and username != user.username:
                other = self._find(username=username)
                if other is not None and other.id != user_id:
                    raise UsernameTakenError("Username already taken")
                user.username = username

            if email and email != user.email:
                other = self._find(email=email)
                if other is not None and other.id != user_id:
                    raise EmailTakenError("Email already taken")
                user.email = email

            self._users.set(user.id, user)

        logger.info("Profile updated", user_id=user_id)
        return user.to_profile()


__all__ = [
    "TokenClaims",
    "AuthResult",
    "hash_password",
    "verify_password",
    "IdentityService",
]
