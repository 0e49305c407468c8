"""Account routes: registration, login and the caller's profile."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from idle_rpg.api.deps import CurrentUser, ServicesDep
from idle_rpg.api.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest, envelope


router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(body: RegisterRequest, services: ServicesDep) -> dict[str, Any]:
    result = services.identity.register(body.username, str(body.email), body.password)
    return envelope(result.to_api(), message="User registered successfully")


@router.post("/login")
def login_user(body: LoginRequest, services: ServicesDep) -> dict[str, Any]:
    result = services.identity.login(str(body.email), body.password)
    return envelope(result.to_api(), message="Login successful")


@router.get("/profile")
def get_user_profile(user: CurrentUser, services: ServicesDep) -> dict[str, Any]:
    profile = services.identity.get_profile(user.id)
    return envelope(profile.to_api(), message="Profile retrieved successfully")


@router.put("/profile")
def update_user_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser,
    services: ServicesDep,
) -> dict[str, Any]:
    profile = services.identity.update_profile(
        user.id,
        username=body.username,
        email=str(body.email) if body.email else None,
    )
    return envelope(profile.to_api(), message="Profile updated successfully")
