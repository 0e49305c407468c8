"""Liveness endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from idle_rpg.api.schemas import envelope


router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    settings = request.app.state.settings
    return envelope(
        {"status": "ok", "version": settings.app_version},
        message=f"{settings.app_name} is running",
    )
