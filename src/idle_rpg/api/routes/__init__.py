"""API routers, one module per resource."""

from idle_rpg.api.routes import characters, game, health, users

__all__ = ["characters", "game", "health", "users"]
