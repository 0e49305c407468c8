"""HTTP API for the Idle RPG backend."""

from idle_rpg.api.app import create_app, main
from idle_rpg.api.deps import Services

__all__ = ["Services", "create_app", "main"]
