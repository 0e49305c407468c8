"""Idle RPG backend.

An idle role-playing game server: user accounts, a per-user character
roster, and per-character game state driven by typed actions.

Subpackages:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic data models for characters, items and game state.
    engine: Action decoding, the action resolver, monsters and stats.
    storage: Versioned in-memory repositories.
    services: Accounts, characters and game-state processing.
    api: FastAPI application and routes.
"""

__version__ = "0.1.0"
