"""Storage module for the Idle RPG backend.

Provides a versioned key/value repository with compare-and-swap writes.
The in-memory implementation keeps data for the process lifetime.
"""

from idle_rpg.storage.repository import (
    InMemoryRepository,
    Repository,
    Versioned,
)

__all__ = [
    "InMemoryRepository",
    "Repository",
    "Versioned",
]
