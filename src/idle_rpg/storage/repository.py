"""Keyed, versioned repository for pydantic records.

Every stored value carries a version that increases by one on each
write. Writers that read a value and want to store a modified copy use
``compare_and_swap`` with the version they read; a concurrent write in
between makes the swap fail with StaleWriteError instead of silently
overwriting it.

Reads return deep copies, so a caller can only change stored data by
writing it back.

Storage is process-local; ``Repository`` is the interface a database
backed implementation would provide.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from idle_rpg.core.exceptions import StaleWriteError
from idle_rpg.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class Versioned(Generic[T]):
    """A stored value together with its version.

    Attributes:
        value: A private copy of the stored value.
        version: Version of the stored value, starting at 1.
    """

    value: T
    version: int


@runtime_checkable
class Repository(Protocol[T]):
    """Storage capability used by the services."""

    def get(self, key: str) -> Versioned[T] | None: ...

    def set(self, key: str, value: T) -> int: ...

    def set_if_absent(self, key: str, factory: Callable[[], T]) -> Versioned[T]: ...

    def compare_and_swap(self, key: str, expected_version: int, value: T) -> int: ...

    def delete(self, key: str) -> bool: ...

    def values(self) -> list[T]: ...


class InMemoryRepository(Generic[T]):
    """Thread-safe in-process implementation of Repository.

    Args:
        name: Label used in log events.
    """

    def __init__(self, name: str = "repository") -> None:
        self.name = name
        self._items: dict[str, Versioned[T]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def get(self, key: str) -> Versioned[T] | None:
        """Read a copy of the value stored under ``key``."""
        with self._lock:
            stored = self._items.get(key)
            if stored is None:
                return None
            return Versioned(stored.value.model_copy(deep=True), stored.version)

    def set(self, key: str, value: T) -> int:
        """Store ``value`` unconditionally.

        Returns:
            The new version.
        """
        with self._lock:
            return self._store(key, value)

    def set_if_absent(self, key: str, factory: Callable[[], T]) -> Versioned[T]:
        """Store ``factory()`` under ``key`` unless a value is already there.

        Returns:
            A copy of whichever value is stored afterwards.
        """
        with self._lock:
            stored = self._items.get(key)
            if stored is None:
                self._store(key, factory())
                stored = self._items[key]
            return Versioned(stored.value.model_copy(deep=True), stored.version)

    def compare_and_swap(self, key: str, expected_version: int, value: T) -> int:
        """Store ``value`` only if the stored version is ``expected_version``.

        Args:
            key: Record key.
            expected_version: Version the caller read; 0 means "absent".
            value: New value.

        Returns:
            The new version.

        Raises:
            StaleWriteError: If another write happened since the read.
        """
        with self._lock:
            stored = self._items.get(key)
            actual_version = stored.version if stored is not None else 0
            if actual_version != expected_version:
                logger.warning(
                    "Stale write rejected",
                    repository=self.name,
                    key=key,
                    expected_version=expected_version,
                    actual_version=actual_version,
                )
                raise StaleWriteError(
                    "Record was modified concurrently",
                    key=key,
                    expected_version=expected_version,
                    actual_version=actual_version,
                )
            return self._store(key, value)

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns whether something was removed."""
        with self._lock:
            return self._items.pop(key, None) is not None

    def values(self) -> list[T]:
        """Copies of all stored values in insertion order."""
        with self._lock:
            return [stored.value.model_copy(deep=True) for stored in self._items.values()]

    def keys(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._items))

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def _store(self, key: str, value: T) -> int:
        previous = self._items.get(key)
        version = previous.version + 1 if previous is not None else 1
        self._items[key] = Versioned(value.model_copy(deep=True), version)
        return version


__all__ = [
    "Versioned",
    "Repository",
    "InMemoryRepository",
]
