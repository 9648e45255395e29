"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
The engine never persists or announces anything itself; the progression
service goes through these interfaces instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.contracts.progression import ProgressChangedEvent

__all__ = [
    "ProfileStorePort",
    "ProgressNotifierPort",
]


class ProfileStorePort(ABC):
    """Port for per-profile key-value persistence.

    Values are JSON-compatible (dicts, lists, strings, numbers, booleans).
    The store owns durability; callers own read-modify-write sequencing.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Get a stored value, or ``None`` when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a value. Returns False when the key was absent."""
        pass


class ProgressNotifierPort(ABC):
    """Port for announcing that a profile's derived display state changed."""

    @abstractmethod
    def notify(self, event: ProgressChangedEvent) -> None:
        """Deliver a change notification. Must not raise into the caller."""
        pass
