"""Adapter implementations for the engine's ports."""

from .memory_store import InMemoryProfileStore
from .notifier import CallbackNotifier

__all__ = ["CallbackNotifier", "InMemoryProfileStore"]
