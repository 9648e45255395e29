"""In-memory profile store adapter.

Values are kept as JSON text so anything that round-trips here would
round-trip through a real key-value backend too.
"""

import json
import logging
import threading
from typing import Any

from src.core.ports import ProfileStorePort

logger = logging.getLogger(__name__)


class InMemoryProfileStore(ProfileStorePort):
    """Process-local store, mainly for tests and the command line tool."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> bool:
        """Store ``value``; raises ``TypeError`` if it is not JSON-compatible."""
        serialized = json.dumps(value)
        with self._lock:
            self._data[key] = serialized
        logger.debug("Stored %s (%d bytes)", key, len(serialized))
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)
