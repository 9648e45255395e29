"""Progress notifier adapters."""

import logging
from collections.abc import Callable

from src.contracts.progression import ProgressChangedEvent
from src.core.ports import ProgressNotifierPort

logger = logging.getLogger(__name__)


class CallbackNotifier(ProgressNotifierPort):
    """Fan a change event out to registered callbacks.

    A failing callback is logged and skipped so one bad observer cannot block
    the others or the update that triggered them.
    """

    def __init__(self, *callbacks: Callable[[ProgressChangedEvent], None]) -> None:
        self._callbacks: list[Callable[[ProgressChangedEvent], None]] = list(callbacks)

    def subscribe(self, callback: Callable[[ProgressChangedEvent], None]) -> None:
        self._callbacks.append(callback)

    def notify(self, event: ProgressChangedEvent) -> None:
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Progress callback failed for profile %s (%s)",
                    event.profile_id,
                    event.kind.value,
                )
