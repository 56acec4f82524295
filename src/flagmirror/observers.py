"""Observer registry for sync events."""

from __future__ import annotations

from typing import Protocol

import structlog

from .metrics import observer_errors_total
from .models import SyncEvent

logger = structlog.get_logger(__name__)


class Observer(Protocol):
    """Receives sync events. Must not block."""

    def handle(self, event: SyncEvent) -> None: ...


class Observers:
    """Ordered list of observers notified synchronously."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def __len__(self) -> int:
        return len(self._observers)

    def register_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def deregister_observer(self, observer: Observer) -> bool:
        """Remove the first registration of ``observer``. Returns whether it was found."""
        for i, registered in enumerate(self._observers):
            if registered is observer:
                del self._observers[i]
                return True
        return False

    def notify(self, event: SyncEvent) -> None:
        """Deliver ``event`` to every observer in registration order.

        A failing observer is logged and skipped.
        """
        for observer in list(self._observers):
            try:
                observer.handle(event)
            except Exception:
                observer_errors_total.add(1)
                logger.warning(
                    "observer failed to handle sync event",
                    project_key=event.project_key,
                    observer=repr(observer),
                    exc_info=True,
                )
