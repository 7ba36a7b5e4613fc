"""Typed publish/subscribe notifications for index and asset updates."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from galscript.config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Event:
    """Base class for all published events."""


@dataclass(frozen=True)
class VariableIndexUpdated(Event):
    """The variable index published a new snapshot."""

    full_scan: bool
    variable_count: int
    file_path: str | None = None


@dataclass(frozen=True)
class AssetsUpdated(Event):
    """The asset scanner published a new snapshot."""

    asset_count: int
    counts: dict[str, int]


E = TypeVar("E", bound=Event)
Handler = Callable[[Any], None]


class EventBus:
    """Synchronous in-process event bus.

    Handlers are called in subscription order. A handler that raises is
    logged and does not stop delivery to the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[Handler]] = {}

    def subscribe(
        self, event_type: type[E], handler: Callable[[E], None]
    ) -> Callable[[], None]:
        """Register ``handler`` for ``event_type`` and its subclasses.

        Returns:
            Callable that removes the subscription
        """
        self._handlers.setdefault(event_type, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: Event) -> int:
        """Deliver ``event`` to every matching handler.

        Returns:
            Number of handlers that ran without raising
        """
        delivered = 0
        for event_type, handlers in list(self._handlers.items()):
            if not isinstance(event, event_type):
                continue
            for handler in list(handlers):
                try:
                    handler(event)
                    delivered += 1
                except Exception as e:
                    logger.error(
                        "Event handler failed",
                        event_type=type(event).__name__,
                        error=str(e),
                    )
        return delivered

    def subscriber_count(self, event_type: type[Event]) -> int:
        return len(self._handlers.get(event_type, []))
