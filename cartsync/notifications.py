"""
Cart notifications.

Every cart mutation emits a user-facing event. The cart does not know how
events are shown; display code subscribes a callable to the bus.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

from cartsync.logging import get_logger

logger = get_logger(__name__)


class Severity(str, Enum):
    """Notification severity."""
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class CartNotification:
    """A human-readable message about a cart change."""
    severity: Severity
    message: str

    def to_dict(self) -> dict:
        return {"severity": self.severity.value, "message": self.message}


Subscriber = Callable[[CartNotification], None]


class NotificationBus:
    """Synchronous fan-out of cart notifications to subscribers."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber.

        Returns:
            A function that unsubscribes the callback
        """
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def clear(self) -> None:
        self._subscribers.clear()

    def emit(self, notification: CartNotification) -> None:
        """Deliver to every subscriber. A failing subscriber does not stop the rest."""
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception as e:
                logger.warning(f"Cart notification subscriber failed: {e}", exc_info=True)

    def success(self, message: str) -> None:
        self.emit(CartNotification(Severity.SUCCESS, message))

    def info(self, message: str) -> None:
        self.emit(CartNotification(Severity.INFO, message))

    def __len__(self) -> int:
        return len(self._subscribers)
