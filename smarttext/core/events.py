"""
Event system.

The broadcast channel for process-wide notifications such as
``language.changed``. Any component may publish, any component may
subscribe. Dispatch is synchronous: every matching handler has run by the
time ``publish`` returns. Handlers that need to do I/O schedule their own
tasks.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Type for event handlers
EventHandler = Callable[["Event"], None]

LANGUAGE_CHANGED = "language.changed"
CONNECTIVITY_CHANGED = "connectivity.changed"


@dataclass(frozen=True)
class Event:
    """
    An event in the system.

    Events are immutable records of something that happened.
    """

    event_type: str  # e.g., "language.changed"
    payload: dict[str, Any] = field(default_factory=dict)

    # Optional origin tag (who published it)
    source: str | None = None


@dataclass(eq=False)
class Subscription:
    """A subscription to events matching a pattern."""

    pattern: str  # e.g., "language.*" or "language.changed"
    handler: EventHandler

    def matches(self, event: Event) -> bool:
        """Check if this subscription matches the given event."""
        return fnmatch.fnmatch(event.event_type, self.pattern)


class EventBus:
    """
    In-memory synchronous event bus.

    One bus belongs to one ``TranslationContext``; there is no module-level
    instance.
    """

    def __init__(self):
        self._subscriptions: list[Subscription] = []

    def subscribe(self, pattern: str, handler: EventHandler) -> Subscription:
        """
        Subscribe to events matching a pattern.

        Args:
            pattern: Event type pattern (supports wildcards like "language.*")
            handler: Function called with each matching event

        Returns:
            The subscription object (pass it to ``unsubscribe``)
        """
        subscription = Subscription(pattern=pattern, handler=handler)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def subscriber_count(self, pattern: str | None = None) -> int:
        """Count subscriptions, optionally only those registered for ``pattern``."""
        if pattern is None:
            return len(self._subscriptions)
        return sum(1 for s in self._subscriptions if s.pattern == pattern)

    def publish(self, event: Event) -> int:
        """
        Deliver an event to every matching handler.

        Returns:
            Number of handlers that ran without raising
        """
        # Snapshot so handlers may unsubscribe while we iterate
        matching = [s for s in self._subscriptions if s.matches(event)]

        delivered = 0
        for subscription in matching:
            try:
                subscription.handler(event)
                delivered += 1
            except Exception:
                # Log error but don't stop other handlers
                logger.exception(f"Error in event handler for {event.event_type}")
        return delivered


# Convenience constructors for common event types
def language_changed(language: str, source: str | None = None) -> Event:
    """Create a language.changed event."""
    return Event(
        event_type=LANGUAGE_CHANGED,
        payload={"language": language},
        source=source,
    )


def connectivity_changed(online: bool, source: str | None = None) -> Event:
    """Create a connectivity.changed event."""
    return Event(
        event_type=CONNECTIVITY_CHANGED,
        payload={"online": online},
        source=source,
    )
