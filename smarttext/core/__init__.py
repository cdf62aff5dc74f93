"""
Core module - signaling infrastructure.

This module contains:
- events: Synchronous event bus for process-wide broadcasts
- observable: Versioned observable values
"""

from smarttext.core.events import (
    CONNECTIVITY_CHANGED,
    LANGUAGE_CHANGED,
    Event,
    EventBus,
    Subscription,
    connectivity_changed,
    language_changed,
)
from smarttext.core.observable import (
    ObservableValue,
    Observer,
)

__all__ = [
    # Events
    "Event",
    "EventBus",
    "Subscription",
    "LANGUAGE_CHANGED",
    "CONNECTIVITY_CHANGED",
    "language_changed",
    "connectivity_changed",
    # Observable
    "ObservableValue",
    "Observer",
]
