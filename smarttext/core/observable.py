"""
Observable values.

A small publish/subscribe primitive over a single versioned value. Setting
a new value bumps the version and calls every listener synchronously;
setting the value it already holds does nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T, T], None]  # (new, old)


@dataclass(eq=False)
class Observer(Generic[T]):
    """Handle returned by ``ObservableValue.observe``."""

    listener: Listener
    _owner: ObservableValue[T] | None = None

    @property
    def active(self) -> bool:
        return self._owner is not None

    def unsubscribe(self) -> None:
        """Stop receiving changes. Safe to call more than once."""
        if self._owner is not None:
            self._owner._detach(self)
            self._owner = None


class ObservableValue(Generic[T]):
    """
    A value that notifies observers when it changes.

    Usage:
        lang = ObservableValue("en")
        obs = lang.observe(lambda new, old: print(old, "->", new))
        lang.set("ar")      # prints "en -> ar"
        lang.set("ar")      # no-op, same value
        obs.unsubscribe()
    """

    def __init__(self, initial: T):
        self._value = initial
        self._version = 0
        self._observers: list[Observer[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def version(self) -> int:
        """Number of changes applied since construction."""
        return self._version

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def set(self, value: T) -> bool:
        """
        Replace the value.

        Returns:
            True if the value changed and observers were notified
        """
        if value == self._value:
            return False

        old = self._value
        self._value = value
        self._version += 1

        for observer in list(self._observers):
            try:
                observer.listener(value, old)
            except Exception:
                logger.exception("Observer raised while handling a value change")
        return True

    def observe(self, listener: Listener) -> Observer[T]:
        """Register a listener called with ``(new, old)`` on every change."""
        observer = Observer(listener=listener, _owner=self)
        self._observers.append(observer)
        return observer

    def _detach(self, observer: Observer[T]) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def __repr__(self) -> str:
        return f"<ObservableValue({self._value!r}, version={self._version})>"
