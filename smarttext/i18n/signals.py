"""
Language state and change propagation.

The current language can change from two directions:

- the outward ``LanguageIndicator`` (the ``lang``/``dir`` attributes any
  component may read or write), and
- a ``language.changed`` broadcast on the event bus (any component may
  publish one).

Both feed a single versioned observable. Listeners subscribe to that
observable only, so a switch that arrives through both producers notifies
each listener once, and a switch that arrives through just one of them
still reaches everyone.
"""

from __future__ import annotations

import json
import logging
from typing import Callable

from smarttext.core.events import LANGUAGE_CHANGED, Event, EventBus, language_changed
from smarttext.core.observable import ObservableValue, Observer
from smarttext.errors import StorageError, UnsupportedLanguageError
from smarttext.i18n.languages import normalize_language_code, text_direction
from smarttext.storage.base import KeyValueStore, Slots

logger = logging.getLogger(__name__)

LanguageListener = Callable[[str], None]


class LanguageIndicator:
    """
    The outward-facing language attributes.

    Mirrors what a document root exposes: ``lang`` and the derived ``dir``.
    Writable by anyone; changes are observable.
    """

    def __init__(self, lang: str = "en"):
        self._lang = ObservableValue(normalize_language_code(lang))

    @property
    def lang(self) -> str:
        return self._lang.value

    @lang.setter
    def lang(self, value: str) -> None:
        self._lang.set(normalize_language_code(value))

    @property
    def dir(self) -> str:
        return text_direction(self.lang)

    def attributes(self) -> dict[str, str]:
        return {"lang": self.lang, "dir": self.dir}

    def observe(self, listener: Callable[[str, str], None]) -> Observer[str]:
        """Call ``listener(new, old)`` whenever ``lang`` changes."""
        return self._lang.observe(listener)


class LanguageSignal:
    """
    Process-wide current language with change notification.

    Usage:
        signal = LanguageSignal(bus, default_language="en", supported=["en", "ar"])
        sub = signal.subscribe(lambda lang: print("now", lang))
        signal.switch_to("ar")   # prints "now ar" before returning
        sub.unsubscribe()
    """

    def __init__(
        self,
        bus: EventBus,
        default_language: str = "en",
        supported: list[str] | None = None,
        indicator: LanguageIndicator | None = None,
        store: KeyValueStore | None = None,
        slot: str = Slots.LANGUAGE,
    ):
        self.bus = bus
        self.default_language = normalize_language_code(default_language)
        self.supported = [normalize_language_code(l) for l in (supported or [self.default_language])]
        if self.default_language not in self.supported:
            self.supported.insert(0, self.default_language)

        self._store = store
        self._slot = slot

        initial = self._restore() or self.default_language
        self.indicator = indicator or LanguageIndicator(initial)
        if self.indicator.lang != initial:
            self.indicator.lang = initial

        self._state: ObservableValue[str] = ObservableValue(initial)

        # Producers
        self._indicator_observer = self.indicator.observe(
            lambda new, old: self._accept(new, "indicator")
        )
        self._bus_subscription = bus.subscribe(LANGUAGE_CHANGED, self._on_broadcast)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def current(self) -> str:
        return self._state.value

    @property
    def version(self) -> int:
        """Number of language changes since construction."""
        return self._state.version

    @property
    def subscriber_count(self) -> int:
        return self._state.observer_count

    def is_supported(self, language: str) -> bool:
        return normalize_language_code(language) in self.supported

    def switch_to(self, language: str) -> None:
        """
        Make ``language`` current.

        Updates the indicator, then publishes the broadcast. Listeners have
        been notified by the time this returns.

        Raises:
            UnsupportedLanguageError: if ``language`` is not configured
        """
        code = normalize_language_code(language)
        if code not in self.supported:
            raise UnsupportedLanguageError(language, self.supported)

        self.indicator.lang = code
        self.bus.publish(language_changed(code, source="switch"))

    def subscribe(self, listener: LanguageListener) -> Observer[str]:
        """Call ``listener(language)`` after every change. Returns the handle to unsubscribe."""
        return self._state.observe(lambda new, old: listener(new))

    def close(self) -> None:
        """Detach from the indicator and the bus."""
        self._indicator_observer.unsubscribe()
        self.bus.unsubscribe(self._bus_subscription)

    # -------------------------------------------------------------------------
    # Producers
    # -------------------------------------------------------------------------

    def _on_broadcast(self, event: Event) -> None:
        language = event.payload.get("language")
        if not isinstance(language, str):
            logger.warning(f"Ignoring {event.event_type} without a language: {event.payload}")
            return
        self._accept(language, f"broadcast from {event.source}" if event.source else "broadcast")

    def _accept(self, language: str, source: str) -> None:
        code = normalize_language_code(language)
        if code not in self.supported:
            logger.warning(f"Ignoring switch to unsupported language {language!r} from {source}")
            # A rejected indicator write must not leave the indicator ahead of the state
            if self.indicator.lang != self.current():
                self.indicator.lang = self.current()
            return

        # Keep the indicator in step with changes that only came through the bus
        if self.indicator.lang != code:
            self.indicator.lang = code

        if self._state.set(code):
            logger.info(f"Language switched to {code} (via {source})")
            self._persist(code)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _restore(self) -> str | None:
        if self._store is None:
            return None
        try:
            saved = self._store.read(self._slot)
        except StorageError as e:
            logger.warning(f"Could not read saved language: {e}")
            return None
        if saved is None:
            return None
        try:
            saved = json.loads(saved)["language"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Saved language preference is corrupt, ignoring it: {e}")
            return None
        if not isinstance(saved, str):
            return None
        code = normalize_language_code(saved)
        if code not in self.supported:
            logger.warning(f"Saved language {saved!r} is not supported, using {self.default_language}")
            return None
        return code

    def _persist(self, language: str) -> None:
        if self._store is None:
            return
        try:
            self._store.write(self._slot, json.dumps({"language": language}))
        except StorageError as e:
            logger.warning(f"Could not save language preference: {e}")
