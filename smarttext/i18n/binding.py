"""
Text bindings.

A binding ties one literal piece of source text to the current language.
It resolves as soon as it is created and again after every language change,
always using the text it was created with and whatever language is current
when the change arrives. Disposing a binding drops its subscription; a
resolution already in flight still finishes (and may fill the cache) but no
longer updates the binding.

Bindings schedule their resolutions on the running asyncio loop, so create
them from inside it.
"""

from __future__ import annotations

import asyncio
import html
import logging
from typing import Callable

from smarttext.i18n.resolver import TranslationResolver
from smarttext.i18n.signals import LanguageSignal

logger = logging.getLogger(__name__)

RenderHook = Callable[[str], None]


class _Binding:
    """Shared resolution and subscription lifecycle."""

    def __init__(
        self,
        resolver: TranslationResolver,
        signal: LanguageSignal,
        text: str,
        on_change: RenderHook | None = None,
    ):
        self._resolver = resolver
        self._signal = signal
        self._text = text
        self._value = text
        self._on_change = on_change
        self._tasks: set[asyncio.Task] = set()
        self._disposed = False

        self._subscription = signal.subscribe(self._on_language_changed)
        self._schedule(signal.current())

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def text(self) -> str:
        """The source text this binding was created with."""
        return self._text

    @property
    def value(self) -> str:
        """The most recently resolved text."""
        return self._value

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def pending(self) -> int:
        """Resolutions still in flight."""
        return sum(1 for t in self._tasks if not t.done())

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _on_language_changed(self, language: str) -> None:
        # The notification may be one of two for the same switch; re-read the
        # current language instead of trusting the payload.
        self._schedule(self._signal.current())

    def _schedule(self, language: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop; {self._text!r} stays unresolved until refresh()")
            return

        task = loop.create_task(self._resolve(language))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _resolve(self, language: str) -> None:
        value = await self._resolver.resolve(self._text, language)
        if self._disposed:
            return
        self._set_value(value)

    def _set_value(self, value: str) -> None:
        if value == self._value:
            return
        self._value = value
        if self._on_change is not None:
            try:
                self._on_change(value)
            except Exception:
                logger.exception(f"Render hook failed for {self._text!r}")

    async def refresh(self) -> str:
        """Resolve against the current language now and return the result."""
        if not self._disposed:
            await self._resolve(self._signal.current())
        return self._value

    async def settled(self) -> str:
        """Wait for every in-flight resolution, then return the value."""
        while True:
            pending = [t for t in self._tasks if not t.done()]
            if not pending:
                return self._value
            await asyncio.gather(*pending)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def dispose(self) -> None:
        """Stop following language changes. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True
        self._subscription.unsubscribe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __str__(self) -> str:
        return self._value


class TextBinding(_Binding):
    """
    Binding for visible text rendered inside an element.

    Usage:
        label = TextBinding(resolver, signal, "Save", tag="button", attrs={"class": "primary"})
        label.render()   # '<button class="primary">Save</button>', or the translation once resolved
    """

    def __init__(
        self,
        resolver: TranslationResolver,
        signal: LanguageSignal,
        text: str,
        tag: str = "span",
        attrs: dict[str, str] | None = None,
        on_change: RenderHook | None = None,
    ):
        self.tag = tag
        self.attrs = dict(attrs or {})
        super().__init__(resolver, signal, text, on_change)

    def render(self) -> str:
        """Element markup for the current value, escaped."""
        attrs = "".join(
            f' {name}="{html.escape(str(value), quote=True)}"'
            for name, value in self.attrs.items()
        )
        return f"<{self.tag}{attrs}>{html.escape(self._value)}</{self.tag}>"

    def __repr__(self) -> str:
        return f"<TextBinding({self._text!r} -> {self._value!r})>"


class PlaceholderBinding(_Binding):
    """
    Binding that resolves to a plain string.

    For text that is not an element of its own: input placeholders, titles,
    tooltips.
    """

    def __repr__(self) -> str:
        return f"<PlaceholderBinding({self._text!r} -> {self._value!r})>"
