"""
Translation context.

Everything long-lived in one object: settings, storage, event bus, cache,
reachability, provider chain, resolver and language signal. The
application root creates one context and hands it (or the pieces it needs)
to everything else. There are no module-level instances.
"""

from __future__ import annotations

import logging

import httpx

from smarttext.config import Settings, get_settings
from smarttext.core.events import EventBus
from smarttext.i18n.binding import PlaceholderBinding, RenderHook, TextBinding
from smarttext.i18n.cache import TranslationCache
from smarttext.i18n.chain import ProviderChain
from smarttext.i18n.languages import normalize_language_code
from smarttext.i18n.providers import TranslationProvider, build_providers
from smarttext.i18n.reachability import ReachabilityMonitor
from smarttext.i18n.resolver import TranslationResolver
from smarttext.i18n.signals import LanguageSignal
from smarttext.storage.base import KeyValueStore
from smarttext.storage.local import FileKeyValueStore

logger = logging.getLogger(__name__)


class TranslationContext:
    """
    Owner of the shared translation state.

    Usage:
        ctx = create_context()
        title = ctx.text("Dashboard", tag="h1")
        ctx.switch_to("ar")
        await title.settled()
        title.value  # -> "لوحة القيادة"
    """

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore,
        providers: list[TranslationProvider],
        bus: EventBus | None = None,
    ):
        self.settings = settings
        self.store = store
        self.bus = bus or EventBus()

        default = normalize_language_code(settings.default_language)
        self.cache = TranslationCache(store, default_language=default, slot=settings.cache_slot)

        self.reachability = ReachabilityMonitor(online=settings.start_online)
        self.reachability.listen(self.bus)

        self.chain = ProviderChain(providers, source_language=default)
        self.resolver = TranslationResolver(
            self.cache, self.chain, self.reachability, default_language=default
        )
        self.signal = LanguageSignal(
            self.bus,
            default_language=default,
            supported=settings.supported_languages_list,
            store=store if settings.persist_language else None,
            slot=settings.language_slot,
        )

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    @property
    def language(self) -> str:
        return self.signal.current()

    def switch_to(self, language: str) -> None:
        self.signal.switch_to(language)

    async def probe_reachability(self, client: httpx.AsyncClient | None = None) -> bool:
        """HEAD the configured probe URL and record whether the network is reachable."""
        return await self.reachability.probe(
            self.settings.reachability_probe_url,
            client=client,
            timeout=self.settings.http_timeout,
        )

    async def resolve(self, text: str, target: str | None = None) -> str:
        """Resolve ``text`` for ``target`` (defaults to the current language)."""
        return await self.resolver.resolve(text, target or self.signal.current())

    def text(
        self,
        text: str,
        tag: str = "span",
        attrs: dict[str, str] | None = None,
        on_change: RenderHook | None = None,
    ) -> TextBinding:
        """Create a live binding for element text."""
        return TextBinding(self.resolver, self.signal, text, tag=tag, attrs=attrs, on_change=on_change)

    def placeholder(self, text: str, on_change: RenderHook | None = None) -> PlaceholderBinding:
        """Create a live binding that resolves to a plain string."""
        return PlaceholderBinding(self.resolver, self.signal, text, on_change=on_change)

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Translation cache cleared")

    def close(self) -> None:
        """Detach internal subscriptions from the bus."""
        self.signal.close()
        self.reachability.stop_listening()


def create_context(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    providers: list[TranslationProvider] | None = None,
    client: httpx.AsyncClient | None = None,
) -> TranslationContext:
    """
    Build a context from settings.

    Args:
        settings: Defaults to ``get_settings()``
        store: Defaults to a file store in ``settings.storage_dir``
        providers: Defaults to the providers named in ``settings.providers``
        client: Shared httpx client for the HTTP providers
    """
    settings = settings or get_settings()
    if store is None:
        store = FileKeyValueStore(settings.storage_dir)
    if providers is None:
        providers = build_providers(settings, client=client)
    return TranslationContext(settings, store, providers)
