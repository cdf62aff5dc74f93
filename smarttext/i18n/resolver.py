"""
Translation resolver.

The single entry point bindings use to turn source text into displayable
text. ``resolve`` never raises: offline, exhausted providers and internal
failures all fall back to the original text.
"""

from __future__ import annotations

import logging

from smarttext.i18n.cache import TranslationCache
from smarttext.i18n.chain import ProviderChain
from smarttext.i18n.languages import normalize_language_code
from smarttext.i18n.reachability import ReachabilityMonitor

logger = logging.getLogger(__name__)


class TranslationResolver:
    """
    Cache lookup, reachability gate and provider fallback behind one call.

    Usage:
        resolver = TranslationResolver(cache, chain, reachability, default_language="en")
        label = await resolver.resolve("Save", "ar")
    """

    def __init__(
        self,
        cache: TranslationCache,
        chain: ProviderChain,
        reachability: ReachabilityMonitor,
        default_language: str = "en",
    ):
        self.cache = cache
        self.chain = chain
        self.reachability = reachability
        self.default_language = default_language

    async def resolve(self, text: str, target: str) -> str:
        """
        Best available text for ``target``.

        Args:
            text: Source-language text
            target: Target language code

        Returns:
            The translation, or ``text`` unchanged when none is available
        """
        try:
            return await self._resolve(text, target)
        except Exception:
            logger.exception(f"Unexpected failure resolving {text!r} for {target}")
            return text

    async def _resolve(self, text: str, target: str) -> str:
        target = normalize_language_code(target)

        if target == self.default_language:
            return text

        if not text or not text.strip():
            return text

        cached = self.cache.get(text, target)
        if cached is not None:
            return cached

        if not self.reachability.online:
            logger.debug(f"Offline, showing {text!r} untranslated")
            return text

        translated = await self.chain.attempt(text, target)
        if translated is None:
            return text

        self.cache.put(text, target, translated)
        return translated

    async def resolve_many(self, texts: list[str], target: str) -> list[str]:
        """Resolve several texts one after another, preserving order."""
        return [await self.resolve(text, target) for text in texts]
