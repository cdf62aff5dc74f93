"""
Internationalization - on-demand translation with a persistent cache.

Design:
1. Translate literal UI text lazily, on first display
2. Cache translations durably by normalized text and language
3. Fall back across providers; show the original text when all fail
4. Push language switches to every live binding

Usage:
    from smarttext import create_context

    ctx = create_context()
    save = ctx.text("Save", tag="button")
    hint = ctx.placeholder("Search clients...")

    ctx.switch_to("ar")
    await save.settled()
"""

from smarttext.i18n.binding import (
    PlaceholderBinding,
    TextBinding,
)
from smarttext.i18n.cache import (
    TranslationCache,
    normalize_key,
)
from smarttext.i18n.chain import (
    ChainResult,
    OutcomeStatus,
    ProviderChain,
    ProviderOutcome,
)
from smarttext.i18n.languages import (
    LANGUAGE_NAMES,
    RTL_LANGUAGES,
    Language,
    get_language_name,
    get_native_name,
    is_rtl,
    normalize_language_code,
    text_direction,
)
from smarttext.i18n.providers import (
    FunctionProvider,
    GoogleTranslateProvider,
    HTTPProvider,
    LibreTranslateProvider,
    LLMProvider,
    MicrosoftTranslatorProvider,
    TranslationProvider,
    build_providers,
)
from smarttext.i18n.reachability import ReachabilityMonitor
from smarttext.i18n.resolver import TranslationResolver
from smarttext.i18n.signals import (
    LanguageIndicator,
    LanguageSignal,
)
from smarttext.i18n.warmup import (
    UI_STRINGS,
    WarmupStats,
    load_strings_file,
    warm_translation_cache,
)

__all__ = [
    # Cache
    "TranslationCache",
    "normalize_key",
    # Providers
    "TranslationProvider",
    "HTTPProvider",
    "GoogleTranslateProvider",
    "MicrosoftTranslatorProvider",
    "LibreTranslateProvider",
    "LLMProvider",
    "FunctionProvider",
    "build_providers",
    # Chain
    "ProviderChain",
    "ProviderOutcome",
    "OutcomeStatus",
    "ChainResult",
    # Resolution
    "ReachabilityMonitor",
    "TranslationResolver",
    # Language state
    "LanguageIndicator",
    "LanguageSignal",
    # Bindings
    "TextBinding",
    "PlaceholderBinding",
    # Cache warming
    "UI_STRINGS",
    "WarmupStats",
    "load_strings_file",
    "warm_translation_cache",
    # Language utilities
    "Language",
    "LANGUAGE_NAMES",
    "RTL_LANGUAGES",
    "get_language_name",
    "get_native_name",
    "is_rtl",
    "normalize_language_code",
    "text_direction",
]
