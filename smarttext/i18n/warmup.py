"""
Cache warming for translations.

Pre-resolves known UI strings so users switching language for the first
time don't wait on providers for every label.

Usage:
    stats = await warm_translation_cache(ctx.resolver, languages=["ar"])

    # CLI
    smarttext warm --languages ar --strings-file config/ui_strings.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from smarttext.i18n.cache import normalize_key
from smarttext.i18n.languages import get_language_name, normalize_language_code
from smarttext.i18n.resolver import TranslationResolver

logger = logging.getLogger(__name__)


# =============================================================================
# Content Loaders
# =============================================================================


def _collect_strings(data: Any, out: list[str]) -> None:
    if isinstance(data, str):
        out.append(data)
    elif isinstance(data, list):
        for item in data:
            _collect_strings(item, out)
    elif isinstance(data, dict):
        for value in data.values():
            _collect_strings(value, out)


def load_strings_file(path: str | Path) -> list[str]:
    """
    Load UI strings from a YAML file.

    Any nesting works: every string leaf is collected.

        navigation:
          - Dashboard
          - Clients
        actions: [Save, Cancel]
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Strings file not found: {path}")
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    strings: list[str] = []
    _collect_strings(data, strings)
    return [s for s in strings if s.strip()]


# Common UI strings that should be pre-translated
UI_STRINGS = [
    # Navigation
    "Dashboard",
    "Clients",
    "Users",
    "Settings",
    "Reports",
    "Notifications",
    "Back",
    "Next",

    # Actions
    "Save",
    "Cancel",
    "Delete",
    "Edit",
    "Create User",
    "Search",
    "Submit",
    "Log in",
    "Log out",

    # Status
    "Loading...",
    "Saving...",
    "Saved",
    "Active",
    "Inactive",

    # Errors
    "Something went wrong",
    "Please try again",
    "Connection lost",
    "Invalid username or password",

    # Forms
    "Username",
    "Password",
    "Email",
    "Phone number",
    "Full name",
]


# =============================================================================
# Cache Warming
# =============================================================================


class WarmupStats(BaseModel):
    """Counts reported by a warm-up run."""

    languages: int = 0
    texts: int = 0
    cached: int = 0
    translated: int = 0
    untranslated: int = 0

    def to_dict(self) -> dict[str, int]:
        return self.model_dump()


async def warm_translation_cache(
    resolver: TranslationResolver,
    languages: list[str],
    texts: list[str] | None = None,
) -> WarmupStats:
    """
    Resolve every text for every language, filling the cache.

    Args:
        resolver: Resolver whose cache should be warmed
        languages: Target language codes (the default language is skipped)
        texts: Texts to warm (defaults to UI_STRINGS)

    Returns:
        Counts of texts already cached, newly translated and left untranslated
    """
    if texts is None:
        texts = UI_STRINGS

    # Deduplicate on the cache key, keeping first spelling
    seen: set[str] = set()
    unique: list[str] = []
    for text in texts:
        key = normalize_key(text)
        if key and key not in seen:
            seen.add(key)
            unique.append(text)

    targets = [normalize_language_code(l) for l in languages]
    targets = [lang for lang in dict.fromkeys(targets) if lang != resolver.default_language]
    stats = WarmupStats(languages=len(targets), texts=len(unique))

    for lang in targets:
        logger.info(f"Warming {get_language_name(lang)} ({lang}): {len(unique)} texts")
        for text in unique:
            if resolver.cache.has(text, lang):
                stats.cached += 1
                continue

            result = await resolver.resolve(text, lang)
            if resolver.cache.has(text, lang):
                stats.translated += 1
            else:
                stats.untranslated += 1
                logger.debug(f"Left untranslated ({lang}): {result!r}")

    logger.info(
        f"Warm-up complete: {stats.cached} cached, {stats.translated} translated, "
        f"{stats.untranslated} untranslated"
    )
    return stats
