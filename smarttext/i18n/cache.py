"""
Persistent translation cache.

Maps (normalized text, language) to a translated string. The whole table is
loaded once when the cache is built and written back to its storage slot on
every ``put``. Entries never expire; only ``clear`` removes them.

Payload format (JSON):

    {"save": {"ar": "حفظ"}, "cancel": {"ar": "إلغاء"}}
"""

from __future__ import annotations

import json
import logging
from typing import Any

from smarttext.errors import StorageError
from smarttext.storage.base import KeyValueStore, Slots

logger = logging.getLogger(__name__)


def normalize_key(text: str) -> str:
    """Derive the cache key for ``text``: surrounding whitespace trimmed, case folded."""
    return text.strip().casefold()


def _parse_table(payload: str) -> dict[str, dict[str, str]]:
    """Parse a stored payload, keeping only well-formed string leaves."""
    data: Any = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    table: dict[str, dict[str, str]] = {}
    for key, langs in data.items():
        if not isinstance(langs, dict):
            continue
        entries = {
            lang: value
            for lang, value in langs.items()
            if isinstance(lang, str) and isinstance(value, str)
        }
        if entries:
            table[key] = entries
    return table


class TranslationCache:
    """
    Write-through translation cache over a ``KeyValueStore`` slot.

    Usage:
        cache = TranslationCache(store, default_language="en")
        cache.put("Save", "ar", "حفظ")
        cache.get("  save ", "ar")  # -> "حفظ"
    """

    def __init__(
        self,
        store: KeyValueStore,
        default_language: str = "en",
        slot: str = Slots.TRANSLATION_CACHE,
    ):
        self._store = store
        self._slot = slot
        self.default_language = default_language
        self._table: dict[str, dict[str, str]] = self._load()

    def _load(self) -> dict[str, dict[str, str]]:
        try:
            payload = self._store.read(self._slot)
        except StorageError as e:
            logger.warning(f"Translation cache unreadable, starting empty: {e}")
            return {}

        if payload is None:
            return {}

        try:
            table = _parse_table(payload)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"Translation cache corrupt, starting empty: {e}")
            return {}

        logger.debug(f"Loaded {sum(len(v) for v in table.values())} cached translations")
        return table

    def _flush(self) -> None:
        payload = json.dumps(self._table, ensure_ascii=False, sort_keys=True)
        try:
            self._store.write(self._slot, payload)
        except StorageError as e:
            logger.warning(f"Failed to persist translation cache: {e}")

    def get(self, text: str, language: str) -> str | None:
        """Get a cached translation."""
        return self._table.get(normalize_key(text), {}).get(language)

    def has(self, text: str, language: str) -> bool:
        return self.get(text, language) is not None

    def put(self, text: str, language: str, translation: str) -> None:
        """Cache a translation and persist the whole table."""
        if language == self.default_language:
            logger.debug(f"Not caching {language!r}: it is the source language")
            return

        key = normalize_key(text)
        self._table.setdefault(key, {})[language] = translation
        logger.debug(f"Cached {language} translation for {key!r}")
        self._flush()

    def clear(self) -> None:
        """Drop every entry and delete the stored payload."""
        self._table = {}
        try:
            self._store.delete(self._slot)
        except StorageError as e:
            logger.warning(f"Failed to delete stored translation cache: {e}")

    def snapshot(self) -> dict[str, dict[str, str]]:
        """Copy of the in-memory table."""
        return {key: dict(langs) for key, langs in self._table.items()}

    def stats(self) -> dict[str, int]:
        """Entry counts per language plus a total."""
        counts: dict[str, int] = {}
        for langs in self._table.values():
            for lang in langs:
                counts[lang] = counts.get(lang, 0) + 1
        counts["total"] = sum(counts.values())
        return counts

    def __len__(self) -> int:
        return sum(len(langs) for langs in self._table.values())
