"""
Storage abstraction layer.

Persistence goes through a small key-value interface so the translation
cache and the language preference never know where bytes end up.

Each slot holds one text payload. Reads and writes are synchronous.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Opaque slot store for serialized payloads.

    Local Implementation: one file per slot, or an in-memory dict
    """

    @abstractmethod
    def read(self, slot: str) -> str | None:
        """Return the payload stored in ``slot``, or None if absent."""
        pass

    @abstractmethod
    def write(self, slot: str, payload: str) -> None:
        """Replace the payload stored in ``slot``."""
        pass

    @abstractmethod
    def delete(self, slot: str) -> bool:
        """Remove ``slot`` entirely. Returns whether it existed."""
        pass

    def exists(self, slot: str) -> bool:
        """Check if a slot holds a payload."""
        return self.read(slot) is not None


class Slots:
    """Standard slot names."""

    TRANSLATION_CACHE = "translation_cache"
    LANGUAGE = "language"
