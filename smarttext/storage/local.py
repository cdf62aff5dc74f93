"""
Local storage implementations.

Filesystem and in-memory stores that work without any external services.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from smarttext.errors import StorageError
from smarttext.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

_SLOT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


# =============================================================================
# Local Filesystem Store
# =============================================================================


class FileKeyValueStore(KeyValueStore):
    """Store each slot as a file under ``base_path``."""

    def __init__(self, base_path: str | Path = "./data/smarttext"):
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _slot_to_path(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise StorageError(f"Invalid slot name: {slot!r}")
        return self.base_path / f"{slot}.json"

    def read(self, slot: str) -> str | None:
        path = self._slot_to_path(slot)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read slot {slot!r}: {e}") from e

    def write(self, slot: str, payload: str) -> None:
        path = self._slot_to_path(slot)
        # Write to a sibling temp file and swap it in so readers never see half a payload
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=f".{slot}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write slot {slot!r}: {e}") from e

    def delete(self, slot: str) -> bool:
        path = self._slot_to_path(slot)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete slot {slot!r}: {e}") from e
        return True


# =============================================================================
# In-Memory Store
# =============================================================================


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, slot: str) -> str | None:
        return self._slots.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self._slots[slot] = payload

    def delete(self, slot: str) -> bool:
        if slot in self._slots:
            del self._slots[slot]
            return True
        return False


# =============================================================================
# Factory
# =============================================================================


def create_local_store(data_dir: str | Path | None = None) -> KeyValueStore:
    """Create a file store in ``data_dir``, or an in-memory store when None."""
    if data_dir is None:
        return InMemoryKeyValueStore()
    logger.debug(f"Using file store at {data_dir}")
    return FileKeyValueStore(data_dir)
