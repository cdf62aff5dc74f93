"""
Storage abstractions.

- KeyValueStore → slot-based payload storage
- FileKeyValueStore → one file per slot on local disk
- InMemoryKeyValueStore → dict-backed, for tests
"""

from smarttext.storage.base import (
    KeyValueStore,
    Slots,
)
from smarttext.storage.local import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    create_local_store,
)

__all__ = [
    "KeyValueStore",
    "Slots",
    "FileKeyValueStore",
    "InMemoryKeyValueStore",
    "create_local_store",
]
