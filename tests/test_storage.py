"""
Tests for the key-value stores.
"""

import pytest

from smarttext.errors import StorageError
from smarttext.storage import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    create_local_store,
)


class TestFileKeyValueStore:
    def test_write_read_delete(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "data")

        assert store.read("translation_cache") is None
        store.write("translation_cache", '{"save": {"ar": "حفظ"}}')

        assert store.read("translation_cache") == '{"save": {"ar": "حفظ"}}'
        assert store.exists("translation_cache")

        assert store.delete("translation_cache") is True
        assert store.delete("translation_cache") is False
        assert not store.exists("translation_cache")

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.write("language", "ar")
        store.write("language", "en")

        assert store.read("language") == "en"
        assert [p.name for p in tmp_path.iterdir()] == ["language.json"]

    def test_persists_across_instances(self, tmp_path):
        FileKeyValueStore(tmp_path).write("language", "ar")
        assert FileKeyValueStore(tmp_path).read("language") == "ar"

    def test_undecodable_file_raises_storage_error(self, tmp_path):
        (tmp_path / "translation_cache.json").write_bytes(b"\xff\xfe")
        store = FileKeyValueStore(tmp_path)

        with pytest.raises(StorageError):
            store.read("translation_cache")

    def test_failed_write_removes_temp_file(self, tmp_path, monkeypatch):
        store = FileKeyValueStore(tmp_path)

        def refuse(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("smarttext.storage.local.os.replace", refuse)

        with pytest.raises(StorageError):
            store.write("language", "ar")
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize("slot", ["../escape", "a/b", ""])
    def test_invalid_slot(self, tmp_path, slot):
        store = FileKeyValueStore(tmp_path)
        with pytest.raises(StorageError):
            store.write(slot, "x")


class TestInMemoryKeyValueStore:
    def test_initial_contents(self):
        store = InMemoryKeyValueStore({"language": "ar"})
        assert store.read("language") == "ar"
        assert store.delete("language")
        assert store.read("language") is None


class TestFactory:
    def test_in_memory_without_dir(self):
        assert isinstance(create_local_store(), InMemoryKeyValueStore)

    def test_file_store_with_dir(self, tmp_path):
        assert isinstance(create_local_store(tmp_path), FileKeyValueStore)
