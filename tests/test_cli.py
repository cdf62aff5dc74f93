"""
Tests for the command line interface.
"""

import pytest

from smarttext.cli import main
from smarttext.config import get_settings
from smarttext.context import TranslationContext
from smarttext.i18n.cache import TranslationCache
from smarttext.storage.base import Slots
from smarttext.storage.local import FileKeyValueStore


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SMARTTEXT_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("SMARTTEXT_PROVIDERS", "microsoft")
    monkeypatch.setenv("SMARTTEXT_MICROSOFT_TRANSLATOR_KEY", "")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def seeded(data_dir):
    cache = TranslationCache(FileKeyValueStore(data_dir))
    cache.put("Save", "ar", "حفظ")
    cache.put("Cancel", "ar", "إلغاء")
    return data_dir


class TestCli:
    def test_stats(self, seeded, capsys):
        assert main(["stats"]) == 0

        out = capsys.readouterr().out
        assert "Arabic (ar): 2" in out
        assert "Total: 2" in out
        assert "Current language: en" in out

    def test_clear(self, seeded, capsys):
        assert main(["clear"]) == 0

        assert "Removed 2 cached translations" in capsys.readouterr().out
        assert not FileKeyValueStore(seeded).exists(Slots.TRANSLATION_CACHE)

    def test_translate_from_cache(self, seeded, capsys):
        assert main(["translate", "Save", "  cancel ", "Unknown", "--to", "ar", "--offline"]) == 0

        assert capsys.readouterr().out.splitlines() == ["حفظ", "إلغاء", "Unknown"]

    def test_unknown_provider_is_reported(self, data_dir, monkeypatch):
        monkeypatch.setenv("SMARTTEXT_PROVIDERS", "babelfish")
        get_settings.cache_clear()

        assert main(["translate", "Save", "--to", "ar"]) == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])

    def test_translate_probes_unless_offline(self, seeded, monkeypatch, capsys):
        probed = []

        async def fake_probe(self, client=None):
            probed.append(self.settings.reachability_probe_url)
            self.reachability.set_offline()
            return False

        monkeypatch.setattr(TranslationContext, "probe_reachability", fake_probe)

        assert main(["translate", "Save", "--to", "ar"]) == 0
        assert main(["translate", "Save", "--to", "ar", "--offline"]) == 0

        assert len(probed) == 1
        assert capsys.readouterr().out.splitlines() == ["حفظ", "حفظ"]
