"""
Tests for cache warming.
"""

import pytest

from smarttext.i18n.warmup import UI_STRINGS, load_strings_file, warm_translation_cache


class TestLoadStringsFile:
    def test_collects_nested_strings(self, tmp_path):
        path = tmp_path / "ui.yaml"
        path.write_text(
            "navigation:\n"
            "  - Dashboard\n"
            "  - Clients\n"
            "actions: [Save, Cancel]\n"
            "forms:\n"
            "  login:\n"
            "    title: Log in\n"
            "    blank: ''\n",
            encoding="utf-8",
        )

        assert load_strings_file(path) == ["Dashboard", "Clients", "Save", "Cancel", "Log in"]

    def test_missing_file(self, tmp_path):
        assert load_strings_file(tmp_path / "nope.yaml") == []


class TestWarmTranslationCache:
    @pytest.mark.asyncio
    async def test_fills_cache(self, ctx, arabic):
        stats = await warm_translation_cache(ctx.resolver, ["ar"], ["Save", "Cancel", "Unknown"])

        assert stats.to_dict() == {
            "languages": 1,
            "texts": 3,
            "cached": 0,
            "translated": 2,
            "untranslated": 1,
        }
        assert ctx.cache.get("Save", "ar") == "حفظ"

    @pytest.mark.asyncio
    async def test_counts_already_cached(self, ctx, arabic):
        await ctx.resolve("Save", "ar")
        arabic.calls.clear()

        stats = await warm_translation_cache(ctx.resolver, ["ar"], ["Save", "Cancel"])

        assert stats.cached == 1
        assert stats.translated == 1
        assert [call[0] for call in arabic.calls] == ["Cancel"]

    @pytest.mark.asyncio
    async def test_skips_default_language_and_duplicates(self, ctx, arabic):
        stats = await warm_translation_cache(ctx.resolver, ["en", "ar", "AR"], ["Save", " save ", "SAVE"])

        assert stats.languages == 1
        assert stats.texts == 1
        assert len(arabic.calls) == 1

    @pytest.mark.asyncio
    async def test_defaults_to_builtin_strings(self, ctx):
        stats = await warm_translation_cache(ctx.resolver, ["ar"])
        assert stats.texts == len(UI_STRINGS)

    @pytest.mark.asyncio
    async def test_offline_leaves_everything_untranslated(self, ctx, arabic):
        ctx.reachability.set_offline()

        stats = await warm_translation_cache(ctx.resolver, ["ar"], ["Save", "Cancel"])

        assert stats.untranslated == 2
        assert arabic.calls == []
