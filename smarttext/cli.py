"""
Command line interface.

    smarttext translate "Save" "Cancel" --to ar
    smarttext warm --languages ar --strings-file config/ui_strings.yaml
    smarttext stats
    smarttext clear
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import httpx

from smarttext.config import Settings, get_settings
from smarttext.context import create_context
from smarttext.errors import ConfigurationError
from smarttext.i18n.languages import get_language_name
from smarttext.i18n.warmup import UI_STRINGS, load_strings_file, warm_translation_cache

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Basic console logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


# =============================================================================
# Commands
# =============================================================================


async def _translate(args: argparse.Namespace, settings: Settings) -> int:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        ctx = create_context(settings, client=client)
        if args.offline:
            ctx.reachability.set_offline()
        elif not await ctx.probe_reachability(client):
            logger.warning("Translation service unreachable, answering from the cache only")
        target = args.to or ctx.language
        for text in args.texts:
            print(await ctx.resolve(text, target))
    return 0


async def _warm(args: argparse.Namespace, settings: Settings) -> int:
    if args.all or not args.languages:
        languages = settings.supported_languages_list
    else:
        languages = args.languages

    texts = list(UI_STRINGS) if not args.strings_file else []
    for path in args.strings_file or []:
        texts.extend(load_strings_file(path))

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        ctx = create_context(settings, client=client)
        stats = await warm_translation_cache(ctx.resolver, languages, texts)

    print(f"Languages warmed:  {stats.languages}")
    print(f"Unique texts:      {stats.texts}")
    print(f"Already cached:    {stats.cached}")
    print(f"New translations:  {stats.translated}")
    print(f"Untranslated:      {stats.untranslated}")
    return 0


def _stats(args: argparse.Namespace, settings: Settings) -> int:
    ctx = create_context(settings, providers=[])
    counts = ctx.cache.stats()
    total = counts.pop("total")
    for lang, count in sorted(counts.items()):
        print(f"{get_language_name(lang)} ({lang}): {count}")
    print(f"Total: {total}")
    print(f"Current language: {ctx.language}")
    return 0


def _clear(args: argparse.Namespace, settings: Settings) -> int:
    ctx = create_context(settings, providers=[])
    removed = len(ctx.cache)
    ctx.clear_cache()
    print(f"Removed {removed} cached translations")
    return 0


# =============================================================================
# Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smarttext",
        description="On-demand UI text translation with a persistent cache",
    )
    parser.add_argument("--log-level", help="Override SMARTTEXT_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("translate", help="Resolve texts through the cache and providers")
    p.add_argument("texts", nargs="+", help="Source texts")
    p.add_argument("--to", "-t", help="Target language (default: current language)")
    p.add_argument("--offline", action="store_true", help="Use the cache only")

    p = sub.add_parser("warm", help="Pre-translate UI strings into the cache")
    p.add_argument("--languages", "-l", nargs="+", help="Languages to warm")
    p.add_argument("--all", "-a", action="store_true", help="Warm every supported language")
    p.add_argument(
        "--strings-file", "-f",
        action="append",
        help="YAML file of UI strings (repeatable; replaces the built-in list)",
    )

    sub.add_parser("stats", help="Show cached translation counts")
    sub.add_parser("clear", help="Delete every cached translation")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        if args.command == "translate":
            return asyncio.run(_translate(args, settings))
        if args.command == "warm":
            return asyncio.run(_warm(args, settings))
        if args.command == "stats":
            return _stats(args, settings)
        if args.command == "clear":
            return _clear(args, settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
