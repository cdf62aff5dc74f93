"""Shared fixtures: in-memory storage, scripted providers and a wired context."""

import pytest

from smarttext.config import Settings
from smarttext.context import TranslationContext
from smarttext.storage.local import InMemoryKeyValueStore

from tests.fakes import ARABIC, RecordingProvider


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        default_language="en",
        supported_languages="en,ar",
        providers="google",
        storage_dir="unused",
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def arabic() -> RecordingProvider:
    return RecordingProvider("fake", dict(ARABIC))


@pytest.fixture
def ctx(settings, store, arabic) -> TranslationContext:
    """Context with a single scripted Arabic provider."""
    return TranslationContext(settings, store, [arabic])
