"""
smarttext - reactive on-demand translation for English-authored UIs.

Usage:
    from smarttext import create_context

    ctx = create_context()
    label = ctx.text("Save")
    ctx.switch_to("ar")
"""

from smarttext.config import Settings, get_settings
from smarttext.context import TranslationContext, create_context
from smarttext.errors import (
    ConfigurationError,
    ProviderError,
    SmartTextError,
    StorageError,
    UnsupportedLanguageError,
)

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "TranslationContext",
    "create_context",
    "SmartTextError",
    "ConfigurationError",
    "UnsupportedLanguageError",
    "ProviderError",
    "StorageError",
    "__version__",
]
