"""
Language codes and utilities.

The shipped UI is English-authored with Arabic as the alternate language,
but nothing below assumes exactly two languages.
"""

from enum import Enum


class Language(str, Enum):
    """Known language codes."""

    EN = "en"      # English (source language of the UI)
    AR = "ar"      # Arabic - RTL

    # Codes the providers handle well, available via SMARTTEXT_SUPPORTED_LANGUAGES
    ES = "es"
    FR = "fr"
    DE = "de"
    TR = "tr"
    UR = "ur"      # RTL
    FA = "fa"      # RTL
    HE = "he"      # RTL


# Human-readable names
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "ar": "Arabic",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "tr": "Turkish",
    "ur": "Urdu",
    "fa": "Persian",
    "he": "Hebrew",
}

# Labels shown on a language switcher, in the language itself
NATIVE_NAMES: dict[str, str] = {
    "en": "English",
    "ar": "العربية",
    "es": "Español",
    "fr": "Français",
    "de": "Deutsch",
    "tr": "Türkçe",
    "ur": "اردو",
    "fa": "فارسی",
    "he": "עברית",
}

RTL_LANGUAGES: frozenset[str] = frozenset({"ar", "he", "fa", "ur"})

_VARIANTS = {
    "english": "en",
    "arabic": "ar",
    "spanish": "es",
    "french": "fr",
    "german": "de",
    "turkish": "tr",
    "urdu": "ur",
    "persian": "fa",
    "farsi": "fa",
    "hebrew": "he",
}


def normalize_language_code(code: str) -> str:
    """
    Normalize a language code to its bare lowercase form.

    Accepts English names ("Arabic") and region tags ("ar-SA", "en_US").
    """
    if isinstance(code, Enum):
        code = code.value
    code = str(code).strip().lower().replace("_", "-")
    if code in _VARIANTS:
        return _VARIANTS[code]
    # Region subtags do not change which translation we fetch
    return code.split("-", 1)[0] if "-" in code else code


def get_language_name(code: str) -> str:
    """Get human-readable language name."""
    return LANGUAGE_NAMES.get(normalize_language_code(code), code)


def get_native_name(code: str) -> str:
    return NATIVE_NAMES.get(normalize_language_code(code), code)


def is_rtl(code: str) -> bool:
    """Check if language is right-to-left."""
    return normalize_language_code(code) in RTL_LANGUAGES


def text_direction(code: str) -> str:
    """Return the ``dir`` attribute value for a language: "rtl" or "ltr"."""
    return "rtl" if is_rtl(code) else "ltr"
