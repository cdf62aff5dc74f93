"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (prefix ``SMARTTEXT_``)."""

    model_config = SettingsConfigDict(
        env_prefix="SMARTTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Languages
    # ==========================================================================

    default_language: str = "en"
    supported_languages: str = "en,ar"
    persist_language: bool = True

    # ==========================================================================
    # Storage
    # ==========================================================================

    storage_dir: str = "./data/smarttext"
    cache_slot: str = "translation_cache"
    language_slot: str = "language"

    # ==========================================================================
    # Providers (comma separated, tried in order)
    # ==========================================================================

    providers: str = "google,microsoft,libre"
    http_timeout: float = 10.0

    google_translate_url: str = "https://translate.googleapis.com/translate_a/single"

    microsoft_translator_url: str = "https://api.cognitive.microsofttranslator.com/translate"
    microsoft_translator_key: str = ""
    microsoft_translator_region: str = ""

    libretranslate_url: str = "https://libretranslate.de/translate"
    libretranslate_api_key: str = ""

    # Optional LLM provider (DSPy / litellm model naming)
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.0-flash"
    llm_api_key: str = ""

    # ==========================================================================
    # Reachability
    # ==========================================================================

    reachability_probe_url: str = "https://translate.googleapis.com"
    start_online: bool = True

    # ==========================================================================
    # Logging
    # ==========================================================================

    log_level: str = "INFO"

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def supported_languages_list(self) -> list[str]:
        langs = [l.strip().lower() for l in self.supported_languages.split(",") if l.strip()]
        if self.default_language not in langs:
            langs.insert(0, self.default_language)
        return langs

    @property
    def providers_list(self) -> list[str]:
        return [p.strip().lower() for p in self.providers.split(",") if p.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
