"""
Exception types.

Only configuration errors ever reach callers. Provider and storage errors are
raised internally and recovered by the chain and the cache.
"""


class SmartTextError(Exception):
    """Base class for all smarttext errors."""
    pass


class ConfigurationError(SmartTextError):
    """Invalid settings or construction arguments."""
    pass


class UnsupportedLanguageError(ConfigurationError):
    """A language outside the configured set was requested."""

    def __init__(self, language: str, supported: list[str]):
        self.language = language
        self.supported = supported
        super().__init__(
            f"Unsupported language: {language!r} (supported: {', '.join(supported)})"
        )


class ProviderError(SmartTextError):
    """A translation provider returned an unusable response."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class StorageError(SmartTextError):
    """Durable storage could not be read or written."""
    pass
