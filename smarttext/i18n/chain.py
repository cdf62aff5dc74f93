"""
Provider fallback chain.

Providers are tried once each, in priority order, until one produces a
non-empty string. Every call is guarded: an exception or malformed response
is recorded as an ERROR outcome and the next provider is tried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from smarttext.i18n.providers import TranslationProvider

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class ProviderOutcome:
    """What a single provider call produced."""

    provider: str
    status: OutcomeStatus
    value: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


@dataclass
class ChainResult:
    """The winning value (if any) and the outcome of every provider tried."""

    value: str | None = None
    outcomes: list[ProviderOutcome] = field(default_factory=list)

    @property
    def provider(self) -> str | None:
        """Name of the provider that produced ``value``."""
        for outcome in self.outcomes:
            if outcome.ok:
                return outcome.provider
        return None

    @property
    def exhausted(self) -> bool:
        return self.value is None


class ProviderChain:
    """
    Ordered list of translation providers.

    Usage:
        chain = ProviderChain([google, microsoft, libre], source_language="en")
        text = await chain.attempt("Save", "ar")  # str or None
    """

    def __init__(self, providers: list[TranslationProvider], source_language: str = "en"):
        self._providers = list(providers)
        self.source_language = source_language

    @property
    def providers(self) -> list[TranslationProvider]:
        return list(self._providers)

    async def _call(self, provider: TranslationProvider, text: str, target: str) -> ProviderOutcome:
        try:
            value = await provider.translate(text, self.source_language, target)
        except Exception as e:
            logger.warning(f"Translation provider {provider.name} failed: {e}")
            return ProviderOutcome(provider.name, OutcomeStatus.ERROR, error=e)

        if value is None:
            return ProviderOutcome(provider.name, OutcomeStatus.ABSENT)
        if not isinstance(value, str):
            logger.warning(f"Translation provider {provider.name} returned {type(value).__name__}")
            return ProviderOutcome(
                provider.name,
                OutcomeStatus.ERROR,
                error=TypeError(f"expected str, got {type(value).__name__}"),
            )
        if not value.strip():
            return ProviderOutcome(provider.name, OutcomeStatus.ABSENT)
        return ProviderOutcome(provider.name, OutcomeStatus.SUCCESS, value=value)

    async def attempt_detailed(self, text: str, target: str) -> ChainResult:
        """Walk the chain and report every provider outcome."""
        result = ChainResult()
        for provider in self._providers:
            outcome = await self._call(provider, text, target)
            result.outcomes.append(outcome)
            if outcome.ok:
                result.value = outcome.value
                break

        if result.exhausted:
            logger.debug(f"No provider could translate {text!r} to {target}")
        return result

    async def attempt(self, text: str, target: str) -> str | None:
        """First successful translation, or None if every provider came up empty."""
        result = await self.attempt_detailed(text, target)
        return result.value

    def __len__(self) -> int:
        return len(self._providers)
