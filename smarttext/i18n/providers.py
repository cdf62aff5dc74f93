"""
Translation providers.

Each provider turns (text, source, target) into a translated string over
the network. A provider returns None when it has nothing to offer and
raises when the call fails or the response is malformed; the chain treats
both the same way. Request shaping stays inside the provider.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

import dspy
import httpx

from smarttext.config import Settings
from smarttext.errors import ConfigurationError, ProviderError
from smarttext.i18n.languages import get_language_name

logger = logging.getLogger(__name__)


# =============================================================================
# Base Classes
# =============================================================================


class TranslationProvider(ABC):
    """
    Base class for all translation back-ends.

    Example:
        class EchoProvider(TranslationProvider):
            name = "echo"

            async def translate(self, text, source, target):
                return f"[{target}] {text}"
    """

    name: str = "provider"

    @abstractmethod
    async def translate(self, text: str, source: str, target: str) -> str | None:
        """
        Translate ``text`` from ``source`` to ``target``.

        Returns:
            The translation, or None when the provider has nothing to offer
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name})>"


class HTTPProvider(TranslationProvider):
    """
    A provider that talks HTTP through httpx.

    Pass a shared ``httpx.AsyncClient`` to reuse connections (or to mock the
    transport in tests). Without one, each call opens a short-lived client.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self._client = client
        self.timeout = timeout

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body of a 2xx response."""
        if self._client is not None:
            response = await self._client.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)

        if not response.is_success:
            raise ProviderError(self.name, f"HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON body: {e}") from e


# =============================================================================
# Google (public gtx endpoint)
# =============================================================================


class GoogleTranslateProvider(HTTPProvider):
    """Google Translate via the keyless ``translate_a/single`` endpoint."""

    name = "google"

    def __init__(
        self,
        url: str = "https://translate.googleapis.com/translate_a/single",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client, timeout)
        self.url = url

    async def translate(self, text: str, source: str, target: str) -> str | None:
        data = await self._send(
            "GET",
            self.url,
            params={"client": "gtx", "sl": source, "tl": target, "dt": "t", "q": text},
        )

        # Shape: [[["<translated>", "<original>", ...], ...], ...]
        try:
            segments = data[0]
            parts = [segment[0] for segment in segments if segment and segment[0]]
        except (IndexError, KeyError, TypeError) as e:
            raise ProviderError(self.name, f"unexpected response shape: {e}") from e

        if not all(isinstance(p, str) for p in parts):
            raise ProviderError(self.name, "non-string segment in response")
        return "".join(parts) or None


# =============================================================================
# Microsoft Translator
# =============================================================================


class MicrosoftTranslatorProvider(HTTPProvider):
    """
    Azure Translator v3.

    Without a subscription key this is a placeholder that always returns None.
    """

    name = "microsoft"

    def __init__(
        self,
        key: str = "",
        region: str = "",
        url: str = "https://api.cognitive.microsofttranslator.com/translate",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client, timeout)
        self.key = key
        self.region = region
        self.url = url

    @property
    def is_configured(self) -> bool:
        return bool(self.key)

    async def translate(self, text: str, source: str, target: str) -> str | None:
        if not self.is_configured:
            return None

        headers = {"Ocp-Apim-Subscription-Key": self.key}
        if self.region:
            headers["Ocp-Apim-Subscription-Region"] = self.region

        data = await self._send(
            "POST",
            self.url,
            params={"api-version": "3.0", "from": source, "to": target},
            headers=headers,
            json=[{"Text": text}],
        )

        try:
            translated = data[0]["translations"][0]["text"]
        except (IndexError, KeyError, TypeError) as e:
            raise ProviderError(self.name, f"unexpected response shape: {e}") from e

        if not isinstance(translated, str):
            raise ProviderError(self.name, "translation is not a string")
        return translated


# =============================================================================
# LibreTranslate
# =============================================================================


class LibreTranslateProvider(HTTPProvider):
    """LibreTranslate ``/translate`` endpoint."""

    name = "libre"

    def __init__(
        self,
        url: str = "https://libretranslate.de/translate",
        api_key: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        super().__init__(client, timeout)
        self.url = url
        self.api_key = api_key

    async def translate(self, text: str, source: str, target: str) -> str | None:
        body = {"q": text, "source": source, "target": target, "format": "text"}
        if self.api_key:
            body["api_key"] = self.api_key

        data = await self._send("POST", self.url, json=body)

        if not isinstance(data, dict):
            raise ProviderError(self.name, "response is not an object")
        translated = data.get("translatedText")
        if translated is not None and not isinstance(translated, str):
            raise ProviderError(self.name, "translatedText is not a string")
        return translated


# =============================================================================
# LLM (DSPy)
# =============================================================================


class TranslateText(dspy.Signature):
    """Translate short user-interface text while preserving meaning and tone."""

    text: str = dspy.InputField(desc="Text to translate")
    source_language: str = dspy.InputField(desc="Source language name (e.g., 'English')")
    target_language: str = dspy.InputField(desc="Target language name (e.g., 'Arabic')")

    translated_text: str = dspy.OutputField(desc="Translated text only, no commentary")


class LLMProvider(TranslationProvider):
    """
    Translation through a hosted LLM using DSPy.

    Without an API key this is a placeholder that always returns None.
    """

    name = "llm"

    def __init__(self, provider: str = "gemini", model: str = "gemini-2.0-flash", api_key: str = ""):
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self._module: dspy.Predict | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def module(self) -> dspy.Predict:
        if self._module is None:
            self._module = dspy.Predict(TranslateText)
        return self._module

    async def translate(self, text: str, source: str, target: str) -> str | None:
        if not self.is_configured:
            return None

        from smarttext.services.ai.client import get_lm

        lm = get_lm(self.provider, self.model, self.api_key)
        with dspy.context(lm=lm):
            result = self.module(
                text=text,
                source_language=get_language_name(source),
                target_language=get_language_name(target),
            )

        translated = getattr(result, "translated_text", None)
        if translated is not None and not isinstance(translated, str):
            raise ProviderError(self.name, "translated_text is not a string")
        return translated.strip() if translated else None


# =============================================================================
# Function-backed provider
# =============================================================================


class FunctionProvider(TranslationProvider):
    """
    Wrap a plain function (sync or async) as a provider.

    The function receives ``(text, source, target)``.
    """

    def __init__(self, name: str, func: Callable[[str, str, str], str | None | Awaitable[str | None]]):
        self.name = name
        self._func = func

    async def translate(self, text: str, source: str, target: str) -> str | None:
        result = self._func(text, source, target)
        if inspect.isawaitable(result):
            result = await result
        return result


# =============================================================================
# Factory
# =============================================================================


def build_providers(settings: Settings, client: httpx.AsyncClient | None = None) -> list[TranslationProvider]:
    """
    Build providers in the order named by ``settings.providers``.

    Raises:
        ConfigurationError: for an unknown provider name
    """
    builders: dict[str, Callable[[], TranslationProvider]] = {
        "google": lambda: GoogleTranslateProvider(
            url=settings.google_translate_url,
            client=client,
            timeout=settings.http_timeout,
        ),
        "microsoft": lambda: MicrosoftTranslatorProvider(
            key=settings.microsoft_translator_key,
            region=settings.microsoft_translator_region,
            url=settings.microsoft_translator_url,
            client=client,
            timeout=settings.http_timeout,
        ),
        "libre": lambda: LibreTranslateProvider(
            url=settings.libretranslate_url,
            api_key=settings.libretranslate_api_key,
            client=client,
            timeout=settings.http_timeout,
        ),
        "llm": lambda: LLMProvider(
            provider=settings.llm_provider,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
        ),
    }

    providers: list[TranslationProvider] = []
    for name in settings.providers_list:
        if name not in builders:
            raise ConfigurationError(
                f"Unknown translation provider {name!r} (known: {', '.join(builders)})"
            )
        providers.append(builders[name]())

    logger.debug(f"Provider order: {[p.name for p in providers]}")
    return providers
