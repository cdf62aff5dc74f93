"""
Tests for the HTTP translation providers, using httpx.MockTransport.
"""

import json

import httpx
import pytest

from smarttext.config import Settings
from smarttext.errors import ConfigurationError, ProviderError
from smarttext.i18n.providers import (
    FunctionProvider,
    GoogleTranslateProvider,
    LibreTranslateProvider,
    LLMProvider,
    MicrosoftTranslatorProvider,
    build_providers,
)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# Google
# =============================================================================


class TestGoogleTranslateProvider:
    @pytest.mark.asyncio
    async def test_translates(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json=[[["حفظ", "Save", None, None]], None, "en"])

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider(client=client)
            assert await provider.translate("Save", "en", "ar") == "حفظ"

        assert seen["client"] == "gtx"
        assert seen["sl"] == "en"
        assert seen["tl"] == "ar"
        assert seen["q"] == "Save"

    @pytest.mark.asyncio
    async def test_joins_segments(self):
        def handler(request):
            return httpx.Response(200, json=[[["مرحبا. ", "Hello. "], ["وداعا", "Goodbye"]]])

        async with mock_client(handler) as client:
            provider = GoogleTranslateProvider(client=client)
            assert await provider.translate("Hello. Goodbye", "en", "ar") == "مرحبا. وداعا"

    @pytest.mark.asyncio
    async def test_http_error(self):
        async with mock_client(lambda request: httpx.Response(429)) as client:
            provider = GoogleTranslateProvider(client=client)
            with pytest.raises(ProviderError, match="HTTP 429"):
                await provider.translate("Save", "en", "ar")

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        async with mock_client(lambda request: httpx.Response(200, json={"error": "nope"})) as client:
            provider = GoogleTranslateProvider(client=client)
            with pytest.raises(ProviderError):
                await provider.translate("Save", "en", "ar")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async with mock_client(lambda request: httpx.Response(200, text="<html>")) as client:
            provider = GoogleTranslateProvider(client=client)
            with pytest.raises(ProviderError, match="invalid JSON"):
                await provider.translate("Save", "en", "ar")


# =============================================================================
# Microsoft
# =============================================================================


class TestMicrosoftTranslatorProvider:
    @pytest.mark.asyncio
    async def test_placeholder_without_key(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        async with mock_client(handler) as client:
            provider = MicrosoftTranslatorProvider(client=client)
            assert not provider.is_configured
            assert await provider.translate("Save", "en", "ar") is None

        assert calls == []

    @pytest.mark.asyncio
    async def test_translates_with_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["key"] = request.headers.get("Ocp-Apim-Subscription-Key")
            seen["region"] = request.headers.get("Ocp-Apim-Subscription-Region")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[{"translations": [{"text": "حفظ", "to": "ar"}]}])

        async with mock_client(handler) as client:
            provider = MicrosoftTranslatorProvider(key="secret", region="westeurope", client=client)
            assert await provider.translate("Save", "en", "ar") == "حفظ"

        assert seen["params"] == {"api-version": "3.0", "from": "en", "to": "ar"}
        assert seen["key"] == "secret"
        assert seen["region"] == "westeurope"
        assert seen["body"] == [{"Text": "Save"}]

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        async with mock_client(lambda request: httpx.Response(200, json=[])) as client:
            provider = MicrosoftTranslatorProvider(key="secret", client=client)
            with pytest.raises(ProviderError):
                await provider.translate("Save", "en", "ar")


# =============================================================================
# LibreTranslate
# =============================================================================


class TestLibreTranslateProvider:
    @pytest.mark.asyncio
    async def test_translates(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"translatedText": "حفظ"})

        async with mock_client(handler) as client:
            provider = LibreTranslateProvider(client=client)
            assert await provider.translate("Save", "en", "ar") == "حفظ"

        assert seen["method"] == "POST"
        assert seen["body"] == {"q": "Save", "source": "en", "target": "ar", "format": "text"}

    @pytest.mark.asyncio
    async def test_sends_api_key(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"translatedText": "حفظ"})

        async with mock_client(handler) as client:
            provider = LibreTranslateProvider(api_key="k", client=client)
            await provider.translate("Save", "en", "ar")

        assert seen["body"]["api_key"] == "k"

    @pytest.mark.asyncio
    async def test_missing_field_is_absent(self):
        async with mock_client(lambda request: httpx.Response(200, json={"error": "x"})) as client:
            provider = LibreTranslateProvider(client=client)
            assert await provider.translate("Save", "en", "ar") is None

    @pytest.mark.asyncio
    async def test_server_error(self):
        async with mock_client(lambda request: httpx.Response(503)) as client:
            provider = LibreTranslateProvider(client=client)
            with pytest.raises(ProviderError):
                await provider.translate("Save", "en", "ar")


# =============================================================================
# Other providers
# =============================================================================


class TestOtherProviders:
    @pytest.mark.asyncio
    async def test_llm_placeholder_without_key(self):
        provider = LLMProvider(api_key="")
        assert await provider.translate("Save", "en", "ar") is None

    @pytest.mark.asyncio
    async def test_function_provider_sync(self):
        provider = FunctionProvider("upper", lambda text, source, target: text.upper())
        assert await provider.translate("Save", "en", "ar") == "SAVE"

    @pytest.mark.asyncio
    async def test_function_provider_async(self):
        async def translate(text, source, target):
            return f"[{target}] {text}"

        provider = FunctionProvider("tagged", translate)
        assert await provider.translate("Save", "en", "ar") == "[ar] Save"


# =============================================================================
# Factory
# =============================================================================


class TestBuildProviders:
    def test_order_follows_settings(self):
        settings = Settings(_env_file=None, providers="libre, google,microsoft")
        providers = build_providers(settings)

        assert [p.name for p in providers] == ["libre", "google", "microsoft"]

    def test_settings_applied(self):
        settings = Settings(
            _env_file=None,
            providers="libre,microsoft",
            libretranslate_url="http://localhost:5000/translate",
            microsoft_translator_key="secret",
            http_timeout=3.0,
        )
        libre, microsoft = build_providers(settings)

        assert libre.url == "http://localhost:5000/translate"
        assert libre.timeout == 3.0
        assert microsoft.is_configured

    def test_unknown_provider(self):
        settings = Settings(_env_file=None, providers="google,deepl")
        with pytest.raises(ConfigurationError, match="deepl"):
            build_providers(settings)
