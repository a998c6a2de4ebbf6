"""Unit tests for LLM providers.

Tests cover:
- Model selection per provider and media presence
- Provider factory creation and configuration checks
- Request payload quirks (response_format hint, token budget)
- Error handling for HTTP errors and connectivity failures
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from auto_anki.config_models import AIProvider, GenerationOptions, MultimodalSettings, ProviderSettings
from auto_anki.domain.entities.media import MimeType
from auto_anki.domain.entities.message import MediaSegment, TextSegment, UserMessage
from auto_anki.exceptions import (
    ConfigurationError,
    ProviderConnectionError,
    ProviderError,
    ProviderResponseError,
)
from auto_anki.prompts import build_note_messages
from auto_anki.providers import (
    OllamaProvider,
    OpenAIProvider,
    ProviderFactory,
    get_provider_spec,
    select_model,
)
from tests.fixtures import chat_completion, error_body

OPENAI_COMPLETIONS = "https://api.openai.com/v1/chat/completions"
OLLAMA_COMPLETIONS = "http://localhost:11434/v1/chat/completions"


def _media_messages():
    return [
        UserMessage(
            content=(
                TextSegment(text="notes"),
                MediaSegment(mime_type=MimeType.PNG, encoded_content="AAAA"),
            )
        )
    ]


# Model selection


def test_ollama_text_model_is_configured_default(ollama_settings):
    assert select_model(ollama_settings, None, has_media=False) == "llama3.2"


def test_ollama_media_falls_back_to_default_vision_model(ollama_settings):
    multimodal = MultimodalSettings(enabled=True)
    assert select_model(ollama_settings, multimodal, has_media=True) == "llama3.2-vision:11b"


def test_configured_vision_model_wins(ollama_settings):
    multimodal = MultimodalSettings(enabled=True, vision_model="llava:13b")
    assert select_model(ollama_settings, multimodal, has_media=True) == "llava:13b"


def test_openai_defaults_when_unconfigured():
    settings = ProviderSettings(provider=AIProvider.OPENAI, api_key="k")
    assert select_model(settings, None, has_media=False) == "gpt-3.5-turbo-1106"
    assert select_model(settings, MultimodalSettings(enabled=True), has_media=True) == "gpt-4o"


def test_provider_specs():
    assert get_provider_spec("openai").supports_response_format_hint is True
    assert get_provider_spec(AIProvider.OLLAMA).supports_response_format_hint is False


# Factory


def test_factory_creates_openai_provider(openai_settings):
    provider = ProviderFactory.create_provider(openai_settings)
    assert isinstance(provider, OpenAIProvider)
    assert provider.base_url == "https://api.openai.com/v1"


def test_factory_creates_ollama_provider_with_v1_suffix(ollama_settings):
    provider = ProviderFactory.create_provider(ollama_settings)
    assert isinstance(provider, OllamaProvider)
    assert provider.base_url == "http://localhost:11434/v1"


def test_openai_requires_api_key():
    with pytest.raises(ConfigurationError, match="API key is required"):
        ProviderFactory.create_provider(ProviderSettings(provider=AIProvider.OPENAI))


def test_ollama_requires_base_url():
    with pytest.raises(ConfigurationError, match="base URL is required"):
        ProviderFactory.create_provider(ProviderSettings(provider=AIProvider.OLLAMA))


def test_safe_config_redacts_api_key(openai_settings):
    provider = OpenAIProvider(openai_settings)

    safe = provider._safe_config_for_logging()

    assert safe["api_key"] == "***REDACTED***"
    assert "sk-test-key" not in repr(openai_settings)


# Request payload


def test_openai_text_request_has_json_hint(openai_settings):
    provider = OpenAIProvider(openai_settings)
    options = GenerationOptions(temperature=0.5, top_p=0.9, presence_penalty=0.1)

    payload = provider.build_request(
        build_note_messages("notes", 3), "gpt-3.5-turbo-1106", n=2, options=options, max_tokens=300
    )

    assert payload["response_format"] == {"type": "json_object"}
    assert payload["n"] == 2
    assert payload["max_tokens"] == 300
    assert payload["temperature"] == 0.5
    assert payload["top_p"] == 0.9
    assert payload["presence_penalty"] == 0.1
    assert payload["frequency_penalty"] == 0.0
    assert "max_tokens_per_question" not in payload


def test_openai_media_request_has_no_json_hint(openai_settings, generation_options):
    provider = OpenAIProvider(openai_settings)
    payload = provider.build_request(_media_messages(), "gpt-4o", 1, generation_options, 100)
    assert "response_format" not in payload


def test_ollama_request_never_has_json_hint(ollama_settings, generation_options):
    provider = OllamaProvider(ollama_settings)
    payload = provider.build_request(
        build_note_messages("notes", 1), "llama3.2", 1, generation_options, 100
    )
    assert "response_format" not in payload


# Completion calls


@pytest.mark.asyncio
@respx.mock
async def test_complete_returns_choice_contents(openai_settings, generation_options):
    route = respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(200, json=chat_completion("first", "second"))
    )
    provider = OpenAIProvider(openai_settings)

    contents = await provider.complete(
        build_note_messages("notes", 1), "gpt-3.5-turbo-1106", 2, generation_options, 100
    )

    assert contents == ["first", "second"]
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer sk-test-key"
    assert json.loads(request.content)["model"] == "gpt-3.5-turbo-1106"


@pytest.mark.asyncio
@respx.mock
async def test_ollama_sends_placeholder_key(ollama_settings, generation_options):
    route = respx.post(OLLAMA_COMPLETIONS).mock(
        return_value=httpx.Response(200, json=chat_completion("ok"))
    )
    provider = OllamaProvider(ollama_settings)

    await provider.complete(build_note_messages("n", 1), "llama3.2", 1, generation_options, 100)

    assert route.calls.last.request.headers["Authorization"] == "Bearer ollama"


@pytest.mark.asyncio
@respx.mock
async def test_null_content_becomes_empty_string(openai_settings, generation_options):
    body = chat_completion("x")
    body["choices"][0]["message"]["content"] = None
    respx.post(OPENAI_COMPLETIONS).mock(return_value=httpx.Response(200, json=body))

    contents = await OpenAIProvider(openai_settings).complete(
        build_note_messages("n", 1), "m", 1, generation_options, 100
    )

    assert contents == [""]


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize("body", [[], {"choices": None}, {"object": "chat.completion"}])
async def test_body_without_choice_list_raises_provider_error(
    body, ollama_settings, generation_options
):
    respx.post(OLLAMA_COMPLETIONS).mock(return_value=httpx.Response(200, json=body))

    with pytest.raises(ProviderError, match="without choices") as exc_info:
        await OllamaProvider(ollama_settings).complete(
            build_note_messages("n", 1), "m", 1, generation_options, 100
        )

    assert "body" in exc_info.value.context


@pytest.mark.asyncio
@respx.mock
async def test_malformed_choice_entries_become_empty_strings(openai_settings, generation_options):
    body = {
        "choices": [
            "oops",
            {"message": None},
            {"message": {"content": 42}},
            {"message": {"content": "ok"}},
        ]
    }
    respx.post(OPENAI_COMPLETIONS).mock(return_value=httpx.Response(200, json=body))

    contents = await OpenAIProvider(openai_settings).complete(
        build_note_messages("n", 1), "m", 4, generation_options, 100
    )

    assert contents == ["", "", "", "ok"]


@pytest.mark.asyncio
@respx.mock
async def test_openai_401_message(openai_settings, generation_options):
    respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(401, json=error_body("Incorrect API key", "invalid_api_key"))
    )

    with pytest.raises(ProviderResponseError) as exc_info:
        await OpenAIProvider(openai_settings).complete(
            build_note_messages("n", 1), "m", 1, generation_options, 100
        )

    error = exc_info.value
    assert error.status_code == 401
    assert error.message == (
        "ERR 401: Could not connect to OpenAI! Check that your API Key is correct/valid!"
    )
    assert error.error_code == "invalid_api_key"


@pytest.mark.asyncio
@respx.mock
async def test_ollama_401_message(ollama_settings, generation_options):
    respx.post(OLLAMA_COMPLETIONS).mock(return_value=httpx.Response(401))

    with pytest.raises(ProviderResponseError) as exc_info:
        await OllamaProvider(ollama_settings).complete(
            build_note_messages("n", 1), "llama3.2", 1, generation_options, 100
        )

    assert exc_info.value.message == (
        "ERR 401: Could not connect to Ollama! Check that Ollama is running and accessible!"
    )


@pytest.mark.asyncio
@respx.mock
async def test_other_status_includes_provider_error(openai_settings, generation_options):
    respx.post(OPENAI_COMPLETIONS).mock(
        return_value=httpx.Response(429, json=error_body("Rate limit reached", "rate_limit_exceeded"))
    )

    with pytest.raises(ProviderResponseError) as exc_info:
        await OpenAIProvider(openai_settings).complete(
            build_note_messages("n", 1), "m", 1, generation_options, 100
        )

    assert exc_info.value.message == (
        "ERR 429: Could not connect to OpenAI! (rate_limit_exceeded) Rate limit reached"
    )


@pytest.mark.asyncio
@respx.mock
async def test_error_without_body(openai_settings, generation_options):
    respx.post(OPENAI_COMPLETIONS).mock(return_value=httpx.Response(500))

    with pytest.raises(ProviderResponseError) as exc_info:
        await OpenAIProvider(openai_settings).complete(
            build_note_messages("n", 1), "m", 1, generation_options, 100
        )

    assert exc_info.value.message == "ERR 500: Could not connect to OpenAI! (unknown) Unknown error"


@pytest.mark.asyncio
@respx.mock
async def test_connectivity_failure(ollama_settings, generation_options):
    respx.post(OLLAMA_COMPLETIONS).mock(side_effect=httpx.ConnectError("Connection refused"))

    with pytest.raises(ProviderConnectionError) as exc_info:
        await OllamaProvider(ollama_settings).complete(
            build_note_messages("n", 1), "llama3.2", 1, generation_options, 100
        )

    assert exc_info.value.message.startswith("Could not connect to Ollama!")
    assert "Connection refused" in exc_info.value.message
    assert exc_info.value.provider == "ollama"


@pytest.mark.asyncio
@respx.mock
async def test_non_json_success_body(openai_settings, generation_options):
    respx.post(OPENAI_COMPLETIONS).mock(return_value=httpx.Response(200, text="<html>"))

    with pytest.raises(ProviderError, match="non-JSON"):
        await OpenAIProvider(openai_settings).complete(
            build_note_messages("n", 1), "m", 1, generation_options, 100
        )


# Diagnostics


@pytest.mark.asyncio
@respx.mock
async def test_list_models_and_check_connection(ollama_settings):
    respx.get("http://localhost:11434/v1/models").mock(
        return_value=httpx.Response(
            200, json={"object": "list", "data": [{"id": "llama3.2"}, {"id": "llava"}]}
        )
    )
    provider = OllamaProvider(ollama_settings)

    assert await provider.check_connection() is True
    assert await provider.list_models() == ["llama3.2", "llava"]


@pytest.mark.asyncio
@respx.mock
async def test_check_connection_unreachable(ollama_settings):
    respx.get("http://localhost:11434/v1/models").mock(side_effect=httpx.ConnectError("down"))
    assert await OllamaProvider(ollama_settings).check_connection() is False
