"""Ollama provider implementation using its OpenAI-compatible API."""

from typing import ClassVar

from auto_anki.config_models import AIProvider, ProviderSettings
from auto_anki.exceptions import ConfigurationError

from .base import BaseLLMProvider
from .capabilities import PROVIDER_SPECS, ProviderSpec

# Ollama ignores the credential, but the OpenAI protocol requires one
OLLAMA_PLACEHOLDER_KEY = "ollama"


class OllamaProvider(BaseLLMProvider):
    """Local or remote Ollama server.

    Configuration:
        base_url: Server root, e.g. http://localhost:11434 (required);
            requests go to ``{base_url}/v1``
    """

    spec: ClassVar[ProviderSpec] = PROVIDER_SPECS[AIProvider.OLLAMA]

    def __init__(self, settings: ProviderSettings):
        if not settings.base_url:
            raise ConfigurationError(
                "Ollama base URL is required",
                suggestion="Set OLLAMA_BASE_URL or ollama_base_url in config.yaml",
                context={"provider": AIProvider.OLLAMA.value},
            )
        super().__init__(settings)

    def _resolve_base_url(self, settings: ProviderSettings) -> str:
        return f"{(settings.base_url or '').rstrip('/')}/v1"

    def _api_key(self) -> str:
        return OLLAMA_PLACEHOLDER_KEY
