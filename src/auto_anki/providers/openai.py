"""OpenAI provider implementation."""

from typing import ClassVar

from auto_anki.config_models import AIProvider, ProviderSettings
from auto_anki.exceptions import ConfigurationError

from .base import BaseLLMProvider
from .capabilities import PROVIDER_SPECS, ProviderSpec


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions.

    Configuration:
        api_key: OpenAI API key (required)
        base_url: API endpoint URL (default: https://api.openai.com/v1)
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"

    spec: ClassVar[ProviderSpec] = PROVIDER_SPECS[AIProvider.OPENAI]

    def __init__(self, settings: ProviderSettings):
        if not settings.api_key:
            raise ConfigurationError(
                "OpenAI API key is required",
                suggestion="Set OPENAI_API_KEY or openai_api_key in config.yaml",
                context={"provider": AIProvider.OPENAI.value},
            )
        super().__init__(settings)

    def _resolve_base_url(self, settings: ProviderSettings) -> str:
        return settings.base_url or self.DEFAULT_BASE_URL

    def _api_key(self) -> str:
        return self.settings.api_key or ""
