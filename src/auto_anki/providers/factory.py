"""Provider factory for creating LLM provider instances."""

from auto_anki.config_models import AIProvider, ProviderSettings
from auto_anki.utils.logging import get_logger

from .base import BaseLLMProvider
from .ollama import OllamaProvider
from .openai import OpenAIProvider

logger = get_logger(__name__)


class ProviderFactory:
    """Factory for creating LLM provider instances.

    The provider set is closed: one class per ``AIProvider`` member.
    """

    PROVIDER_MAP: dict[AIProvider, type[BaseLLMProvider]] = {
        AIProvider.OPENAI: OpenAIProvider,
        AIProvider.OLLAMA: OllamaProvider,
    }

    @classmethod
    def create_provider(cls, settings: ProviderSettings) -> BaseLLMProvider:
        """Create the provider selected by ``settings.provider``.

        Raises:
            ConfigurationError: If the provider's credential or endpoint is missing
        """
        provider_class = cls.PROVIDER_MAP[settings.provider]
        try:
            return provider_class(settings)
        except Exception as e:
            logger.error(
                "provider_creation_failed",
                provider_type=settings.provider.value,
                error=str(e),
            )
            raise
