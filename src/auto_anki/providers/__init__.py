"""LLM providers (OpenAI and Ollama)."""

from .base import BaseLLMProvider
from .capabilities import PROVIDER_SPECS, ProviderSpec, get_provider_spec, select_model
from .error_handler import describe_provider_error, log_provider_error
from .factory import ProviderFactory
from .ollama import OllamaProvider
from .openai import OpenAIProvider

__all__ = [
    "PROVIDER_SPECS",
    "BaseLLMProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "ProviderFactory",
    "ProviderSpec",
    "describe_provider_error",
    "get_provider_spec",
    "log_provider_error",
    "select_model",
]
