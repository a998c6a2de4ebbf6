"""Base LLM provider for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, ClassVar

import httpx

from auto_anki.config_models import GenerationOptions, ProviderSettings
from auto_anki.domain.entities.message import PromptMessage, UserMessage, messages_to_wire
from auto_anki.exceptions import ProviderConnectionError, ProviderError, ProviderResponseError
from auto_anki.utils.logging import get_logger

from .capabilities import ProviderSpec
from .error_handler import build_response_error

logger = get_logger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Both supported backends speak the OpenAI chat completions protocol;
    subclasses only differ in endpoint, credential and the fixed quirks
    carried by ``spec``.
    """

    spec: ClassVar[ProviderSpec]

    def __init__(self, settings: ProviderSettings):
        """Initialize the provider.

        Args:
            settings: Connection settings for this provider
        """
        self.settings = settings
        self.base_url = self._resolve_base_url(settings).rstrip("/")
        self.timeout = settings.timeout
        logger.debug(
            "provider_initialized",
            provider=self.__class__.__name__,
            config=self._safe_config_for_logging(),
        )

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @abstractmethod
    def _resolve_base_url(self, settings: ProviderSettings) -> str:
        """Return the endpoint root that ``/chat/completions`` hangs off."""

    @abstractmethod
    def _api_key(self) -> str:
        """Return the bearer credential sent with every request."""

    def _safe_config_for_logging(self) -> dict[str, Any]:
        """Return settings with the API key redacted for logging."""
        safe_config = self.settings.model_dump(mode="json")
        safe_config["base_url"] = self.base_url
        if safe_config.get("api_key"):
            safe_config["api_key"] = "***REDACTED***"
        return safe_config

    def build_client(self) -> httpx.AsyncClient:
        """Create an HTTP client bound to this provider's endpoint."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Authorization": f"Bearer {self._api_key()}",
                "Content-Type": "application/json",
            },
        )

    def build_request(
        self,
        messages: Sequence[PromptMessage],
        model: str,
        n: int,
        options: GenerationOptions,
        max_tokens: int,
    ) -> dict[str, Any]:
        """Build the chat completion payload.

        The JSON response_format hint is only attached for providers that
        support it and only when no message carries media.
        """
        has_media = any(
            isinstance(message, UserMessage) and message.is_multimodal
            for message in messages
        )
        payload: dict[str, Any] = {
            **options.sampling_params(),
            "model": model,
            "messages": messages_to_wire(list(messages)),
            "max_tokens": max_tokens,
            "n": n,
            "stream": False,
        }
        if self.spec.supports_response_format_hint and not has_media:
            payload["response_format"] = JSON_RESPONSE_FORMAT
        return payload

    async def complete(
        self,
        messages: Sequence[PromptMessage],
        model: str,
        n: int,
        options: GenerationOptions,
        max_tokens: int,
    ) -> list[str]:
        """Request ``n`` completions and return each choice's text.

        Raises:
            ProviderConnectionError: If no response was received
            ProviderResponseError: If the provider returned an error status
            ProviderError: If the body is not a chat completion
        """
        payload = self.build_request(messages, model, n, options, max_tokens)
        logger.info(
            "completion_requested",
            provider=self.spec.name.value,
            model=model,
            n=n,
            max_tokens=max_tokens,
            json_hint="response_format" in payload,
        )

        try:
            async with self.build_client() as client:
                response = await client.post("/chat/completions", json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._response_error(e.response) from e
        except httpx.RequestError as e:
            raise ProviderConnectionError(
                f"Could not connect to {self.display_name}! {e}",
                provider=self.spec.name.value,
                suggestion=f"Check that {self.base_url} is reachable",
                context={"base_url": self.base_url, "model": model},
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.display_name} returned a non-JSON response",
                provider=self.spec.name.value,
                context={"body": response.text[:1000]},
            ) from e
        return self._choice_contents(data, response)

    def _choice_contents(self, data: Any, response: httpx.Response) -> list[str]:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list):
            raise ProviderError(
                f"{self.display_name} returned a response without choices",
                provider=self.spec.name.value,
                context={"body": response.text[:1000]},
            )

        contents: list[str] = []
        for choice in choices:
            message = choice.get("message") if isinstance(choice, dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            contents.append(content if isinstance(content, str) else "")
        return contents

    def _response_error(self, response: httpx.Response) -> ProviderResponseError:
        return build_response_error(self.spec, response)

    async def check_connection(self) -> bool:
        """Check whether the provider answers on its models endpoint."""
        try:
            async with self.build_client() as client:
                response = await client.get("/models")
            return response.status_code == 200
        except httpx.RequestError as e:
            logger.error(
                "provider_connection_check_failed",
                provider=self.spec.name.value,
                base_url=self.base_url,
                error=str(e),
            )
            return False

    async def list_models(self) -> list[str]:
        """List model identifiers exposed by the provider.

        Raises:
            ProviderConnectionError: If the provider cannot be reached
            ProviderResponseError: If the provider returned an error status
        """
        try:
            async with self.build_client() as client:
                response = await client.get("/models")
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._response_error(e.response) from e
        except httpx.RequestError as e:
            raise ProviderConnectionError(
                f"Could not connect to {self.display_name}! {e}",
                provider=self.spec.name.value,
                context={"base_url": self.base_url},
            ) from e

        models = [model["id"] for model in response.json().get("data", [])]
        logger.info(
            "provider_list_models_success",
            provider=self.spec.name.value,
            model_count=len(models),
        )
        return models
