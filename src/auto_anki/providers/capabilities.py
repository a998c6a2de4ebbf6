"""Per-provider capabilities and model selection."""

from __future__ import annotations

from dataclasses import dataclass

from auto_anki.config_models import AIProvider, MultimodalSettings, ProviderSettings


@dataclass(frozen=True)
class ProviderSpec:
    """Fixed quirks of one provider variant.

    Attributes:
        name: Provider enum member
        display_name: Name used in user-facing messages
        default_text_model: Model used when no text model is configured
        default_vision_model: Model used for media when no vision model is configured
        supports_response_format_hint: Whether to send a JSON response_format
            on text-only requests
        auth_failure_hint: Message shown instead of the provider error on 401
    """

    name: AIProvider
    display_name: str
    default_text_model: str
    default_vision_model: str
    supports_response_format_hint: bool
    auth_failure_hint: str


PROVIDER_SPECS: dict[AIProvider, ProviderSpec] = {
    AIProvider.OPENAI: ProviderSpec(
        name=AIProvider.OPENAI,
        display_name="OpenAI",
        default_text_model="gpt-3.5-turbo-1106",
        default_vision_model="gpt-4o",
        supports_response_format_hint=True,
        auth_failure_hint="Check that your API Key is correct/valid!",
    ),
    AIProvider.OLLAMA: ProviderSpec(
        name=AIProvider.OLLAMA,
        display_name="Ollama",
        default_text_model="llama3.2",
        default_vision_model="llama3.2-vision:11b",
        supports_response_format_hint=False,
        auth_failure_hint="Check that Ollama is running and accessible!",
    ),
}


def get_provider_spec(provider: AIProvider | str) -> ProviderSpec:
    """Look up the capability record for a provider."""
    return PROVIDER_SPECS[AIProvider(provider)]


def select_model(
    provider_settings: ProviderSettings,
    multimodal: MultimodalSettings | None,
    has_media: bool,
) -> str:
    """Pick the model for a request.

    Text-only requests use the configured text model (or the provider
    default). Requests with media use the configured vision model, or
    the provider's default vision model when none is set.
    """
    spec = get_provider_spec(provider_settings.provider)
    if has_media:
        configured = multimodal.vision_model if multimodal is not None else None
        return configured or spec.default_vision_model
    return provider_settings.model or spec.default_text_model
