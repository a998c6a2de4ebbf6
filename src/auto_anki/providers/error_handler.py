"""Error parsing and reporting for provider responses."""

from __future__ import annotations

import httpx

from auto_anki.exceptions import (
    ProviderConnectionError,
    ProviderError,
    ProviderResponseError,
)
from auto_anki.utils.logging import get_logger

from .capabilities import ProviderSpec

logger = get_logger(__name__)


def parse_api_error_response(response: httpx.Response) -> tuple[str | None, str | None]:
    """Extract the provider's error code and message from an error body.

    Both OpenAI and Ollama answer with ``{"error": {"code", "message"}}``;
    anything else falls back to the raw body text as the message.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code")
        return (str(code) if code is not None else None), error.get("message")
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return None, body["error"]
    return None, response.text[:1000] or None


def build_response_error(
    spec: ProviderSpec, response: httpx.Response
) -> ProviderResponseError:
    """Turn an HTTP error response into a ProviderResponseError.

    A 401 gets the provider's actionable hint in place of the raw
    provider text.
    """
    error_code, error_message = parse_api_error_response(response)
    status = response.status_code
    if status == 401:
        detail = spec.auth_failure_hint
    else:
        detail = f"({error_code or 'unknown'}) {error_message or 'Unknown error'}"

    return ProviderResponseError(
        f"ERR {status}: Could not connect to {spec.display_name}! {detail}",
        provider=spec.name.value,
        status_code=status,
        error_code=error_code,
        error_message=error_message,
    )


def describe_provider_error(error: ProviderError) -> str:
    """User-facing one-line description of a provider failure."""
    return error.message


def log_provider_error(error: ProviderError) -> None:
    """Emit the diagnostic for a failed submission."""
    if isinstance(error, ProviderConnectionError):
        logger.error(
            "provider_connection_failed",
            provider=error.provider,
            error=describe_provider_error(error),
            **{k: v for k, v in error.context.items() if k != "provider"},
        )
    elif isinstance(error, ProviderResponseError):
        logger.error(
            "provider_request_failed",
            provider=error.provider,
            error=describe_provider_error(error),
            status_code=error.status_code,
            error_code=error.error_code,
            provider_message=error.error_message,
        )
    else:
        logger.error(
            "provider_request_failed",
            provider=error.provider,
            error=describe_provider_error(error),
        )
