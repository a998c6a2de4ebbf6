"""Centralized exception hierarchy for auto-anki.

Exception Hierarchy:
    AutoAnkiError (base)
     ConfigurationError - Configuration loading/validation errors
     ProviderError - LLM provider communication errors
        ProviderConnectionError - Provider could not be reached
        ProviderResponseError - Provider answered with an error status
     MediaResolutionError - A media reference could not be attached
     ResponseParseError - Model output is not usable structured data

Usage Examples:
    try:
        await provider.complete(...)
    except ProviderError as e:
        logger.error("provider_request_failed", **e.to_dict())
"""

from typing import Any


class AutoAnkiError(Exception):
    """Base exception for all auto-anki errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        context: Additional context for debugging (paths, models, status codes)
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the suggestion if available."""
        if self.suggestion:
            return f"{self.message}\nSuggestion: {self.suggestion}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "message": self.message,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


# Configuration Errors


class ConfigurationError(AutoAnkiError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed
    - The selected provider is missing its credential or endpoint
    - Configuration values fail validation
    """


# Provider Errors


class ProviderError(AutoAnkiError):
    """LLM provider communication errors.

    Base class for all errors related to LLM providers (OpenAI, Ollama).
    """

    def __init__(
        self,
        message: str,
        provider: str,
        suggestion: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.provider = provider
        super().__init__(
            message,
            suggestion=suggestion,
            context={"provider": provider, **(context or {})},
        )


class ProviderConnectionError(ProviderError):
    """Provider connection failures.

    Raised when no response was received at all:
    - Provider service is not running
    - DNS, TLS or network connectivity issues
    - Transport timeout
    """


class ProviderResponseError(ProviderError):
    """Provider returned an HTTP error status.

    Attributes:
        status_code: HTTP status returned by the provider
        error_code: Provider-supplied error code, if any
        error_message: Provider-supplied error text, if any
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int,
        error_code: str | None = None,
        error_message: str | None = None,
        suggestion: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(
            message,
            provider=provider,
            suggestion=suggestion,
            context={
                "status_code": status_code,
                "error_code": error_code,
                "error_message": error_message,
            },
        )


# Media Errors


class MediaResolutionError(AutoAnkiError):
    """A media reference could not be turned into an attachment.

    Raised when:
    - The referenced file has an unsupported format
    - The file is larger than the configured limit
    - The file does not exist in the content store
    - The reference points at a remote URL
    """


# Parsing Errors


class ResponseParseError(AutoAnkiError):
    """Model output could not be parsed into question/answer pairs."""
