"""Frozen per-request configuration models.

`Config` (pydantic-settings) is process-wide. The generation core never
reads it directly: each entrypoint receives these immutable snapshots.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL_SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "bmp", "webp", "pdf")
DEFAULT_SUPPORTED_FORMATS = ("jpg", "jpeg", "png", "gif", "bmp", "webp")


class AIProvider(str, Enum):
    """Supported AI providers."""

    OPENAI = "openai"
    OLLAMA = "ollama"


def normalize_formats(value: object) -> list[str]:
    """Normalize an extension list to lowercase, dot-free entries."""
    if value is None:
        return list(DEFAULT_SUPPORTED_FORMATS)
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [str(item) for item in value]
    else:
        msg = f"supported_formats must be a list or comma-separated string, got {type(value).__name__}"
        raise ValueError(msg)
    return [item.strip().lower().lstrip(".") for item in items if item.strip()]


class ProviderSettings(BaseModel):
    """Connection settings for the active provider."""

    model_config = ConfigDict(frozen=True)

    provider: AIProvider = AIProvider.OPENAI
    api_key: str | None = None
    base_url: str | None = None
    model: str | None = Field(
        default=None, description="Text model; provider default when unset"
    )
    timeout: float = Field(default=600.0, gt=0)

    def __repr__(self) -> str:
        key = "***REDACTED***" if self.api_key else None
        return (
            f"ProviderSettings(provider={self.provider.value!r}, api_key={key!r}, "
            f"base_url={self.base_url!r}, model={self.model!r})"
        )


class MultimodalSettings(BaseModel):
    """Media attachment settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    vision_model: str | None = None
    max_image_size_kb: float = Field(default=5000, ge=0)
    supported_formats: tuple[str, ...] = DEFAULT_SUPPORTED_FORMATS

    @field_validator("supported_formats", mode="before")
    @classmethod
    def parse_supported_formats(cls, v: object) -> tuple[str, ...]:
        return tuple(normalize_formats(v))


class GenerationOptions(BaseModel):
    """Per-call sampling parameters."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    frequency_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    max_tokens_per_question: int = Field(default=100, ge=1)

    def sampling_params(self) -> dict[str, float]:
        """Parameters forwarded verbatim to the completion request."""
        return {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }


class QuestionDefaults(BaseModel):
    """Question and alternative counts for one invocation mode."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["selection", "file"]
    num_questions: int = Field(ge=1)
    num_alternatives: int = Field(ge=0)

    @property
    def sample_count(self) -> int:
        """Completions to request: the primary answer plus alternatives."""
        return self.num_alternatives + 1


__all__ = [
    "ALL_SUPPORTED_EXTENSIONS",
    "DEFAULT_SUPPORTED_FORMATS",
    "AIProvider",
    "GenerationOptions",
    "MultimodalSettings",
    "ProviderSettings",
    "QuestionDefaults",
    "normalize_formats",
]
