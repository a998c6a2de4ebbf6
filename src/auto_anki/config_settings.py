"""Settings model for auto-anki."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .config_models import (
    DEFAULT_SUPPORTED_FORMATS,
    AIProvider,
    GenerationOptions,
    MultimodalSettings,
    ProviderSettings,
    QuestionDefaults,
    normalize_formats,
)
from .exceptions import ConfigurationError


class Config(BaseSettings):
    """Service configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Provider selection
    ai_provider: AIProvider = Field(
        default=AIProvider.OPENAI, description="AI provider: 'openai' or 'ollama'"
    )

    # OpenAI
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    openai_model: str = Field(
        default="gpt-3.5-turbo-1106", description="Default OpenAI text model"
    )

    # Ollama
    ollama_base_url: str = Field(
        default="http://localhost:11434", description="Ollama server URL"
    )
    ollama_model: str = Field(default="llama3.2", description="Default Ollama model")

    # Multimodal
    multimodal_enabled: bool = Field(
        default=False, description="Attach embedded images/PDFs to requests"
    )
    vision_model: str | None = Field(
        default=None,
        description="Vision-capable model; provider default when unset",
    )
    max_image_size_kb: float = Field(
        default=5000, ge=0, description="Maximum media file size in KB"
    )
    supported_formats: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_FORMATS),
        description="Accepted media file extensions",
    )

    # Sampling
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    frequency_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    presence_penalty: float = Field(default=0.0, ge=-2.0, le=2.0)
    max_tokens_per_question: int = Field(default=100, ge=1)

    # Question generation defaults
    selection_num_questions: int = Field(default=1, ge=1)
    selection_num_alternatives: int = Field(default=0, ge=0)
    file_num_questions: int = Field(default=5, ge=1)
    file_num_alternatives: int = Field(default=0, ge=0)

    # Transport
    llm_timeout: float = Field(
        default=600.0, gt=0, description="Completion request timeout in seconds"
    )

    # Vault and logging
    vault_path: Path | str = Field(default="", description="Path to Obsidian vault")
    log_level: str = Field(default="INFO", description="Log level")
    log_dir: Path | None = Field(default=None, description="Directory for JSON logs")

    @field_validator("ai_provider", mode="before")
    @classmethod
    def parse_provider(cls, v: Any) -> Any:
        """Accept provider names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("supported_formats", mode="before")
    @classmethod
    def parse_supported_formats(cls, v: Any) -> list[str]:
        """Accept a list or a comma-separated string."""
        return normalize_formats(v)

    @field_validator("vault_path", mode="before")
    @classmethod
    def parse_vault_path(cls, v: Any) -> Path:
        """Convert string to Path for vault_path."""
        if v is None or v == "":
            return Path()
        if isinstance(v, (str, Path)):
            return Path(v).expanduser().resolve()
        msg = f"vault_path must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return level

    def get_provider_settings(self, model_override: str | None = None) -> ProviderSettings:
        """Snapshot the active provider's connection settings."""
        if self.ai_provider is AIProvider.OPENAI:
            return ProviderSettings(
                provider=self.ai_provider,
                api_key=self.openai_api_key,
                base_url=self.openai_base_url,
                model=model_override or self.openai_model,
                timeout=self.llm_timeout,
            )
        return ProviderSettings(
            provider=self.ai_provider,
            base_url=self.ollama_base_url,
            model=model_override or self.ollama_model,
            timeout=self.llm_timeout,
        )

    def get_multimodal_settings(self) -> MultimodalSettings:
        """Snapshot media attachment settings."""
        return MultimodalSettings(
            enabled=self.multimodal_enabled,
            vision_model=self.vision_model or None,
            max_image_size_kb=self.max_image_size_kb,
            supported_formats=tuple(self.supported_formats),
        )

    def get_generation_options(self) -> GenerationOptions:
        """Snapshot sampling parameters."""
        return GenerationOptions(
            temperature=self.temperature,
            top_p=self.top_p,
            frequency_penalty=self.frequency_penalty,
            presence_penalty=self.presence_penalty,
            max_tokens_per_question=self.max_tokens_per_question,
        )

    def get_question_defaults(self, mode: Literal["selection", "file"]) -> QuestionDefaults:
        """Question/alternative counts for an invocation mode."""
        if mode == "selection":
            return QuestionDefaults(
                mode=mode,
                num_questions=self.selection_num_questions,
                num_alternatives=self.selection_num_alternatives,
            )
        if mode == "file":
            return QuestionDefaults(
                mode=mode,
                num_questions=self.file_num_questions,
                num_alternatives=self.file_num_alternatives,
            )
        msg = f"Unknown invocation mode: {mode}"
        raise ValueError(msg)

    def get_vault_path(self) -> Path:
        """Return the configured vault, failing if it is unusable."""
        vault = Path(self.vault_path)
        if vault == Path() or not vault.is_dir():
            msg = f"Vault directory not found: '{self.vault_path}'"
            raise ConfigurationError(
                msg,
                suggestion="Set VAULT_PATH or vault_path in config.yaml to your Obsidian vault.",
            )
        return vault

    def get_log_file(self) -> Path | None:
        """JSON log file inside log_dir, if configured."""
        if self.log_dir is None:
            return None
        return Path(self.log_dir).expanduser() / "auto-anki.log"
