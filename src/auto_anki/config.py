"""Configuration entrypoint (re-exported from split modules)."""

from .config_loader import get_config, load_config, reset_config, set_config
from .config_models import (
    AIProvider,
    GenerationOptions,
    MultimodalSettings,
    ProviderSettings,
    QuestionDefaults,
)
from .config_settings import Config

__all__ = [
    "AIProvider",
    "Config",
    "GenerationOptions",
    "MultimodalSettings",
    "ProviderSettings",
    "QuestionDefaults",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
]
