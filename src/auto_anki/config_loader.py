"""Config loader utilities."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from .config_settings import Config
from .exceptions import ConfigurationError
from .utils.logging import get_logger

_config: Config | None = None


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]
    candidates: list[Path] = []
    env_path = os.getenv("AUTO_ANKI_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / "config.yaml")
    return candidates


@contextlib.contextmanager
def _yaml_as_env(yaml_data: dict[str, Any]) -> Iterator[None]:
    """Temporarily expose scalar YAML values as environment variables."""
    original_env: dict[str, str | None] = {}
    try:
        for key, value in yaml_data.items():
            if value is None or isinstance(value, (list, dict)):
                continue
            env_key = key.upper()
            original_env[env_key] = os.environ.get(env_key)
            os.environ[env_key] = str(value)
        yield
    finally:
        for env_key, previous in original_env.items():
            if previous is None:
                os.environ.pop(env_key, None)
            else:
                os.environ[env_key] = previous


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from .env, environment and config.yaml.

    Scalar YAML keys take precedence over the environment; list and
    mapping values are passed to the settings model directly.
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved_config_path = next((p for p in candidates if p.exists()), None)

    if config_path and resolved_config_path is None:
        msg = f"Config file not found: {config_path}"
        raise ConfigurationError(msg, context={"config_path": str(config_path)})

    yaml_data: dict[str, Any] = {}
    if resolved_config_path:
        logger.info("config_file_found", config_path=str(resolved_config_path))
        try:
            with open(resolved_config_path, encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(
                "config_yaml_load_error",
                config_path=str(resolved_config_path),
                error=str(e),
            )
            msg = f"Failed to parse config file: {resolved_config_path}"
            suggestion = (
                "Check YAML syntax (indentation, colons, quotes). "
                f"Original error: {e}"
            )
            raise ConfigurationError(msg, suggestion=suggestion) from e

        if not isinstance(yaml_data, dict):
            msg = f"Config file must contain a mapping: {resolved_config_path}"
            raise ConfigurationError(msg)
    else:
        logger.debug(
            "config_file_not_found", searched_paths=[str(p) for p in candidates]
        )

    config_kwargs = {
        key: value
        for key, value in yaml_data.items()
        if isinstance(value, (list, dict))
    }

    with _yaml_as_env(yaml_data):
        try:
            config = Config(**config_kwargs)
        except Exception as e:
            logger.error(
                "config_validation_error",
                error=str(e),
                error_type=type(e).__name__,
                config_path=str(resolved_config_path) if resolved_config_path else None,
            )
            raise

    logger.debug("config_loaded", ai_provider=config.ai_provider.value)
    return config


def get_config() -> Config:
    """Get singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Set singleton config instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config instance (for testing only)."""
    global _config
    _config = None


__all__ = ["Config", "get_config", "load_config", "reset_config", "set_config"]
