"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console

from auto_anki.config import Config, load_config, set_config
from auto_anki.utils.logging import configure_logging, get_logger

# Shared console for all commands
console = Console()

_config: Config | None = None
_logger: Any | None = None


def get_config_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    verbose: bool = False,
) -> tuple[Config, Any]:
    """Load configuration and logger once per process.

    Args:
        config_path: Optional path to config.yaml
        log_level: Logging level; the configured level when None
        verbose: Show all log messages on the terminal

    Returns:
        Tuple of (Config, Logger)
    """
    global _config, _logger

    if _config is None:
        _config = load_config(config_path)
        set_config(_config)
        configure_logging(
            log_level or _config.log_level,
            log_file=_config.get_log_file(),
            verbose=verbose,
        )
        _logger = get_logger("cli")

    return _config, _logger


def reset_cli_state() -> None:
    """Forget the cached config and logger."""
    global _config, _logger
    _config = None
    _logger = None
