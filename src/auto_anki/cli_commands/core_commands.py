"""Core CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .check_handler import run_check
from .shared import get_config_and_logger


def register(app: typer.Typer) -> None:
    """Register core commands on the given Typer app."""

    @app.command(name="check")
    def check(
        offline: Annotated[
            bool,
            typer.Option("--offline", help="Validate configuration without contacting the provider"),
        ] = False,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Path to config.yaml", exists=True),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
        ] = None,
    ) -> None:
        """Check provider configuration, connectivity and models."""
        config, logger = get_config_and_logger(config_path, log_level)
        run_check(config, logger, offline=offline)
