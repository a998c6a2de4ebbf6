"""Check command implementation logic."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Literal

import typer
from rich.table import Table

from auto_anki.config import Config
from auto_anki.exceptions import ConfigurationError, ProviderError
from auto_anki.generation import check_ai
from auto_anki.providers import ProviderFactory, describe_provider_error, select_model

from .shared import console


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: str
    severity: Literal["error", "warning"] = "error"
    fix_suggestion: str | None = None


async def _check_provider(config: Config) -> list[CheckResult]:
    provider = ProviderFactory.create_provider(config.get_provider_settings())
    if not await provider.check_connection():
        return [
            CheckResult(
                "Provider connectivity",
                False,
                f"{provider.display_name} did not answer at {provider.base_url}",
                fix_suggestion="Check the base URL and that the service is running",
            )
        ]

    results = [
        CheckResult(
            "Provider connectivity", True, f"{provider.display_name} at {provider.base_url}"
        )
    ]
    try:
        models = await provider.list_models()
    except ProviderError as e:
        return [
            *results,
            CheckResult("Models", False, describe_provider_error(e), severity="warning"),
        ]

    provider_settings = config.get_provider_settings()
    multimodal = config.get_multimodal_settings()
    wanted = {select_model(provider_settings, multimodal, has_media=False)}
    if multimodal.enabled:
        wanted.add(select_model(provider_settings, multimodal, has_media=True))
    for model in sorted(wanted):
        found = model in models
        results.append(
            CheckResult(
                f"Model {model}",
                found,
                "available" if found else "not listed by the provider",
                severity="warning",
                fix_suggestion=None if found else "Pull or enable the model, or change the config",
            )
        )
    return results


def run_check(config: Config, logger: Any, offline: bool) -> None:
    """Execute the check operation.

    Args:
        config: Configuration object
        logger: Logger instance
        offline: Only validate configuration, do not contact the provider

    Raises:
        typer.Exit: If any error-level check fails
    """
    logger.info("check_started", provider=config.ai_provider.value, offline=offline)

    results: list[CheckResult] = []
    config_ok = check_ai(config.get_provider_settings())
    results.append(
        CheckResult(
            "AI configuration",
            config_ok,
            f"provider '{config.ai_provider.value}'"
            + ("" if config_ok else " is missing its API key or base URL"),
            fix_suggestion=None if config_ok else "Set the provider credential or endpoint",
        )
    )

    try:
        vault = config.get_vault_path()
        results.append(CheckResult("Vault", True, str(vault), severity="warning"))
    except ConfigurationError as e:
        results.append(
            CheckResult("Vault", False, e.message, severity="warning", fix_suggestion=e.suggestion)
        )

    if config_ok and not offline:
        results.extend(asyncio.run(_check_provider(config)))

    for result in results:
        if result.passed:
            icon = "[green]PASS[/green]"
        elif result.severity == "warning":
            icon = "[yellow]WARN[/yellow]"
        else:
            icon = "[red]FAIL[/red]"
        console.print(f"{icon} [bold]{result.name}[/bold]: {result.message}")
        if not result.passed and result.fix_suggestion:
            console.print(f"  [dim]TIP: {result.fix_suggestion}[/dim]")

    errors = [r for r in results if not r.passed and r.severity == "error"]
    warnings = [r for r in results if not r.passed and r.severity == "warning"]

    summary_table = Table(title="Check Summary", show_header=True, header_style="bold magenta")
    summary_table.add_column("Status", style="cyan")
    summary_table.add_column("Count", style="green")
    summary_table.add_row("PASS", str(sum(1 for r in results if r.passed)))
    summary_table.add_row("WARN", str(len(warnings)))
    summary_table.add_row("FAIL", str(len(errors)))
    console.print()
    console.print(summary_table)

    if errors:
        logger.error("check_failed", errors=len(errors), warnings=len(warnings))
        raise typer.Exit(code=1)
    logger.info("check_passed", warnings=len(warnings))
