"""Generate command implementation logic."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Literal

import typer
from rich.table import Table

from auto_anki.config import Config
from auto_anki.domain.entities.card import ChoiceResult
from auto_anki.domain.interfaces.content_store import StoredFile
from auto_anki.exceptions import ConfigurationError
from auto_anki.generation import convert_file_to_flashcards, convert_notes_to_flashcards
from auto_anki.obsidian import VaultContentStore, get_active_supported_media

from .shared import console


def _open_store(config: Config, target: Path, vault: Path | None, logger: Any) -> VaultContentStore:
    """Open the vault that contains ``target``.

    Uses --vault, then the configured vault, then the target's directory.
    """
    if vault is not None:
        root = vault
    else:
        try:
            root = config.get_vault_path()
        except ConfigurationError:
            root = target.resolve().parent
            logger.info("vault_path_fallback", vault_path=str(root))
    try:
        return VaultContentStore(root, active_file=target.expanduser().resolve())
    except ValueError as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


def _stored_file(store: VaultContentStore, target: Path) -> StoredFile:
    active = store.get_active_file()
    if active is None:
        console.print(
            f"\n[bold red]Error:[/bold red] {target} is not a file inside {store.vault_path}"
        )
        raise typer.Exit(code=1)
    return active


def render_choices(results: list[ChoiceResult]) -> None:
    """Print one table per generated choice."""
    for index, cards in enumerate(results, start=1):
        table = Table(title=f"Choice {index}", show_lines=True)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Question", style="cyan")
        table.add_column("Answer", style="green")
        for number, card in enumerate(cards, start=1):
            table.add_row(str(number), card.question, card.answer)
        console.print(table)


def write_output(results: list[ChoiceResult], output: Path) -> None:
    """Write choices as JSON: a list of lists of question/answer objects."""
    data = {"choices": [[card.model_dump() for card in cards] for cards in results]}
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    console.print(f"[green]Wrote {len(results)} choice(s) to {output}[/green]")


def _report(results: list[ChoiceResult], output: Path | None) -> None:
    if not results:
        console.print(
            "\n[bold red]No flashcards were generated.[/bold red] See the log for details."
        )
        raise typer.Exit(code=1)
    if output is not None:
        write_output(results, output)
    else:
        render_choices(results)


def _counts(
    config: Config,
    mode: Literal["selection", "file"],
    num_questions: int | None,
    alternatives: int | None,
) -> tuple[int, int]:
    defaults = config.get_question_defaults(mode)
    question_count = num_questions if num_questions is not None else defaults.num_questions
    sample_count = (
        alternatives + 1 if alternatives is not None else defaults.sample_count
    )
    return question_count, sample_count


def _run_file(
    config: Config,
    logger: Any,
    store: VaultContentStore,
    file: StoredFile,
    num_questions: int | None,
    alternatives: int | None,
    model: str | None,
    output: Path | None,
) -> None:
    multimodal = config.get_multimodal_settings()
    if not multimodal.enabled:
        console.print(
            "\n[bold red]Error:[/bold red] Multimodal processing is disabled. "
            "Set multimodal_enabled to generate flashcards from images or PDFs."
        )
        raise typer.Exit(code=1)

    question_count, sample_count = _counts(config, "file", num_questions, alternatives)
    console.print(
        f"\n[cyan]Generating {question_count} question(s) x {sample_count} "
        f"choice(s) from {file.path}...[/cyan]"
    )
    results = asyncio.run(
        convert_file_to_flashcards(
            config.get_provider_settings(model),
            file,
            question_count,
            sample_count,
            config.get_generation_options(),
            multimodal,
            store,
        )
    )
    logger.info("cli_generation_finished", mode="file", choices=len(results))
    _report(results, output)


def run_generate_note(
    config: Config,
    logger: Any,
    note: Path,
    selection: str | None,
    num_questions: int | None,
    alternatives: int | None,
    model: str | None,
    vault: Path | None,
    output: Path | None,
) -> None:
    """Execute generate-note.

    With --selection only that text is used (selection defaults);
    otherwise the whole note is used (file defaults). An image or PDF
    passed as the note switches to standalone-file generation.

    Raises:
        typer.Exit: On generation failure
    """
    store = _open_store(config, note, vault, logger)
    multimodal = config.get_multimodal_settings()

    if selection is None and multimodal.enabled:
        media_file = get_active_supported_media(store, multimodal.supported_formats)
        if media_file is not None:
            _run_file(
                config, logger, store, media_file, num_questions, alternatives, model, output
            )
            return

    mode: Literal["selection", "file"]
    if selection is not None:
        mode = "selection"
        text = selection
    else:
        mode = "file"
        try:
            text = note.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"\n[bold red]Error:[/bold red] Cannot read {note}: {e}")
            raise typer.Exit(code=1) from e

    if not text.strip():
        console.print("\n[bold red]Error:[/bold red] Nothing to generate from: the text is empty.")
        raise typer.Exit(code=1)

    question_count, sample_count = _counts(config, mode, num_questions, alternatives)
    console.print(
        f"\n[cyan]Generating {question_count} question(s) x {sample_count} "
        f"choice(s) from {note.name}...[/cyan]"
    )
    results = asyncio.run(
        convert_notes_to_flashcards(
            config.get_provider_settings(model),
            text,
            question_count,
            sample_count,
            config.get_generation_options(),
            multimodal=multimodal,
            store=store,
        )
    )
    logger.info("cli_generation_finished", mode=mode, choices=len(results))
    _report(results, output)


def run_generate_file(
    config: Config,
    logger: Any,
    file_path: Path,
    num_questions: int | None,
    alternatives: int | None,
    model: str | None,
    vault: Path | None,
    output: Path | None,
) -> None:
    """Execute generate-file for a single image or PDF.

    Raises:
        typer.Exit: On generation failure
    """
    store = _open_store(config, file_path, vault, logger)
    file = _stored_file(store, file_path)
    _run_file(config, logger, store, file, num_questions, alternatives, model, output)
