"""Flashcard generation CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .generate_handler import run_generate_file, run_generate_note
from .shared import get_config_and_logger

NumQuestionsOption = Annotated[
    int | None,
    typer.Option(
        "--num-questions",
        "-n",
        min=1,
        help="Questions per choice (overrides the mode default)",
    ),
]
AlternativesOption = Annotated[
    int | None,
    typer.Option(
        "--alternatives",
        "-a",
        min=0,
        help="Extra choices to sample (overrides the mode default)",
    ),
]
ModelOption = Annotated[
    str | None,
    typer.Option("--model", "-m", help="Text model (overrides config default)"),
]
VaultOption = Annotated[
    Path | None,
    typer.Option(
        "--vault",
        help="Vault root used to resolve embedded media",
        exists=True,
        file_okay=False,
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write choices as JSON instead of printing"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config.yaml", exists=True),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level (DEBUG, INFO, WARN, ERROR)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show all log messages on the terminal"),
]


def register(app: typer.Typer) -> None:
    """Register generation commands on the given Typer app."""

    @app.command(name="generate-note")
    def generate_note(
        note: Annotated[
            Path,
            typer.Argument(help="Markdown note (or image/PDF) to generate from", exists=True),
        ],
        selection: Annotated[
            str | None,
            typer.Option(
                "--selection",
                "-s",
                help="Generate from this text instead of the whole note",
            ),
        ] = None,
        num_questions: NumQuestionsOption = None,
        alternatives: AlternativesOption = None,
        model: ModelOption = None,
        vault: VaultOption = None,
        output: OutputOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Generate flashcards from a note or a selection of it."""
        config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
        run_generate_note(
            config=config,
            logger=logger,
            note=note,
            selection=selection,
            num_questions=num_questions,
            alternatives=alternatives,
            model=model,
            vault=vault,
            output=output,
        )

    @app.command(name="generate-file")
    def generate_file(
        file_path: Annotated[
            Path,
            typer.Argument(help="Image or PDF to generate from", exists=True, dir_okay=False),
        ],
        num_questions: NumQuestionsOption = None,
        alternatives: AlternativesOption = None,
        model: ModelOption = None,
        vault: VaultOption = None,
        output: OutputOption = None,
        config_path: ConfigOption = None,
        log_level: LogLevelOption = None,
        verbose: VerboseOption = False,
    ) -> None:
        """Generate flashcards from a single image or PDF."""
        config, logger = get_config_and_logger(config_path, log_level, verbose=verbose)
        run_generate_file(
            config=config,
            logger=logger,
            file_path=file_path,
            num_questions=num_questions,
            alternatives=alternatives,
            model=model,
            vault=vault,
            output=output,
        )
