"""Command-line interface for auto-anki."""

from __future__ import annotations

import typer

from .cli_commands import core_commands, generation_commands

app = typer.Typer(
    name="auto-anki",
    help="Generate spaced-repetition flashcards from notes with an LLM.",
    no_args_is_help=True,
)

core_commands.register(app)
generation_commands.register(app)


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
