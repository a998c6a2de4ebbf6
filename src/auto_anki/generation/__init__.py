"""Flashcard generation core."""

from .flashcard_generator import (
    check_ai,
    convert_file_to_flashcards,
    convert_notes_to_flashcards,
)
from .reconciler import (
    ParseFailure,
    ParseSuccess,
    first_success,
    parse_choice,
    reconcile_choices,
)

__all__ = [
    "ParseFailure",
    "ParseSuccess",
    "check_ai",
    "convert_file_to_flashcards",
    "convert_notes_to_flashcards",
    "first_success",
    "parse_choice",
    "reconcile_choices",
]
