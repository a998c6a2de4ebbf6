"""Prompt construction for flashcard generation."""

from .builder import build_file_messages, build_note_messages, generate_repeated_sample_output
from .flashcard_prompts import QUESTIONS_ANSWERS_KEY, SAMPLE_NOTE, SAMPLE_OUTPUT

__all__ = [
    "QUESTIONS_ANSWERS_KEY",
    "SAMPLE_NOTE",
    "SAMPLE_OUTPUT",
    "build_file_messages",
    "build_note_messages",
    "generate_repeated_sample_output",
]
