"""Test fixtures package."""

from .chat_responses import cards_json, chat_completion, error_body
from .in_memory_store import InMemoryContentStore

__all__ = [
    "InMemoryContentStore",
    "cards_json",
    "chat_completion",
    "error_body",
]
