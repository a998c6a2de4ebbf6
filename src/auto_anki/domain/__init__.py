"""Domain layer: request-scoped entities and collaborator interfaces."""

from .entities import CardPair, ChoiceResult, MediaItem, MimeType, PromptMessage
from .interfaces import IContentStore, StoredFile

__all__ = [
    "CardPair",
    "ChoiceResult",
    "IContentStore",
    "MediaItem",
    "MimeType",
    "PromptMessage",
    "StoredFile",
]
