"""Domain entities."""

from .card import CardPair, ChoiceResult, QuestionsAnswersPayload
from .media import MediaItem, MediaReference, MimeType
from .message import (
    AssistantMessage,
    ContentSegment,
    MediaSegment,
    PromptMessage,
    SystemMessage,
    TextSegment,
    UserMessage,
    messages_to_wire,
)

__all__ = [
    "AssistantMessage",
    "CardPair",
    "ChoiceResult",
    "ContentSegment",
    "MediaItem",
    "MediaReference",
    "MediaSegment",
    "MimeType",
    "PromptMessage",
    "QuestionsAnswersPayload",
    "SystemMessage",
    "TextSegment",
    "UserMessage",
    "messages_to_wire",
]
