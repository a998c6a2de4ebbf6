"""Prompt messages and their content segments.

User content is either plain text or an ordered sequence of
``TextSegment | MediaSegment``; the ``kind`` field tags the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from .media import MediaItem, MimeType


@dataclass(frozen=True)
class TextSegment:
    """A plain text part of a multi-segment message."""

    text: str
    kind: Literal["text"] = "text"

    def to_wire(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class MediaSegment:
    """An embedded-data image reference."""

    mime_type: MimeType
    encoded_content: str
    kind: Literal["media"] = "media"

    @classmethod
    def from_item(cls, item: MediaItem) -> MediaSegment:
        return cls(mime_type=item.mime_type, encoded_content=item.encoded_content)

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type.value};base64,{self.encoded_content}"

    def to_wire(self) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.data_uri}}


ContentSegment = TextSegment | MediaSegment


@dataclass(frozen=True)
class SystemMessage:
    content: str
    role: Literal["system"] = "system"

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class AssistantMessage:
    content: str
    role: Literal["assistant"] = "assistant"

    def to_wire(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class UserMessage:
    """User turn; a tuple of segments when media is attached."""

    content: str | tuple[ContentSegment, ...]
    role: Literal["user"] = "user"

    @property
    def is_multimodal(self) -> bool:
        return not isinstance(self.content, str)

    def to_wire(self) -> dict[str, Any]:
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {
            "role": self.role,
            "content": [segment.to_wire() for segment in self.content],
        }


PromptMessage = SystemMessage | UserMessage | AssistantMessage


def messages_to_wire(messages: list[PromptMessage]) -> list[dict[str, Any]]:
    """Serialize messages for an OpenAI-compatible chat completion."""
    return [message.to_wire() for message in messages]
