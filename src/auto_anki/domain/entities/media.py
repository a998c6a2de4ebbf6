"""Domain entities for media attached to a generation request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MimeType(str, Enum):
    """MIME types accepted as attachments."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    BMP = "image/bmp"
    WEBP = "image/webp"
    PDF = "application/pdf"


@dataclass(frozen=True)
class MediaReference:
    """A media embed found in note text, before resolution."""

    path: str
    alt: str = ""
    raw: str = ""

    @property
    def is_remote(self) -> bool:
        return self.path.startswith(("http://", "https://"))


@dataclass(frozen=True)
class MediaItem:
    """A resolved, base64-encoded media file.

    Request-scoped: built per generation request and discarded afterwards.
    """

    source_path: str
    encoded_content: str
    mime_type: MimeType
    alt_text: str | None = None

    def __post_init__(self) -> None:
        """Validate entity invariants."""
        if not self.source_path:
            raise ValueError("Media source path cannot be empty")

    def __repr__(self) -> str:
        return (
            f"MediaItem(source_path={self.source_path!r}, mime_type={self.mime_type.value!r}, "
            f"encoded_length={len(self.encoded_content)}, alt_text={self.alt_text!r})"
        )
