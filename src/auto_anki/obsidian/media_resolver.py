"""Resolve media embedded in notes into base64 attachments.

Handles both Markdown images (``![alt](path)``) and Obsidian wiki
embeds (``![[path|alt]]``). References that are remote, unsupported,
missing or oversized are skipped with a diagnostic; they never fail
the batch.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Callable, Sequence
from pathlib import PurePosixPath
from urllib.parse import unquote

from auto_anki.config_models import ALL_SUPPORTED_EXTENSIONS, MultimodalSettings
from auto_anki.domain.entities.media import MediaItem, MediaReference, MimeType
from auto_anki.domain.interfaces.content_store import IContentStore, StoredFile
from auto_anki.exceptions import MediaResolutionError
from auto_anki.utils.logging import get_logger

logger = get_logger(__name__)

EMBED_PATTERN = re.compile(
    r"!\[\[(?P<wiki_path>[^\]|]+)(?:\|(?P<wiki_alt>[^\]]*))?\]\]"
    r"|!\[(?P<alt>[^\]]*)\]\((?P<path>[^)]+)\)"
)

# Obsidian embed sizing such as ![[img.png|300]] or ![[img.png|300x200]]
_SIZE_SPEC = re.compile(r"^\s*\d+(?:x\d+)?\s*$")
_LINK_TITLE = re.compile(r"""\s+["'][^"']*["']\s*$""")

_MIME_TYPES: dict[str, MimeType] = {
    "jpg": MimeType.JPEG,
    "jpeg": MimeType.JPEG,
    "png": MimeType.PNG,
    "gif": MimeType.GIF,
    "bmp": MimeType.BMP,
    "webp": MimeType.WEBP,
    "pdf": MimeType.PDF,
}


def _extension(path: str) -> str:
    return PurePosixPath(path).suffix.lower().lstrip(".")


def _normalize_markdown_path(raw: str) -> str:
    path = raw.strip()
    if path.startswith("<") and path.endswith(">"):
        return path[1:-1].strip()
    path = _LINK_TITLE.sub("", path)
    if path.startswith(("http://", "https://")):
        return path
    return unquote(path)


def _reference_from_match(match: re.Match[str]) -> MediaReference:
    if match.group("wiki_path") is not None:
        path = match.group("wiki_path").split("#", 1)[0].strip()
        alt = match.group("wiki_alt") or ""
        if _SIZE_SPEC.match(alt):
            alt = ""
        return MediaReference(path=path, alt=alt.strip(), raw=match.group(0))
    return MediaReference(
        path=_normalize_markdown_path(match.group("path")),
        alt=match.group("alt") or "",
        raw=match.group(0),
    )


def _is_note_transclusion(match: re.Match[str]) -> bool:
    # ![[Other note]] embeds a note, not a file
    if match.group("wiki_path") is None:
        return False
    return _extension(match.group("wiki_path").split("#", 1)[0].strip()) in ("", "md")


def extract_media_references(markdown_text: str) -> list[MediaReference]:
    """Extract media embeds from markdown text in document order."""
    return [
        _reference_from_match(m)
        for m in EMBED_PATTERN.finditer(markdown_text)
        if not _is_note_transclusion(m)
    ]


def strip_media_markdown(markdown_text: str) -> str:
    """Replace media embeds with their alt text or a bracketed placeholder.

    Keeps file paths out of the prompt text once the media itself has
    been attached as a separate segment.
    """

    def _replace(match: re.Match[str]) -> str:
        if _is_note_transclusion(match):
            return match.group(0)
        reference = _reference_from_match(match)
        return reference.alt or f"[Image: {reference.path}]"

    return EMBED_PATTERN.sub(_replace, markdown_text)


def get_mime_type(extension: str) -> MimeType:
    """Map a file extension to its MIME type, defaulting to image/jpeg."""
    return _MIME_TYPES.get(extension.lower().lstrip("."), MimeType.JPEG)


def is_supported_media_format(path: str, supported_formats: Sequence[str]) -> bool:
    """Check whether a path's extension is in the accepted format list."""
    extension = _extension(path)
    return bool(extension) and extension in {f.lower() for f in supported_formats}


def get_all_supported_extensions() -> list[str]:
    """Every extension the resolver can encode (images and PDF)."""
    return list(ALL_SUPPORTED_EXTENSIONS)


def _pick(candidates: list[StoredFile], reference_path: str, strategy: str) -> StoredFile | None:
    if not candidates:
        return None
    ordered = sorted(candidates, key=lambda f: f.path)
    if len(ordered) > 1:
        logger.warning(
            "media_ambiguous_match",
            reference=reference_path,
            strategy=strategy,
            candidates=[f.path for f in ordered],
            chosen=ordered[0].path,
        )
    return ordered[0]


def resolve_media_path(store: IContentStore, reference_path: str) -> StoredFile | None:
    """Find the stored file a media reference points at.

    Tries the exact path first, then (over the full file listing) a
    filename match, a path-suffix match and a basename match. Ties are
    broken by lexicographic path order.
    """
    direct = store.get_file(reference_path)
    if direct is not None:
        return direct

    all_files = store.list_files()
    trimmed = PurePosixPath(reference_path).as_posix().lstrip("/")
    basename = PurePosixPath(reference_path).name

    strategies: list[tuple[str, Callable[[StoredFile], bool]]] = [
        ("name", lambda f: f.name == reference_path),
        ("path_suffix", lambda f: f.path == trimmed or f.path.endswith("/" + trimmed)),
        ("basename", lambda f: f.name == basename),
    ]
    for strategy, matches in strategies:
        found = _pick([f for f in all_files if matches(f)], reference_path, strategy)
        if found is not None:
            logger.debug(
                "media_path_resolved",
                reference=reference_path,
                resolved=found.path,
                strategy=strategy,
            )
            return found
    return None


def _check_format(path: str, settings: MultimodalSettings) -> None:
    if not is_supported_media_format(path, settings.supported_formats):
        raise MediaResolutionError(
            f"Unsupported media format: {path}",
            context={"reason": "unsupported_format", "path": path},
        )


def _check_size(file: StoredFile, settings: MultimodalSettings) -> None:
    size_kb = file.size / 1024
    if size_kb > settings.max_image_size_kb:
        raise MediaResolutionError(
            f"Media file too large ({round(size_kb)}KB): {file.path}",
            context={
                "reason": "too_large",
                "path": file.path,
                "size_kb": round(size_kb),
                "max_size_kb": settings.max_image_size_kb,
            },
        )


async def _encode(store: IContentStore, file: StoredFile, alt: str | None) -> MediaItem:
    data = await store.read_binary(file)
    return MediaItem(
        source_path=file.path,
        encoded_content=base64.b64encode(data).decode("ascii"),
        mime_type=get_mime_type(_extension(file.path) or "jpeg"),
        alt_text=alt,
    )


async def _process_reference(
    store: IContentStore, reference: MediaReference, settings: MultimodalSettings
) -> MediaItem:
    if reference.is_remote:
        raise MediaResolutionError(
            f"Remote media is not attached: {reference.path}",
            context={"reason": "remote_url", "path": reference.path},
        )
    _check_format(reference.path, settings)

    file = resolve_media_path(store, reference.path)
    if file is None:
        raise MediaResolutionError(
            f"Media file not found: {reference.path}",
            suggestion="Tried direct path, name match, path ending and basename match.",
            context={"reason": "not_found", "path": reference.path},
        )
    _check_size(file, settings)
    return await _encode(store, file, reference.alt or None)


def _log_skip(error: MediaResolutionError) -> None:
    reason = error.context.get("reason")
    # Remote links are expected in notes; everything else is worth a warning
    log = logger.info if reason == "remote_url" else logger.warning
    log("media_skipped", error=error.message, **error.context)


async def process_media(
    store: IContentStore, markdown_text: str, settings: MultimodalSettings
) -> list[MediaItem]:
    """Resolve and encode every usable media embed in the text.

    References are processed one at a time, in document order.

    Returns:
        MediaItems in the order their embeds appear; empty when
        multimodal processing is disabled.
    """
    if not settings.enabled:
        return []

    items: list[MediaItem] = []
    for reference in extract_media_references(markdown_text):
        try:
            item = await _process_reference(store, reference, settings)
        except MediaResolutionError as e:
            _log_skip(e)
            continue
        except OSError as e:
            logger.error("media_read_failed", path=reference.path, error=str(e))
            continue

        items.append(item)
        logger.info(
            "media_processed",
            path=item.source_path,
            mime_type=item.mime_type.value,
            size_kb=round(len(item.encoded_content) * 3 / 4 / 1024),
        )
    return items


async def process_standalone_file(
    store: IContentStore, file: StoredFile, settings: MultimodalSettings
) -> MediaItem | None:
    """Encode a single explicitly chosen file for standalone-file mode.

    Applies the same format and size checks as embedded references.
    """
    if not settings.enabled:
        logger.info("multimodal_disabled", path=file.path)
        return None

    try:
        _check_format(file.path, settings)
        _check_size(file, settings)
        item = await _encode(store, file, file.name)
    except MediaResolutionError as e:
        _log_skip(e)
        return None
    except OSError as e:
        logger.error("media_read_failed", path=file.path, error=str(e))
        return None

    logger.info(
        "media_processed",
        path=file.path,
        mime_type=item.mime_type.value,
        size_kb=round(file.size / 1024),
        standalone=True,
    )
    return item


def get_active_supported_media(
    store: IContentStore, supported_formats: Sequence[str]
) -> StoredFile | None:
    """Return the active file if it is a supported media file."""
    active = store.get_active_file()
    if active is None or not is_supported_media_format(active.path, supported_formats):
        return None
    return active
