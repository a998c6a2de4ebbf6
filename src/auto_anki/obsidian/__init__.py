"""Obsidian vault access and media resolution."""

from .media_resolver import (
    extract_media_references,
    get_active_supported_media,
    get_all_supported_extensions,
    get_mime_type,
    is_supported_media_format,
    process_media,
    process_standalone_file,
    resolve_media_path,
    strip_media_markdown,
)
from .vault_store import VaultContentStore

__all__ = [
    "VaultContentStore",
    "extract_media_references",
    "get_active_supported_media",
    "get_all_supported_extensions",
    "get_mime_type",
    "is_supported_media_format",
    "process_media",
    "process_standalone_file",
    "resolve_media_path",
    "strip_media_markdown",
]
