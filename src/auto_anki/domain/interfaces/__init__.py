"""Interfaces for external collaborators."""

from .content_store import IContentStore, StoredFile

__all__ = ["IContentStore", "StoredFile"]
