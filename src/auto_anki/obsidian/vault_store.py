"""Filesystem-backed content store for an Obsidian vault."""

from __future__ import annotations

import asyncio
from pathlib import Path

from auto_anki.domain.interfaces.content_store import IContentStore, StoredFile
from auto_anki.utils.logging import get_logger

logger = get_logger(__name__)

# Vault-internal folders that never hold note attachments
IGNORED_DIRS = frozenset({".obsidian", ".git", ".trash", ".stfolder"})


class VaultContentStore(IContentStore):
    """Read-only view of a vault directory.

    Paths are vault-relative and use forward slashes, matching how
    Obsidian records them in note links.
    """

    def __init__(self, vault_path: Path, active_file: Path | str | None = None):
        self.vault_path = Path(vault_path).expanduser().resolve()
        if not self.vault_path.is_dir():
            msg = f"Vault directory does not exist: {self.vault_path}"
            raise ValueError(msg)
        self._active_path = self._to_relative(active_file) if active_file else None

    def _to_relative(self, path: Path | str) -> str | None:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.vault_path / candidate
        try:
            return candidate.resolve().relative_to(self.vault_path).as_posix()
        except ValueError:
            logger.warning(
                "path_outside_vault",
                path=str(path),
                vault_path=str(self.vault_path),
            )
            return None

    def _absolute(self, relative_path: str) -> Path | None:
        try:
            absolute = (self.vault_path / relative_path).resolve()
        except ValueError:
            # Embedded NUL bytes cannot name a file
            logger.debug("invalid_vault_path", path=relative_path)
            return None
        if not absolute.is_relative_to(self.vault_path):
            return None
        return absolute

    async def read_binary(self, file: StoredFile) -> bytes:
        absolute = self._absolute(file.path)
        if absolute is None:
            msg = f"Path escapes vault: {file.path}"
            raise FileNotFoundError(msg)
        return await asyncio.to_thread(absolute.read_bytes)

    def list_files(self) -> list[StoredFile]:
        files: list[StoredFile] = []
        for path in sorted(self.vault_path.rglob("*")):
            relative = path.relative_to(self.vault_path)
            if any(part in IGNORED_DIRS for part in relative.parts[:-1]):
                continue
            if path.is_file():
                files.append(StoredFile(path=relative.as_posix(), size=path.stat().st_size))
        return files

    def get_file(self, path: str) -> StoredFile | None:
        absolute = self._absolute(path)
        if absolute is None or not absolute.is_file():
            return None
        return StoredFile(
            path=absolute.relative_to(self.vault_path).as_posix(),
            size=absolute.stat().st_size,
        )

    def get_active_file(self) -> StoredFile | None:
        if self._active_path is None:
            return None
        return self.get_file(self._active_path)
