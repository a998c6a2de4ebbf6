"""Domain interface for the read-only content store (the vault)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True)
class StoredFile:
    """A file known to the content store.

    Attributes:
        path: Store-relative POSIX path (e.g. "attachments/diagram.png")
        size: Size in bytes
    """

    path: str
    size: int

    @property
    def name(self) -> str:
        """File name including extension."""
        return PurePosixPath(self.path).name

    @property
    def extension(self) -> str:
        """Lowercase extension without the dot."""
        return PurePosixPath(self.path).suffix.lower().lstrip(".")


class IContentStore(ABC):
    """Interface for the content store consumed by the media resolver.

    Only read operations are required; the generation core never writes.
    """

    @abstractmethod
    async def read_binary(self, file: StoredFile) -> bytes:
        """Read a file's bytes.

        Raises:
            OSError: If the file cannot be read
        """

    @abstractmethod
    def list_files(self) -> list[StoredFile]:
        """List every file in the store."""

    @abstractmethod
    def get_file(self, path: str) -> StoredFile | None:
        """Look up a file by exact store-relative path.

        Returns:
            The file with its size, or None if it does not exist
        """

    @abstractmethod
    def get_active_file(self) -> StoredFile | None:
        """Return the file currently open in the editor, if any."""
