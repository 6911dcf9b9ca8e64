"""FolderRepository Protocol."""

from typing import Protocol
from uuid import UUID

from notemind.domain.entities.note import Folder


class FolderRepository(Protocol):
    """Folder repository."""

    async def save(self, folder: Folder) -> None:
        """Save a folder (upsert).

        Args:
            folder: Folder to save.
        """
        ...

    async def find_by_id(self, folder_id: UUID) -> Folder | None:
        """Find a folder by ID.

        Args:
            folder_id: Folder ID.

        Returns:
            The folder, or None.
        """
        ...

    async def find_root_folders(self) -> list[Folder]:
        """Return folders without a parent, sorted by name."""
        ...

    async def find_subfolders(self, parent_id: UUID) -> list[Folder]:
        """Return direct children of a folder, sorted by name."""
        ...

    async def rename(self, folder_id: UUID, name: str) -> Folder | None:
        """Rename a folder.

        Args:
            folder_id: Folder ID.
            name: New name.

        Returns:
            The renamed folder, or None if it does not exist.
        """
        ...

    async def delete(self, folder_id: UUID) -> bool:
        """Delete a folder with its subfolders, notes and images.

        Args:
            folder_id: Folder ID.

        Returns:
            True if the folder existed.
        """
        ...
