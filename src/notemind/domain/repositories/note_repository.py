"""NoteRepository Protocol."""

from typing import Protocol
from uuid import UUID

from notemind.domain.entities.note import Note, NoteImage


class NoteRepository(Protocol):
    """Note repository."""

    async def save(self, note: Note) -> None:
        """Save a note (upsert)."""
        ...

    async def find_by_id(self, note_id: UUID) -> Note | None:
        """Find a note by ID."""
        ...

    async def find_by_folder(self, folder_id: UUID) -> list[Note]:
        """Return the notes of a folder, most recently updated first."""
        ...

    async def delete(self, note_id: UUID) -> bool:
        """Delete a note and its images.

        Returns:
            True if the note existed.
        """
        ...

    async def add_image(self, image: NoteImage) -> None:
        """Attach an image to its note."""
        ...

    async def find_images(self, note_id: UUID) -> list[NoteImage]:
        """Return the images of a note ordered by position."""
        ...
