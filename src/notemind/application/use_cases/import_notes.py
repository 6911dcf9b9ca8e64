"""Bulk import of notes from a JSON batch."""

import logging
from pathlib import Path
from typing import Any
from uuid import UUID

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from notemind.domain.entities import Note
from notemind.domain.repositories import FolderRepository, NoteRepository

logger = logging.getLogger(__name__)


class NoteImportError(Exception):
    """A note batch could not be imported."""


class NoteImportItem(BaseModel):
    """One item of an import batch.

    Attributes:
        filename: Source file name.
        file_id: Source file ID.
        title: Note title.
        answer: Note body.
        metadata: Optional string-to-string metadata. Malformed metadata is
            dropped instead of rejecting the item.
    """

    filename: str
    file_id: str
    title: str
    answer: str
    metadata: dict[str, str] | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _drop_malformed_metadata(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return None
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
            return None
        return value

    def to_note(self, folder_id: UUID) -> Note:
        return Note.create(title=self.title, content=self.answer, folder_id=folder_id)


_ITEMS_ADAPTER = TypeAdapter(list[NoteImportItem])


def parse_import_items(data: str | bytes) -> list[NoteImportItem]:
    """Parse a JSON import batch.

    Args:
        data: JSON array of import items.

    Returns:
        Parsed items in batch order.

    Raises:
        NoteImportError: The batch is not valid JSON or an item lacks a
            required field.
    """
    try:
        return _ITEMS_ADAPTER.validate_json(data)
    except ValidationError as e:
        raise NoteImportError(f"Invalid note import batch: {e}") from e


class ImportNotesUseCase:
    """Creates one note per import item in a target folder."""

    def __init__(
        self,
        note_repository: NoteRepository,
        folder_repository: FolderRepository,
    ) -> None:
        self._note_repository = note_repository
        self._folder_repository = folder_repository

    async def execute(self, data: str | bytes, folder_id: UUID) -> list[Note]:
        """Import a JSON batch into a folder.

        Args:
            data: JSON array of import items.
            folder_id: Target folder ID.

        Returns:
            The created notes, in batch order.

        Raises:
            NoteImportError: Invalid batch or unknown folder.
        """
        folder = await self._folder_repository.find_by_id(folder_id)
        if folder is None:
            raise NoteImportError(f"Folder {folder_id} does not exist")

        items = parse_import_items(data)
        notes = []
        for item in items:
            note = item.to_note(folder.id)
            await self._note_repository.save(note)
            notes.append(note)

        logger.info("Imported %d notes into folder '%s'", len(notes), folder.name)
        return notes

    async def execute_file(self, path: str | Path, folder_id: UUID) -> list[Note]:
        """Import a JSON batch file into a folder."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise NoteImportError(f"Cannot read import file {path}: {e}") from e
        return await self.execute(data, folder_id)
