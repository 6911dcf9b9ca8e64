"""Persistence infrastructure."""

from notemind.infrastructure.persistence.database import DatabaseManager
from notemind.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from notemind.infrastructure.persistence.folder_repository import (
    SQLiteFolderRepository,
)
from notemind.infrastructure.persistence.models import (
    FolderModel,
    NoteImageModel,
    NoteModel,
    TranscriptEntryModel,
)
from notemind.infrastructure.persistence.note_repository import SQLiteNoteRepository
from notemind.infrastructure.persistence.transcript_repository import (
    SQLiteTranscriptRepository,
)

__all__ = [
    "DatabaseError",
    "DatabaseManager",
    "FolderModel",
    "NoteImageModel",
    "NoteModel",
    "PersistenceError",
    "SQLiteFolderRepository",
    "SQLiteNoteRepository",
    "SQLiteTranscriptRepository",
    "TranscriptEntryModel",
]
