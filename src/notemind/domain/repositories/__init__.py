"""Domain repositories."""

from notemind.domain.repositories.folder_repository import FolderRepository
from notemind.domain.repositories.note_repository import NoteRepository
from notemind.domain.repositories.transcript_repository import (
    TranscriptRepository,
)

__all__ = [
    "FolderRepository",
    "NoteRepository",
    "TranscriptRepository",
]
