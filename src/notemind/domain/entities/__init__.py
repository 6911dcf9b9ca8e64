"""Domain entities."""

from notemind.domain.entities.message import ChatMessage, Role
from notemind.domain.entities.note import Folder, Note, NoteImage
from notemind.domain.entities.reflection import ReflectionAccumulator, TextRange
from notemind.domain.entities.transcript import TranscriptEntry

__all__ = [
    "ChatMessage",
    "Folder",
    "Note",
    "NoteImage",
    "ReflectionAccumulator",
    "Role",
    "TextRange",
    "TranscriptEntry",
]
