"""Application use cases."""

from notemind.application.use_cases.import_notes import (
    ImportNotesUseCase,
    NoteImportError,
    NoteImportItem,
    parse_import_items,
)

__all__ = [
    "ImportNotesUseCase",
    "NoteImportError",
    "NoteImportItem",
    "parse_import_items",
]
