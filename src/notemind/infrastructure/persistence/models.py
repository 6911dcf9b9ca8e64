"""SQLModel table definitions."""

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FolderModel(SQLModel, table=True):
    """Folder table."""

    __tablename__ = "folders"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    icon: str | None = None
    parent_id: str | None = Field(default=None, foreign_key="folders.id", index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class NoteModel(SQLModel, table=True):
    """Note table."""

    __tablename__ = "notes"

    id: str = Field(primary_key=True)
    title: str
    content: str = ""
    folder_id: str | None = Field(default=None, foreign_key="folders.id", index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)


class NoteImageModel(SQLModel, table=True):
    """Note image table."""

    __tablename__ = "note_images"

    id: str = Field(primary_key=True)
    note_id: str = Field(foreign_key="notes.id", index=True)
    position: int = 0
    image_data: bytes
    created_at: datetime = Field(default_factory=_utcnow)


class TranscriptEntryModel(SQLModel, table=True):
    """Chat transcript table."""

    __tablename__ = "transcript_entries"

    id: str = Field(primary_key=True)
    content: str
    is_from_user: bool
    timestamp: datetime = Field(index=True)
