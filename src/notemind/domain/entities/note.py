"""Folder, note and note image entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Folder:
    """Folder entity.

    Attributes:
        id: Folder ID.
        name: Display name.
        icon: Optional icon name.
        parent_id: Parent folder ID (None for root folders).
        created_at: Creation time.
        updated_at: Last update time.
    """

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime
    icon: str | None = None
    parent_id: UUID | None = None

    @classmethod
    def create(
        cls,
        name: str,
        parent_id: UUID | None = None,
        icon: str | None = None,
    ) -> "Folder":
        """Create a new folder with a fresh ID and timestamps."""
        now = _now()
        return cls(
            id=uuid4(),
            name=name.strip(),
            icon=icon,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )

    def renamed(self, name: str) -> "Folder":
        return replace(self, name=name.strip(), updated_at=_now())

    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Note:
    """Note entity.

    Attributes:
        id: Note ID.
        title: Note title.
        content: Note body text.
        folder_id: Owning folder ID.
        created_at: Creation time.
        updated_at: Last update time.
    """

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    folder_id: UUID | None = None

    @classmethod
    def create(
        cls,
        title: str,
        content: str = "",
        folder_id: UUID | None = None,
    ) -> "Note":
        """Create a new note with a fresh ID and timestamps."""
        now = _now()
        return cls(
            id=uuid4(),
            title=title,
            content=content,
            folder_id=folder_id,
            created_at=now,
            updated_at=now,
        )

    def edited(self, title: str | None = None, content: str | None = None) -> "Note":
        """Return a copy with the given fields changed and updated_at bumped."""
        return replace(
            self,
            title=self.title if title is None else title,
            content=self.content if content is None else content,
            updated_at=_now(),
        )


@dataclass(frozen=True)
class NoteImage:
    """Image embedded in a note.

    Attributes:
        id: Image ID.
        note_id: Owning note ID.
        image_data: Encoded image bytes.
        position: Character offset of the image in the note content.
        created_at: Creation time.
    """

    id: UUID
    note_id: UUID
    image_data: bytes
    position: int
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(cls, note_id: UUID, image_data: bytes, position: int) -> "NoteImage":
        return cls(
            id=uuid4(),
            note_id=note_id,
            image_data=image_data,
            position=position,
        )
