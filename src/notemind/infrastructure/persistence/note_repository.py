"""SQLite implementation of NoteRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from notemind.domain.entities.note import Note, NoteImage
from notemind.infrastructure.persistence.datetime_utils import normalize_to_utc
from notemind.infrastructure.persistence.models import NoteImageModel, NoteModel


class SQLiteNoteRepository:
    """SQLite NoteRepository."""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        self._session_factory = session_factory

    async def save(self, note: Note) -> None:
        """Save a note (upsert).

        Args:
            note: Note to save.
        """
        async with self._session_factory() as session:
            model = NoteModel(
                id=str(note.id),
                title=note.title,
                content=note.content,
                folder_id=str(note.folder_id) if note.folder_id else None,
                created_at=note.created_at,
                updated_at=note.updated_at,
            )
            await session.merge(model)
            await session.commit()

    async def find_by_id(self, note_id: UUID) -> Note | None:
        async with self._session_factory() as session:
            model = await session.get(NoteModel, str(note_id))
            if model is None:
                return None
            return self._to_entity(model)

    async def find_by_folder(self, folder_id: UUID) -> list[Note]:
        """Return the notes of a folder, most recently updated first."""
        async with self._session_factory() as session:
            stmt = (
                select(NoteModel)
                .where(NoteModel.folder_id == str(folder_id))
                .order_by(col(NoteModel.updated_at).desc())
            )
            result = await session.exec(stmt)
            return [self._to_entity(model) for model in result.all()]

    async def delete(self, note_id: UUID) -> bool:
        """Delete a note and its images.

        Returns:
            True if the note existed, False otherwise.
        """
        async with self._session_factory() as session:
            await session.execute(
                delete(NoteImageModel).where(NoteImageModel.note_id == str(note_id))  # type: ignore[arg-type]
            )
            result = await session.execute(
                delete(NoteModel).where(NoteModel.id == str(note_id))  # type: ignore[arg-type]
            )
            await session.commit()
            return result.rowcount > 0  # type: ignore[union-attr]

    async def add_image(self, image: NoteImage) -> None:
        async with self._session_factory() as session:
            session.add(
                NoteImageModel(
                    id=str(image.id),
                    note_id=str(image.note_id),
                    position=image.position,
                    image_data=image.image_data,
                    created_at=image.created_at,
                )
            )
            await session.commit()

    async def find_images(self, note_id: UUID) -> list[NoteImage]:
        async with self._session_factory() as session:
            stmt = (
                select(NoteImageModel)
                .where(NoteImageModel.note_id == str(note_id))
                .order_by(col(NoteImageModel.position))
            )
            result = await session.exec(stmt)
            return [
                NoteImage(
                    id=UUID(model.id),
                    note_id=UUID(model.note_id),
                    image_data=model.image_data,
                    position=model.position,
                    created_at=normalize_to_utc(model.created_at),
                )
                for model in result.all()
            ]

    def _to_entity(self, model: NoteModel) -> Note:
        return Note(
            id=UUID(model.id),
            title=model.title,
            content=model.content,
            folder_id=UUID(model.folder_id) if model.folder_id else None,
            created_at=normalize_to_utc(model.created_at),
            updated_at=normalize_to_utc(model.updated_at),
        )
