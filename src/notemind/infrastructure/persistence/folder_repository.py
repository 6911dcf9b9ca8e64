"""SQLite implementation of FolderRepository."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from notemind.domain.entities.note import Folder
from notemind.infrastructure.persistence.datetime_utils import normalize_to_utc
from notemind.infrastructure.persistence.models import (
    FolderModel,
    NoteImageModel,
    NoteModel,
)

logger = logging.getLogger(__name__)


class SQLiteFolderRepository:
    """SQLite FolderRepository.

    Folders form a tree through parent_id. Deleting a folder removes the
    whole subtree together with the notes and images it contains.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """Initialize the repository.

        Args:
            session_factory: Async session factory.
        """
        self._session_factory = session_factory

    async def save(self, folder: Folder) -> None:
        """Save a folder (upsert)."""
        async with self._session_factory() as session:
            model = FolderModel(
                id=str(folder.id),
                name=folder.name,
                icon=folder.icon,
                parent_id=str(folder.parent_id) if folder.parent_id else None,
                created_at=folder.created_at,
                updated_at=folder.updated_at,
            )
            await session.merge(model)
            await session.commit()

    async def find_by_id(self, folder_id: UUID) -> Folder | None:
        async with self._session_factory() as session:
            model = await session.get(FolderModel, str(folder_id))
            if model is None:
                return None
            return self._to_entity(model)

    async def find_root_folders(self) -> list[Folder]:
        async with self._session_factory() as session:
            stmt = (
                select(FolderModel)
                .where(col(FolderModel.parent_id).is_(None))
                .order_by(col(FolderModel.name))
            )
            result = await session.exec(stmt)
            return [self._to_entity(model) for model in result.all()]

    async def find_subfolders(self, parent_id: UUID) -> list[Folder]:
        async with self._session_factory() as session:
            stmt = (
                select(FolderModel)
                .where(FolderModel.parent_id == str(parent_id))
                .order_by(col(FolderModel.name))
            )
            result = await session.exec(stmt)
            return [self._to_entity(model) for model in result.all()]

    async def rename(self, folder_id: UUID, name: str) -> Folder | None:
        """Rename a folder and bump its updated_at.

        Args:
            folder_id: Folder ID.
            name: New name (surrounding whitespace is stripped).

        Returns:
            The renamed folder, or None if it does not exist.
        """
        async with self._session_factory() as session:
            model = await session.get(FolderModel, str(folder_id))
            if model is None:
                return None
            model.name = name.strip()
            model.updated_at = datetime.now(timezone.utc)
            session.add(model)
            await session.commit()
            await session.refresh(model)
            return self._to_entity(model)

    async def delete(self, folder_id: UUID) -> bool:
        """Delete a folder subtree with its notes and images.

        Returns:
            True if the folder existed, False otherwise.
        """
        async with self._session_factory() as session:
            root = await session.get(FolderModel, str(folder_id))
            if root is None:
                return False

            folder_ids = [root.id]
            frontier = [root.id]
            while frontier:
                result = await session.exec(
                    select(FolderModel.id).where(col(FolderModel.parent_id).in_(frontier))
                )
                frontier = list(result.all())
                folder_ids.extend(frontier)

            note_result = await session.exec(
                select(NoteModel.id).where(col(NoteModel.folder_id).in_(folder_ids))
            )
            note_ids = list(note_result.all())

            if note_ids:
                await session.execute(
                    delete(NoteImageModel).where(
                        col(NoteImageModel.note_id).in_(note_ids)
                    )
                )
                await session.execute(
                    delete(NoteModel).where(col(NoteModel.id).in_(note_ids))
                )
            await session.execute(
                delete(FolderModel).where(col(FolderModel.id).in_(folder_ids))
            )
            await session.commit()

        logger.info(
            "Deleted folder %s (%d folders, %d notes)",
            folder_id,
            len(folder_ids),
            len(note_ids),
        )
        return True

    def _to_entity(self, model: FolderModel) -> Folder:
        return Folder(
            id=UUID(model.id),
            name=model.name,
            icon=model.icon,
            parent_id=UUID(model.parent_id) if model.parent_id else None,
            created_at=normalize_to_utc(model.created_at),
            updated_at=normalize_to_utc(model.updated_at),
        )
