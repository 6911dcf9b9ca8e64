"""SQLite implementation of TranscriptRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from notemind.domain.entities.transcript import TranscriptEntry
from notemind.infrastructure.persistence.datetime_utils import normalize_to_utc
from notemind.infrastructure.persistence.models import TranscriptEntryModel


class SQLiteTranscriptRepository:
    """Stores the chat transcript shown in the chat panel."""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        self._session_factory = session_factory

    async def save(self, entry: TranscriptEntry) -> None:
        """Save an entry (upsert), so a grown assistant entry overwrites itself."""
        async with self._session_factory() as session:
            model = TranscriptEntryModel(
                id=str(entry.id),
                content=entry.content,
                is_from_user=entry.is_from_user,
                timestamp=entry.timestamp,
            )
            await session.merge(model)
            await session.commit()

    async def find_all(self) -> list[TranscriptEntry]:
        async with self._session_factory() as session:
            stmt = select(TranscriptEntryModel).order_by(
                col(TranscriptEntryModel.timestamp)
            )
            result = await session.exec(stmt)
            return [
                TranscriptEntry(
                    id=UUID(model.id),
                    content=model.content,
                    is_from_user=model.is_from_user,
                    timestamp=normalize_to_utc(model.timestamp),
                )
                for model in result.all()
            ]

    async def clear(self) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(TranscriptEntryModel))
            await session.commit()
