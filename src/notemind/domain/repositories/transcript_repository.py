"""TranscriptRepository Protocol."""

from typing import Protocol

from notemind.domain.entities.transcript import TranscriptEntry


class TranscriptRepository(Protocol):
    """Chat transcript repository."""

    async def save(self, entry: TranscriptEntry) -> None:
        """Save a transcript entry (upsert)."""
        ...

    async def find_all(self) -> list[TranscriptEntry]:
        """Return all entries in chronological order."""
        ...

    async def clear(self) -> None:
        """Delete all entries."""
        ...
