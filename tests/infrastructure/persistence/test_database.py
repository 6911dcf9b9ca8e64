"""Tests for DatabaseManager."""

from pathlib import Path

import pytest
from sqlalchemy import inspect

from notemind.infrastructure.persistence import (
    DatabaseError,
    DatabaseManager,
    PersistenceError,
)


class TestDatabaseManager:
    """DatabaseManager tests."""

    def test_get_engine_with_valid_path(self, tmp_path: Path) -> None:
        """Test engine creation with valid path."""
        manager = DatabaseManager(str(tmp_path / "test.db"))

        engine = manager.get_engine()

        assert "sqlite" in str(engine.url)
        assert manager.get_engine() is engine

    def test_get_engine_creates_parent_directory(self, tmp_path: Path) -> None:
        """Test that parent directory is created if not exists."""
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        manager = DatabaseManager(str(db_path))

        manager.get_engine()

        assert db_path.parent.exists()

    async def test_create_tables(self, tmp_path: Path) -> None:
        """Test that all tables are created and creation is repeatable."""
        manager = DatabaseManager(str(tmp_path / "test.db"))
        await manager.create_tables()
        await manager.create_tables()

        engine = manager.get_engine()
        async with engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
        await manager.close()

        assert {"folders", "notes", "note_images", "transcript_entries"} <= set(
            tables
        )

    async def test_is_healthy(self) -> None:
        """Test health check on an in-memory database."""
        manager = DatabaseManager(":memory:")

        assert await manager.is_healthy() is True
        await manager.close()

    async def test_close_allows_reopen(self, tmp_path: Path) -> None:
        """Test that a closed manager creates a new engine on next use."""
        manager = DatabaseManager(str(tmp_path / "test.db"))
        first = manager.get_engine()

        await manager.close()

        assert manager.get_engine() is not first
        await manager.close()

    async def test_create_tables_failure_raises_database_error(
        self, tmp_path: Path
    ) -> None:
        """Test that an unopenable database is reported as DatabaseError."""
        db_dir = tmp_path / "not_a_file"
        db_dir.mkdir()
        manager = DatabaseManager(str(db_dir))

        with pytest.raises(DatabaseError) as exc_info:
            await manager.create_tables()
        await manager.close()

        assert isinstance(exc_info.value, PersistenceError)
        assert exc_info.value.__cause__ is not None
