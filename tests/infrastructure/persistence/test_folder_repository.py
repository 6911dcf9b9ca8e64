"""Tests for SQLiteFolderRepository."""

import asyncio
from uuid import uuid4

import pytest

from notemind.domain.entities import Folder, Note, NoteImage
from notemind.infrastructure.persistence import (
    SQLiteFolderRepository,
    SQLiteNoteRepository,
)


@pytest.fixture
def repository(session_factory) -> SQLiteFolderRepository:
    return SQLiteFolderRepository(session_factory)


@pytest.fixture
def note_repository(session_factory) -> SQLiteNoteRepository:
    return SQLiteNoteRepository(session_factory)


class TestSave:
    """save / find_by_id tests."""

    async def test_save_and_find(self, repository: SQLiteFolderRepository) -> None:
        folder = Folder.create("Journal", icon="book")

        await repository.save(folder)

        found = await repository.find_by_id(folder.id)
        assert found == folder

    async def test_save_is_upsert(self, repository: SQLiteFolderRepository) -> None:
        folder = Folder.create("Draft")
        await repository.save(folder)

        await repository.save(folder.renamed("Final"))

        found = await repository.find_by_id(folder.id)
        assert found is not None
        assert found.name == "Final"

    async def test_find_missing_returns_none(
        self, repository: SQLiteFolderRepository
    ) -> None:
        assert await repository.find_by_id(uuid4()) is None


class TestHierarchy:
    """Root folder and subfolder queries."""

    async def test_root_folders_sorted_by_name(
        self, repository: SQLiteFolderRepository
    ) -> None:
        work = Folder.create("Work")
        ideas = Folder.create("Ideas")
        child = Folder.create("Archive", parent_id=work.id)
        for folder in (work, ideas, child):
            await repository.save(folder)

        roots = await repository.find_root_folders()

        assert [f.name for f in roots] == ["Ideas", "Work"]

    async def test_subfolders(self, repository: SQLiteFolderRepository) -> None:
        parent = Folder.create("Work")
        b = Folder.create("B", parent_id=parent.id)
        a = Folder.create("A", parent_id=parent.id)
        for folder in (parent, b, a):
            await repository.save(folder)

        children = await repository.find_subfolders(parent.id)

        assert [f.name for f in children] == ["A", "B"]
        assert all(f.parent_id == parent.id for f in children)


class TestRename:
    """rename tests."""

    async def test_rename_strips_and_bumps_updated_at(
        self, repository: SQLiteFolderRepository
    ) -> None:
        folder = Folder.create("Old")
        await repository.save(folder)
        await asyncio.sleep(0.001)

        renamed = await repository.rename(folder.id, "  New  ")

        assert renamed is not None
        assert renamed.name == "New"
        assert renamed.updated_at > folder.updated_at

    async def test_rename_missing(self, repository: SQLiteFolderRepository) -> None:
        assert await repository.rename(uuid4(), "x") is None


class TestDelete:
    """delete cascade tests."""

    async def test_delete_cascades_to_subtree(
        self,
        repository: SQLiteFolderRepository,
        note_repository: SQLiteNoteRepository,
    ) -> None:
        root = Folder.create("Root")
        child = Folder.create("Child", parent_id=root.id)
        grandchild = Folder.create("Grandchild", parent_id=child.id)
        other = Folder.create("Other")
        for folder in (root, child, grandchild, other):
            await repository.save(folder)

        deep_note = Note.create("Deep", folder_id=grandchild.id)
        kept_note = Note.create("Kept", folder_id=other.id)
        await note_repository.save(deep_note)
        await note_repository.save(kept_note)
        await note_repository.add_image(NoteImage.create(deep_note.id, b"png", 0))

        assert await repository.delete(root.id) is True

        for folder in (root, child, grandchild):
            assert await repository.find_by_id(folder.id) is None
        assert await note_repository.find_by_id(deep_note.id) is None
        assert await note_repository.find_images(deep_note.id) == []
        assert await repository.find_by_id(other.id) is not None
        assert await note_repository.find_by_id(kept_note.id) is not None

    async def test_delete_missing(self, repository: SQLiteFolderRepository) -> None:
        assert await repository.delete(uuid4()) is False
