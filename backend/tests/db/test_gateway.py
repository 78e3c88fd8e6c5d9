"""
Unit tests for the storage gateway.

Tests the key-value contract of both collections against a real SQLite file.
"""

from datetime import datetime, timezone

import pytest

from filekeeper.db.database import create_engine
from filekeeper.db.gateway import StorageGateway
from filekeeper.db.records import FileRecord, FolderRecord
from filekeeper.errors import InvalidInput, NameCollision, StorageFailure


def _folder(name: str) -> FolderRecord:
    return FolderRecord(name=name, created_at=datetime.now(timezone.utc))


class TestInitialization:
    async def test_first_access_creates_collections(self, gateway):
        assert not gateway.initialized

        assert await gateway.get_all("files") == []
        assert await gateway.get_all("folders") == []
        assert gateway.initialized

    async def test_init_is_idempotent(self, gateway):
        await gateway.init()
        await gateway.add("folders", _folder("Docs"))
        await gateway.init()

        assert len(await gateway.get_all("folders")) == 1

    async def test_unwritable_location_raises_storage_failure(self, tmp_path):
        missing = tmp_path / "does" / "not" / "exist" / "store.db"
        gateway = StorageGateway(create_engine(f"sqlite:///{missing}"))

        with pytest.raises(StorageFailure) as exc_info:
            await gateway.get_all("files")

        assert exc_info.value.operation == "init"
        assert not gateway.initialized
        await gateway.close()

    async def test_unknown_collection_is_rejected(self, gateway):
        with pytest.raises(InvalidInput):
            await gateway.get("thumbnails", "x")


class TestFiles:
    async def test_get_missing_returns_none(self, gateway):
        assert await gateway.get("files", "missing.txt") is None

    async def test_put_then_get(self, gateway):
        record = FileRecord(name="a.txt", folder_id=1, content=b"hello")
        await gateway.put("files", record)

        assert await gateway.get("files", "a.txt") == record

    async def test_put_replaces_existing_record(self, gateway):
        await gateway.put("files", FileRecord(name="a.txt", folder_id=1, content=b"v1"))
        await gateway.put("files", FileRecord(name="a.txt", folder_id=2, content=b"v2"))

        records = await gateway.get_all("files")
        assert len(records) == 1
        assert records[0].content == b"v2"
        assert records[0].folder_id == 2

    async def test_add_existing_name_raises_collision(self, gateway):
        await gateway.add("files", FileRecord(name="a.txt", content=b"1"))

        with pytest.raises(NameCollision):
            await gateway.add("files", FileRecord(name="a.txt", content=b"2"))

        stored = await gateway.get("files", "a.txt")
        assert stored.content == b"1"

    async def test_add_returns_name(self, gateway):
        key = await gateway.add("files", FileRecord(name="b.txt", content=b""))
        assert key == "b.txt"

    async def test_delete_is_idempotent(self, gateway):
        await gateway.put("files", FileRecord(name="a.txt", content=b"x"))

        await gateway.delete("files", "a.txt")
        await gateway.delete("files", "a.txt")
        await gateway.delete("files", "never-existed.txt")

        assert await gateway.get_all("files") == []

    async def test_put_wrong_record_type_is_rejected(self, gateway):
        with pytest.raises(InvalidInput):
            await gateway.put("files", _folder("Docs"))


class TestFolders:
    async def test_add_assigns_increasing_ids(self, gateway):
        first = await gateway.add("folders", _folder("A"))
        second = await gateway.add("folders", _folder("B"))

        assert first == 1
        assert second == 2

    async def test_ids_are_never_reused(self, gateway):
        await gateway.add("folders", _folder("A"))
        second = await gateway.add("folders", _folder("B"))
        await gateway.delete("folders", second)

        third = await gateway.add("folders", _folder("C"))

        assert third == second + 1

    async def test_add_with_explicit_id_is_rejected(self, gateway):
        record = _folder("A").model_copy(update={"id": 7})

        with pytest.raises(InvalidInput):
            await gateway.add("folders", record)

    async def test_put_without_id_is_rejected(self, gateway):
        with pytest.raises(InvalidInput):
            await gateway.put("folders", _folder("A"))

    async def test_created_at_round_trips_as_aware_datetime(self, gateway):
        created_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        folder_id = await gateway.add(
            "folders", FolderRecord(name="A", created_at=created_at)
        )

        stored = await gateway.get("folders", folder_id)

        assert stored.created_at == created_at
        assert stored.created_at.tzinfo is not None

    async def test_naive_created_at_is_refused(self, gateway):
        record = FolderRecord(name="A", created_at=datetime(2024, 5, 1))

        with pytest.raises(StorageFailure):
            await gateway.add("folders", record)

        assert await gateway.get_all("folders") == []


async def test_state_survives_reopening_the_store(db_path):
    url = f"sqlite:///{db_path}"

    first = StorageGateway(create_engine(url))
    folder_id = await first.add("folders", _folder("Photos"))
    await first.put(
        "files", FileRecord(name="a.png", folder_id=folder_id, content=b"\x89PNG")
    )
    await first.close()

    second = StorageGateway(create_engine(url))
    try:
        folder = await second.get("folders", folder_id)
        file = await second.get("files", "a.png")
        next_id = await second.add("folders", _folder("Docs"))
    finally:
        await second.close()

    assert folder.name == "Photos"
    assert file.content == b"\x89PNG"
    assert file.folder_id == folder_id
    assert next_id == folder_id + 1
