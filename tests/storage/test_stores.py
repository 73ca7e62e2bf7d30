"""Tests for the key-value storage backends."""

from pathlib import Path

import pytest

from xpilot.storage import JsonFileStore, SQLiteStore, StorageError


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLiteStore:
    """Create a SQLiteStore with a temporary database."""
    store = SQLiteStore(tmp_path / "test.db")
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def file_store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "records")


@pytest.fixture(params=["json", "sqlite"])
def store(request, file_store: JsonFileStore, sqlite_store: SQLiteStore):
    return file_store if request.param == "json" else sqlite_store


class TestKeyValueContract:
    def test_missing_key_is_none(self, store):
        assert store.get("absent") is None

    def test_set_and_get(self, store):
        store.set("chats", '{"a": 1}')
        assert store.get("chats") == '{"a": 1}'

    def test_overwrite(self, store):
        store.set("chats", "one")
        store.set("chats", "two")
        assert store.get("chats") == "two"

    def test_delete(self, store):
        store.set("chats", "one")
        store.delete("chats")
        assert store.get("chats") is None

    def test_delete_missing_is_noop(self, store):
        store.delete("absent")

    def test_keys_are_independent(self, store):
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert store.get("b") == "2"


class TestJsonFileStore:
    def test_creates_directory_on_write(self, tmp_path: Path):
        store = JsonFileStore(tmp_path / "nested" / "dir")
        store.set("chats", "[]")
        assert (tmp_path / "nested" / "dir" / "chats.json").exists()

    def test_rejects_path_like_keys(self, file_store: JsonFileStore):
        with pytest.raises(StorageError):
            file_store.set("../escape", "x")

    def test_unwritable_directory_raises_storage_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = JsonFileStore(blocker)
        with pytest.raises(StorageError):
            store.set("chats", "[]")


class TestSQLiteStore:
    def test_creates_db_directory(self, tmp_path: Path):
        nested_path = tmp_path / "nested" / "dir" / "xpilot.db"
        store = SQLiteStore(nested_path)
        store.init_db()
        assert nested_path.exists()
        store.close()

    def test_unwritable_directory_raises_storage_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = SQLiteStore(blocker / "nested" / "xpilot.db")
        with pytest.raises(StorageError):
            store.init_db()
        with pytest.raises(StorageError):
            store.get("chats")

    def test_creates_records_table(self, sqlite_store: SQLiteStore):
        conn = sqlite_store._get_connection()
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='records'"
        )
        assert cursor.fetchone() is not None

    def test_init_db_idempotent(self, sqlite_store: SQLiteStore):
        sqlite_store.init_db()
        sqlite_store.init_db()

    def test_persists_across_connections(self, tmp_path: Path):
        db_path = tmp_path / "xpilot.db"
        store = SQLiteStore(db_path)
        store.init_db()
        store.set("chats", "[]")
        store.close()

        reopened = SQLiteStore(db_path)
        assert reopened.get("chats") == "[]"
        reopened.close()

    def test_missing_table_raises_storage_error(self, tmp_path: Path):
        store = SQLiteStore(tmp_path / "empty.db")
        with pytest.raises(StorageError):
            store.get("chats")
        store.close()
