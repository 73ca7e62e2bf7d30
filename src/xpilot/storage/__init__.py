"""Durable storage for sessions and learned facts."""

from .base import KeyValueStore, StorageError
from .chat_storage import FACTS_KEY, SESSIONS_KEY, ChatStorage
from .file_store import JsonFileStore
from .sqlite_store import SQLiteStore

__all__ = [
    "FACTS_KEY",
    "SESSIONS_KEY",
    "ChatStorage",
    "JsonFileStore",
    "KeyValueStore",
    "SQLiteStore",
    "StorageError",
]
