"""Key-value persistence interface."""

from typing import Protocol


class StorageError(Exception):
    """Raised when a storage backend cannot read or write a record."""


class KeyValueStore(Protocol):
    """Durable string records addressed by key.

    Backends raise StorageError on I/O failure. A missing key is not an error.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...
