"""Persistence adapter for sessions and learned facts."""

import json
import logging
from collections.abc import Iterable, Mapping

from ..chat.models import Session
from .base import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

SESSIONS_KEY = "xpilot-chats"
FACTS_KEY = "xpilot-learned-facts"


class ChatStorage:
    """Reads and writes the two durable records of the client.

    Failures are logged and swallowed: in-memory state stays authoritative
    and an unreadable record loads as empty.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _read(self, key: str) -> object | None:
        try:
            raw = self.store.get(key)
        except StorageError as e:
            logger.warning(f"Failed to read {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt record {key}: {e}")
            return None

    def _write(self, key: str, data: object) -> bool:
        try:
            self.store.set(key, json.dumps(data, ensure_ascii=False))
        except StorageError as e:
            logger.warning(f"Failed to write {key}: {e}")
            return False
        return True

    def _remove(self, key: str) -> bool:
        try:
            self.store.delete(key)
        except StorageError as e:
            logger.warning(f"Failed to delete {key}: {e}")
            return False
        return True

    def load_sessions(self) -> list[Session]:
        """Load persisted sessions, skipping temporary or malformed entries."""
        data = self._read(SESSIONS_KEY)
        if not isinstance(data, list):
            return []

        sessions = []
        for item in data:
            try:
                session = Session.from_dict(item)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid session record: {e}")
                continue
            if not session.is_temporary:
                sessions.append(session)
        return sessions

    def save_sessions(self, sessions: Iterable[Session]) -> bool:
        """Persist all non-temporary sessions, preserving order."""
        payload = [s.to_dict() for s in sessions if not s.is_temporary]
        return self._write(SESSIONS_KEY, payload)

    def clear_sessions(self) -> bool:
        return self._remove(SESSIONS_KEY)

    def load_facts(self) -> dict[str, list[str]]:
        """Load the learned facts map."""
        data = self._read(FACTS_KEY)
        if not isinstance(data, dict):
            return {}

        facts: dict[str, list[str]] = {}
        for category, values in data.items():
            if isinstance(values, list):
                facts[str(category)] = [str(v) for v in values]
            else:
                logger.warning(f"Skipping invalid facts category: {category}")
        return facts

    def save_facts(self, facts: Mapping[str, list[str]]) -> bool:
        return self._write(FACTS_KEY, {k: list(v) for k, v in facts.items()})

    def clear_facts(self) -> bool:
        return self._remove(FACTS_KEY)
