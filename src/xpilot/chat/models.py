"""Data models for chat sessions and messages."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

DEFAULT_TITLE = "New Chat"
TEMPORARY_TITLE = "Temporary Chat"
TITLE_MAX_LENGTH = 30


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a unique identifier for sessions and messages."""
    return uuid.uuid4().hex


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is present.

    Raises:
        TypeError: If value is not a string.
        ValueError: If value is not a valid ISO-8601 timestamp.
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected an ISO-8601 string, got {type(value).__name__}")
    # Older records may carry a trailing 'Z'
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def make_title(text: str) -> str:
    """Derive a session title from the first user message."""
    if len(text) > TITLE_MAX_LENGTH:
        return text[: TITLE_MAX_LENGTH - 3] + "..."
    return text


class Sender(Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message.

    Attributes:
        text: The message content.
        sender: Who wrote it.
        id: Unique id within the session.
        timestamp: When the message was created.
        is_code: True if the reply was produced in code mode.
    """

    text: str
    sender: Sender
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=utcnow)
    is_code: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "text": self.text,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
            "isCode": self.is_code,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Create from a dictionary produced by to_dict."""
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            sender=Sender(data["sender"]),
            timestamp=parse_timestamp(data["timestamp"]),
            is_code=bool(data.get("isCode", False)),
        )


@dataclass
class Session:
    """One conversation thread with its own history and title."""

    id: str = field(default_factory=new_id)
    title: str = DEFAULT_TITLE
    messages: list[Message] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    is_temporary: bool = False

    def touch(self, now: datetime | None = None) -> None:
        """Advance updated_at, keeping it strictly increasing."""
        now = now or utcnow()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def last_user_index(self) -> int | None:
        """Index of the most recent user message, or None."""
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].sender is Sender.USER:
                return index
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "messages": [m.to_dict() for m in self.messages],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "isTemporary": self.is_temporary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """Create from a dictionary produced by to_dict."""
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", DEFAULT_TITLE)),
            messages=[Message.from_dict(m) for m in data.get("messages", [])],
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
            is_temporary=bool(data.get("isTemporary", False)),
        )
