"""Tests for chat data models."""

from datetime import datetime, timedelta, timezone

import pytest

from xpilot.chat.models import (
    DEFAULT_TITLE,
    Message,
    Sender,
    Session,
    make_title,
    parse_timestamp,
)


class TestMakeTitle:
    def test_short_text_verbatim(self):
        assert make_title("What is a monad?") == "What is a monad?"

    def test_exactly_thirty_chars_verbatim(self):
        text = "x" * 30
        assert make_title(text) == text

    def test_long_text_truncated(self):
        text = "Explain promises in JavaScript and why they matter here"
        title = make_title(text)
        assert title == "Explain promises in JavaScr..."
        assert len(title) == 30


class TestParseTimestamp:
    def test_offset_preserved(self):
        parsed = parse_timestamp("2024-05-01T10:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_zulu_suffix(self):
        parsed = parse_timestamp("2024-05-01T10:00:00.123Z")
        assert parsed == datetime(2024, 5, 1, 10, 0, 0, 123000, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        parsed = parse_timestamp("2024-05-01T10:00:00")
        assert parsed.tzinfo is timezone.utc

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            parse_timestamp(1704067200000)


class TestMessage:
    def test_defaults(self):
        message = Message(text="hi", sender=Sender.USER)
        assert message.is_code is False
        assert message.id
        assert message.timestamp.tzinfo is not None

    def test_ids_are_unique(self):
        ids = {Message(text="x", sender=Sender.USER).id for _ in range(50)}
        assert len(ids) == 50

    def test_is_immutable(self):
        message = Message(text="hi", sender=Sender.USER)
        with pytest.raises(AttributeError):
            message.text = "changed"  # type: ignore[misc]

    def test_serialization(self):
        message = Message(text="code", sender=Sender.ASSISTANT, is_code=True)

        data = message.to_dict()
        restored = Message.from_dict(data)

        assert data["sender"] == "assistant"
        assert data["isCode"] is True
        assert isinstance(data["timestamp"], str)
        assert restored == message
        assert isinstance(restored.timestamp, datetime)


class TestSession:
    def test_create(self):
        session = Session()
        assert session.title == DEFAULT_TITLE
        assert session.messages == []
        assert session.is_temporary is False

    def test_touch_is_strictly_increasing(self):
        session = Session()
        before = session.updated_at

        session.touch(before)
        assert session.updated_at > before

        later = before + timedelta(seconds=5)
        session.touch(later)
        assert session.updated_at == later

    def test_last_user_index(self):
        session = Session()
        assert session.last_user_index() is None

        session.messages.append(Message(text="q1", sender=Sender.USER))
        session.messages.append(Message(text="a1", sender=Sender.ASSISTANT))
        session.messages.append(Message(text="q2", sender=Sender.USER))
        session.messages.append(Message(text="a2", sender=Sender.ASSISTANT))

        assert session.last_user_index() == 2

    def test_serialization(self):
        session = Session(title="Closures", is_temporary=False)
        session.messages.append(Message(text="q", sender=Sender.USER))
        session.messages.append(Message(text="a", sender=Sender.ASSISTANT))

        restored = Session.from_dict(session.to_dict())

        assert restored.id == session.id
        assert restored.title == "Closures"
        assert restored.created_at == session.created_at
        assert restored.updated_at == session.updated_at
        assert isinstance(restored.created_at, datetime)
        assert [m.text for m in restored.messages] == ["q", "a"]
        assert restored.messages[1].sender is Sender.ASSISTANT
