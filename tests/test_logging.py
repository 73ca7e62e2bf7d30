"""Tests for JSONL logging."""

import json
import tempfile
from pathlib import Path

import pytest

from xpilot.logging import JSONLLogger, LogEntry


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for logs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def logger(temp_log_dir: Path) -> JSONLLogger:
    return JSONLLogger(log_dir=temp_log_dir)


def read_entries(logger: JSONLLogger) -> list[dict]:
    with open(logger.log_path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


def test_log_entry_to_dict():
    """LogEntry excludes None values."""
    entry = LogEntry(timestamp="2024-01-01T00:00:00Z", event="test")
    data = entry.to_dict()

    assert "timestamp" in data
    assert "event" in data
    assert "session_id" not in data
    assert "extra" not in data


def test_log_writes_jsonl(logger: JSONLLogger):
    logger.log("event1", session_id="123")
    logger.log("event2", session_id="456")

    entries = read_entries(logger)
    assert len(entries) == 2
    assert entries[0]["event"] == "event1"
    assert entries[0]["session_id"] == "123"
    assert entries[1]["event"] == "event2"


def test_log_session(logger: JSONLLogger):
    logger.log_session("created", "abc", temporary=True)

    entry = read_entries(logger)[0]
    assert entry["event"] == "session_created"
    assert entry["session_id"] == "abc"
    assert entry["extra"]["temporary"] is True


def test_log_message_omits_text(logger: JSONLLogger):
    logger.log_message(
        "abc", generate_code=True, think_deeply=False, canned=False, duration_ms=12.5
    )

    entry = read_entries(logger)[0]
    assert entry["event"] == "message_sent"
    assert entry["duration_ms"] == 12.5
    assert entry["extra"] == {"generate_code": True, "think_deeply": False, "canned": False}


def test_log_llm_call(logger: JSONLLogger):
    logger.log_llm_call("test-model", 250.0, error="rate limited")

    entry = read_entries(logger)[0]
    assert entry["event"] == "llm_call"
    assert entry["error"] == "rate limited"
    assert entry["extra"]["model"] == "test-model"


def test_set_session_id(logger: JSONLLogger):
    logger.set_session_id("session-42")
    logger.log("event1")
    logger.log_error("boom")

    for entry in read_entries(logger):
        assert entry["session_id"] == "session-42"


def test_rotation(temp_log_dir: Path):
    """Log rotation when max size is exceeded."""
    logger = JSONLLogger(log_dir=temp_log_dir, max_size_mb=0.001)  # ~1KB

    for i in range(100):
        logger.log(f"event_{i}", data="x" * 100)

    log_files = list(temp_log_dir.glob("logs*.jsonl"))
    assert len(log_files) >= 2


def test_write_failure_is_not_raised(temp_log_dir: Path, caplog):
    logger = JSONLLogger(log_dir=temp_log_dir)
    logger.log_path.mkdir()

    logger.log_message("abc", generate_code=False, think_deeply=False, canned=False)

    assert "Failed to write event log" in caplog.text
