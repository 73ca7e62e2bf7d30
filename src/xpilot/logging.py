"""JSONL event log for observability."""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    session_id: str | None = None
    duration_ms: float | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {}}


class JSONLLogger:
    """Logger that writes structured events in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "logs.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = Path.home() / ".xpilot" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)
        self._current_session_id: str | None = None

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def set_session_id(self, session_id: str | None) -> None:
        """Set the current session for all subsequent logs."""
        self._current_session_id = session_id

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file. Write failures are logged, not raised."""
        try:
            self._rotate_if_needed()
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")
        except OSError as e:
            logger.warning(f"Failed to write event log {self.log_path}: {e}")

    def log(
        self,
        event: str,
        *,
        session_id: str | None = None,
        duration_ms: float | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            session_id=session_id or self._current_session_id,
            duration_ms=duration_ms,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_session(self, action: str, session_id: str, *, temporary: bool = False) -> None:
        """Log a session lifecycle change (created, switched, deleted, cleared)."""
        self.log(f"session_{action}", session_id=session_id, temporary=temporary)

    def log_message(
        self,
        session_id: str,
        *,
        generate_code: bool,
        think_deeply: bool,
        canned: bool,
        duration_ms: float | None = None,
    ) -> None:
        """Log a completed chat turn. Message text is not recorded."""
        self.log(
            "message_sent",
            session_id=session_id,
            duration_ms=duration_ms,
            generate_code=generate_code,
            think_deeply=think_deeply,
            canned=canned,
        )

    def log_llm_call(
        self,
        model: str,
        duration_ms: float,
        *,
        generate_code: bool = False,
        think_deeply: bool = False,
        error: str | None = None,
    ) -> None:
        """Log a call to the model provider."""
        self.log(
            "llm_call",
            duration_ms=duration_ms,
            error=error,
            model=model,
            generate_code=generate_code,
            think_deeply=think_deeply,
        )

    def log_error(self, error: str, *, session_id: str | None = None) -> None:
        self.log("error", session_id=session_id, error=error)

