"""Runtime configuration loaded from the environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .llm import DEFAULT_MODEL

STORAGE_BACKENDS = ("json", "sqlite")


@dataclass
class ChatConfig:
    """Configuration for the chat client."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    data_dir: Path = field(default_factory=lambda: Path.home() / ".xpilot")
    storage_backend: str = "json"
    typing_speed_ms: int = 30

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir).expanduser()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.storage_backend!r}, "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    @property
    def store_path(self) -> Path:
        """Directory (json) or database file (sqlite) for persisted records."""
        if self.storage_backend == "sqlite":
            return self.data_dir / "xpilot.db"
        return self.data_dir / "store"


def config_from_env() -> ChatConfig:
    """Load configuration from environment variables."""
    kwargs: dict = {
        "api_key": os.getenv("GROQ_API_KEY"),
        "model": os.getenv("GROQ_MODEL", DEFAULT_MODEL),
        "storage_backend": os.getenv("XPILOT_STORAGE", "json").lower(),
        "typing_speed_ms": int(os.getenv("XPILOT_TYPING_MS", "30")),
    }
    data_dir = os.getenv("XPILOT_DATA_DIR")
    if data_dir:
        kwargs["data_dir"] = Path(data_dir)
    return ChatConfig(**kwargs)
