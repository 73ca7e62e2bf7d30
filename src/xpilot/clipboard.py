"""System clipboard access."""

import shutil
import subprocess
import sys
from typing import Protocol

# Tried in order; the first one found on PATH wins
CLIPBOARD_COMMANDS: tuple[list[str], ...] = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
)


class ClipboardError(Exception):
    """Raised when text cannot be placed on the clipboard."""


class Clipboard(Protocol):
    """Anything that can receive text for the user to paste."""

    def copy(self, text: str) -> None:
        ...


class SystemClipboard:
    """Copies text with the platform's clipboard command."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    def _command(self) -> list[str]:
        for argv in CLIPBOARD_COMMANDS:
            if shutil.which(argv[0]):
                return argv
        raise ClipboardError(f"No clipboard command available on {sys.platform}")

    def copy(self, text: str) -> None:
        argv = self._command()
        try:
            subprocess.run(
                argv,
                input=text.encode("utf-8"),
                check=True,
                timeout=self.timeout,
                capture_output=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ClipboardError(f"{argv[0]} failed: {e}") from e
