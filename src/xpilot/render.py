"""Presentation helpers for chat messages."""

import asyncio
import re
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime

_FENCE = re.compile(r"```(?:([\w+#.-]+)[ \t]*\n|\n?)(.*?)(?:```|\Z)", re.DOTALL)


@dataclass(frozen=True)
class ContentPart:
    """A prose or code fragment of a message."""

    text: str
    is_code: bool = False
    language: str | None = None


def parse_code_blocks(text: str) -> list[ContentPart]:
    """Split message text into prose and fenced code parts.

    An unterminated fence turns the rest of the text into code.
    """
    parts: list[ContentPart] = []
    position = 0

    for match in _FENCE.finditer(text):
        prose = text[position : match.start()].strip()
        if prose:
            parts.append(ContentPart(prose))
        code = match.group(2).rstrip("\n")
        parts.append(ContentPart(code, is_code=True, language=match.group(1) or None))
        position = match.end()

    tail = text[position:].strip()
    if tail:
        parts.append(ContentPart(tail))

    return parts


def format_timestamp(timestamp: datetime) -> str:
    """Format a message timestamp as local HH:MM."""
    return timestamp.astimezone().strftime("%H:%M")


async def typing_effect(text: str, delay: float = 0.03) -> AsyncIterator[str]:
    """Yield the text revealed one character at a time."""
    for end in range(1, len(text) + 1):
        yield text[:end]
        if delay > 0:
            await asyncio.sleep(delay)

