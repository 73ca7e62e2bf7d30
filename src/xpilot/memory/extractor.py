"""Keyword-based entity extraction from user messages.

Extraction is a pure function: the same text and configuration always give
the same result, and nothing outside the returned mapping is touched.
"""

import re
from dataclasses import dataclass

TECHNOLOGY_KEYWORDS: tuple[str, ...] = (
    "javascript",
    "typescript",
    "python",
    "java",
    "react",
    "angular",
    "vue",
    "node",
    "html",
    "css",
    "sql",
    "mongodb",
    "docker",
    "kubernetes",
    "aws",
    "azure",
    "rust",
    "golang",
    "kotlin",
    "swift",
    "php",
    "ruby",
    "django",
    "flask",
    "linux",
    "git",
)

STOP_WORDS: frozenset[str] = frozenset({
    "about",
    "after",
    "again",
    "also",
    "because",
    "before",
    "being",
    "could",
    "does",
    "doing",
    "explain",
    "from",
    "have",
    "learn",
    "please",
    "should",
    "something",
    "tell",
    "that",
    "their",
    "there",
    "these",
    "thing",
    "things",
    "this",
    "those",
    "what",
    "when",
    "where",
    "which",
    "while",
    "with",
    "would",
    "your",
})

INTEREST_TRIGGERS: tuple[str, ...] = ("how to", "explain")
NAME_TRIGGERS: tuple[str, ...] = ("my name is", "i am called")

NAME_PATTERN = re.compile(r"(?:my name is|i am called)\s+([^\s,.;:!?]+)", re.IGNORECASE)

# Punctuation trimmed from both ends of a token
_TOKEN_STRIP = ".,;:!?\"'()[]{}<>"


@dataclass(frozen=True)
class ExtractionConfig:
    """Tables and limits used by extract()."""

    technologies: tuple[str, ...] = TECHNOLOGY_KEYWORDS
    stop_words: frozenset[str] = STOP_WORDS
    max_interests: int = 3
    min_interest_length: int = 5


DEFAULT_EXTRACTION = ExtractionConfig()


def _technologies(lowered: str, config: ExtractionConfig) -> list[str]:
    return [keyword for keyword in config.technologies if keyword in lowered]


def _interests(lowered: str, config: ExtractionConfig) -> list[str]:
    if not any(trigger in lowered for trigger in INTEREST_TRIGGERS):
        return []

    interests: list[str] = []
    for raw in lowered.split():
        token = raw.strip(_TOKEN_STRIP)
        if len(token) < config.min_interest_length:
            continue
        if token in config.stop_words or token in config.technologies:
            continue
        if token in interests:
            continue
        interests.append(token)
        if len(interests) >= config.max_interests:
            break
    return interests


def _name(text: str, lowered: str) -> list[str]:
    if not any(trigger in lowered for trigger in NAME_TRIGGERS):
        return []
    match = NAME_PATTERN.search(text)
    if match is None:
        return []
    return [match.group(1)]


def extract(
    text: str, config: ExtractionConfig = DEFAULT_EXTRACTION
) -> dict[str, list[str]]:
    """Scan a message for technologies, interests and a self-introduced name.

    Args:
        text: The raw user message.
        config: Keyword table, stop words and limits.

    Returns:
        Mapping of category to values. Empty categories are omitted.
    """
    lowered = text.lower()
    found = {
        "technologies": _technologies(lowered, config),
        "interests": _interests(lowered, config),
        "name": _name(text, lowered),
    }
    return {category: values for category, values in found.items() if values}
