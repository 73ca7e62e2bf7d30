"""Assistant persona: canned replies and emoji annotation."""

import re
from dataclasses import dataclass

CODE_FENCE = "```"


@dataclass(frozen=True)
class Persona:
    """Identity of the assistant and the operator behind it."""

    name: str = "AnkitXpilot"
    operator: str = "Ankit Pramanik"
    creator_reply: str = "Ankit Pramanik, A Web Developer and AI Trainer made me."
    biography: str = (
        "Ankit is a web developer and AI Trainer who knows various coding "
        "languages. To know more about him reach "
        "https://ankit404developer.github.io/About/"
    )
    creator_triggers: tuple[str, ...] = ("who made you", "who created you")
    biography_triggers: tuple[str, ...] = (
        "who is ankit",
        "who's ankit",
        "tell me about ankit",
        "about ankit",
    )

    def canned_reply(self, text: str) -> str | None:
        """Return a fixed reply for identity questions, or None."""
        lowered = text.lower()
        if any(trigger in lowered for trigger in self.creator_triggers):
            return self.creator_reply
        if any(trigger in lowered for trigger in self.biography_triggers):
            return self.biography
        return None


DEFAULT_PERSONA = Persona()


# (pattern, emoji, append) in priority order. Only the first matching
# trigger is applied.
EMOJI_RULES: tuple[tuple[re.Pattern[str], str, bool], ...] = (
    (re.compile(r"hello|\bhi\b", re.IGNORECASE), "👋", False),
    (re.compile(r"thank", re.IGNORECASE), "😊", True),
    (re.compile(r"sorry|apologize", re.IGNORECASE), "🙏", False),
    (re.compile(r"congratulations|congrats", re.IGNORECASE), "🎉", False),
    (re.compile(r"important", re.IGNORECASE), "❗", False),
    (re.compile(r"javascript|code", re.IGNORECASE), "💻", False),
    (re.compile(r"idea|suggest", re.IGNORECASE), "💡", False),
)


def annotate_with_emoji(text: str) -> str:
    """Add a single emoji next to the first recognised trigger word.

    Replies containing a fenced code block are returned unchanged.
    """
    if CODE_FENCE in text:
        return text

    for pattern, emoji, append in EMOJI_RULES:
        match = pattern.search(text)
        if match is None:
            continue
        if append:
            return f"{text} {emoji}"
        end = match.end()
        return f"{text[:end]} {emoji}{text[end:]}"

    return text
