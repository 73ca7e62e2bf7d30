"""Chat sessions, messages and the manager that owns them."""

from .manager import ChatManager
from .models import Message, Sender, Session
from .persona import DEFAULT_PERSONA, Persona, annotate_with_emoji

__all__ = [
    "DEFAULT_PERSONA",
    "ChatManager",
    "Message",
    "Persona",
    "Sender",
    "Session",
    "annotate_with_emoji",
]
