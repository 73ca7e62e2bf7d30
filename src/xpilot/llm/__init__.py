"""Model access: prompts and the provider client."""

from .client import (
    CONNECTION_ERROR_MESSAGE,
    DEFAULT_MODEL,
    RATE_LIMIT_MESSAGE,
    UNEXPECTED_RESPONSE_MESSAGE,
    GroqChatClient,
    LLMClient,
)
from .prompt import ChatRequest, build_request, build_system_prompt, format_facts

__all__ = [
    "CONNECTION_ERROR_MESSAGE",
    "DEFAULT_MODEL",
    "RATE_LIMIT_MESSAGE",
    "UNEXPECTED_RESPONSE_MESSAGE",
    "ChatRequest",
    "GroqChatClient",
    "LLMClient",
    "build_request",
    "build_system_prompt",
    "format_facts",
]
