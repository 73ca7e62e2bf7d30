"""LLM client for the chat model.

The client is the boundary to the hosted model. It never lets an exception
reach the caller: every failure resolves to a string that can be shown to the
user as the assistant's reply.
"""

import logging
import time
from collections.abc import Mapping
from typing import Protocol

import groq
from groq import AsyncGroq

from ..chat.persona import DEFAULT_PERSONA, Persona
from ..logging import JSONLLogger
from .prompt import build_request

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.3-70b-versatile"

RATE_LIMIT_MESSAGE = (
    "I'm receiving too many requests right now. Please try again in a moment."
)
CONNECTION_ERROR_MESSAGE = (
    "There was an error connecting to the AI service. "
    "Please check your connection and try again."
)
UNEXPECTED_RESPONSE_MESSAGE = (
    "I received an unexpected response format. Please try again."
)


class LLMClient(Protocol):
    """Protocol for sending one chat turn to a model."""

    async def send(
        self,
        text: str,
        generate_code: bool = False,
        think_deeply: bool = False,
        facts: Mapping[str, list[str]] | None = None,
        is_temporary: bool = False,
    ) -> str:
        """Send a user message and return the reply text."""
        ...


class GroqChatClient:
    """LLMClient implementation that wraps AsyncGroq.

    Example:
        from groq import AsyncGroq
        from xpilot.llm import GroqChatClient

        llm = GroqChatClient(AsyncGroq(api_key="..."))
        reply = await llm.send("Explain closures", think_deeply=True)
    """

    def __init__(
        self,
        client: AsyncGroq,
        model: str = DEFAULT_MODEL,
        persona: Persona = DEFAULT_PERSONA,
        event_log: JSONLLogger | None = None,
    ) -> None:
        """Initialize the Groq client wrapper.

        Args:
            client: The AsyncGroq client instance to wrap.
            model: The model to use for completions.
            persona: Identity used to build the system prompt.
            event_log: Optional structured log for call timings and failures.
        """
        self._client = client
        self._model = model
        self._persona = persona
        self._event_log = event_log

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    async def send(
        self,
        text: str,
        generate_code: bool = False,
        think_deeply: bool = False,
        facts: Mapping[str, list[str]] | None = None,
        is_temporary: bool = False,
    ) -> str:
        """Send a user message and return the reply text.

        Args:
            text: The user's message.
            generate_code: Ask for code only.
            think_deeply: Use the deep-analysis system prompt.
            facts: Learned facts for personalization.
            is_temporary: Suppresses personalization.

        Returns:
            The model's reply, or a displayable error message.
        """
        request = build_request(
            text,
            generate_code=generate_code,
            think_deeply=think_deeply,
            facts=facts,
            is_temporary=is_temporary,
            persona=self._persona,
        )

        started = time.monotonic()
        error: str | None = None
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=request.to_messages(),
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
            reply = self._extract_text(response)
            if reply is None:
                error = "unexpected response format"
                logger.error(f"Unexpected API response structure: {response!r}")
                reply = UNEXPECTED_RESPONSE_MESSAGE
        except groq.RateLimitError as e:
            error = "rate limited"
            logger.warning(f"Rate limited by provider: {e}")
            reply = RATE_LIMIT_MESSAGE
        except groq.APIStatusError as e:
            error = f"HTTP {e.status_code}"
            logger.error(f"API error {e.status_code}: {e.message}")
            reply = f"An error occurred: {e.message or 'Unknown error'}"
        except groq.APIConnectionError as e:
            error = "connection failed"
            logger.error(f"Cannot reach provider: {e}")
            reply = CONNECTION_ERROR_MESSAGE
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.exception("Error calling API")
            reply = CONNECTION_ERROR_MESSAGE

        if self._event_log:
            self._event_log.log_llm_call(
                model=self._model,
                duration_ms=(time.monotonic() - started) * 1000,
                generate_code=generate_code,
                think_deeply=think_deeply,
                error=error,
            )

        return reply

    def _extract_text(self, response: object) -> str | None:
        """Pull the reply text out of a chat completion, or None if absent."""
        choices = getattr(response, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content:
            return None
        return content
