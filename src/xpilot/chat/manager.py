"""Session and memory manager: the chat client's application state."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING

from ..memory import DEFAULT_EXTRACTION, ExtractionConfig, LearnedFacts, extract
from .models import TEMPORARY_TITLE, Message, Sender, Session, make_title, utcnow
from .persona import DEFAULT_PERSONA, Persona, annotate_with_emoji

if TYPE_CHECKING:
    from ..clipboard import Clipboard
    from ..llm import LLMClient
    from ..logging import JSONLLogger
    from ..storage import ChatStorage

logger = logging.getLogger(__name__)


class ChatManager:
    """Owns the sessions, the current session and the learned facts.

    One message is processed at a time: a send issued while another is in
    flight is rejected and reported through ``error``.
    """

    BUSY_MESSAGE = "Still working on the previous message. Please wait for it to finish."
    UNKNOWN_ERROR = "An unknown error occurred"

    def __init__(
        self,
        llm: LLMClient,
        storage: ChatStorage,
        learned_facts: LearnedFacts | None = None,
        *,
        persona: Persona = DEFAULT_PERSONA,
        extraction: ExtractionConfig = DEFAULT_EXTRACTION,
        clipboard: Clipboard | None = None,
        event_log: JSONLLogger | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the manager.

        Args:
            llm: Client used for model replies.
            storage: Persistence adapter for sessions and facts.
            learned_facts: Shared facts container. Loaded from storage by start().
            persona: Assistant identity for canned replies and transcripts.
            extraction: Keyword tables for entity extraction.
            clipboard: Target for share_session.
            event_log: Optional structured event log.
            clock: Source of timestamps.
        """
        self.llm = llm
        self.storage = storage
        self.learned_facts = learned_facts if learned_facts is not None else LearnedFacts()
        self.persona = persona
        self.extraction = extraction
        self.clipboard = clipboard
        self.event_log = event_log
        self._clock = clock

        self.sessions: list[Session] = []
        self.current_session: Session | None = None
        self.is_temporary_mode = False
        self.is_loading = False
        self.error: str | None = None
        self._lock = asyncio.Lock()

    # Lifecycle

    def start(self) -> None:
        """Load persisted state, creating a first session if none exists."""
        self.learned_facts.replace(self.storage.load_facts())
        self.sessions = self.storage.load_sessions()
        if self.sessions:
            self.current_session = self.sessions[0]
            self.is_temporary_mode = False
        else:
            self.create_session()

    def _persist_sessions(self) -> None:
        self.storage.save_sessions(self.sessions)

    def _persist_facts(self) -> None:
        self.storage.save_facts(self.learned_facts.to_dict())

    def _log_session(self, action: str, session: Session) -> None:
        if self.event_log:
            self.event_log.log_session(action, session.id, temporary=session.is_temporary)

    def get_session(self, session_id: str) -> Session | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    # Session operations

    def create_session(self, temporary: bool = False) -> Session:
        """Create a new empty session at the head of the list and select it."""
        now = self._clock()
        session = Session(created_at=now, updated_at=now, is_temporary=temporary)
        if temporary:
            session.title = TEMPORARY_TITLE

        self.sessions.insert(0, session)
        self.current_session = session
        self.is_temporary_mode = temporary

        if not temporary:
            self._persist_sessions()
        self._log_session("created", session)
        return session

    def switch_session(self, session_id: str) -> None:
        """Select a session by id. Unknown ids are ignored."""
        session = self.get_session(session_id)
        if session is None:
            return
        self.current_session = session
        self.is_temporary_mode = session.is_temporary
        self._log_session("switched", session)

    def delete_session(self, session_id: str) -> None:
        """Remove a session, electing a replacement if it was current."""
        session = self.get_session(session_id)
        if session is None:
            return

        self.sessions.remove(session)
        self._persist_sessions()
        self._log_session("deleted", session)

        if self.current_session is session:
            if self.sessions:
                self.current_session = self.sessions[0]
                self.is_temporary_mode = self.current_session.is_temporary
            else:
                self.create_session()

    def clear_all_sessions(self) -> None:
        """Drop every session and start over with a fresh one."""
        self.sessions = []
        self.current_session = None
        self.storage.clear_sessions()
        if self.event_log:
            self.event_log.log("sessions_cleared")
        self.create_session()

    # Messaging

    async def send_user_message(
        self,
        text: str,
        generate_code: bool = False,
        think_deeply: bool = False,
    ) -> bool:
        """Send a user message and append the assistant's reply.

        Returns:
            True if the turn ran, False if it was ignored (no session, blank
            text, or another message already in flight).
        """
        if self.current_session is None or not text.strip():
            return False
        if self._lock.locked():
            self.error = self.BUSY_MESSAGE
            return False

        async with self._lock:
            await self._run_turn(text, generate_code, think_deeply, learn=True)
        return True

    async def regenerate_last_response(self) -> bool:
        """Replace the last assistant reply with a fresh one.

        The conversation tail from the last user message on is dropped and
        that message is sent again with the previous reply's code flag.
        """
        session = self.current_session
        if session is None or len(session.messages) < 2:
            return False
        if self._lock.locked():
            self.error = self.BUSY_MESSAGE
            return False

        index = session.last_user_index()
        if index is None:
            return False

        user_text = session.messages[index].text
        is_code = session.messages[-1].is_code
        async with self._lock:
            del session.messages[index:]
            await self._run_turn(user_text, is_code, False, learn=False)
        return True

    async def _run_turn(
        self,
        text: str,
        generate_code: bool,
        think_deeply: bool,
        learn: bool,
    ) -> None:
        session = self.current_session
        assert session is not None

        self.is_loading = True
        self.error = None
        started = time.monotonic()
        try:
            temporary = self.is_temporary_mode
            if learn and not temporary:
                if self.learned_facts.merge(extract(text, self.extraction)):
                    self._persist_facts()

            is_first = not session.messages
            session.messages.append(
                Message(text=text, sender=Sender.USER, timestamp=self._clock())
            )

            reply = self.persona.canned_reply(text)
            canned = reply is not None
            if reply is None:
                facts = {} if temporary else self.learned_facts.to_dict()
                reply = await self.llm.send(
                    text, generate_code, think_deeply, facts, temporary
                )
                if not generate_code:
                    reply = annotate_with_emoji(reply)

            session.messages.append(
                Message(
                    text=reply,
                    sender=Sender.ASSISTANT,
                    timestamp=self._clock(),
                    is_code=generate_code,
                )
            )

            if is_first and not session.is_temporary:
                session.title = make_title(text)

            session.touch(self._clock())
            self._persist_sessions()

            if self.event_log:
                self.event_log.log_message(
                    session.id,
                    generate_code=generate_code,
                    think_deeply=think_deeply,
                    canned=canned,
                    duration_ms=(time.monotonic() - started) * 1000,
                )
        except Exception as e:
            self.error = str(e) or self.UNKNOWN_ERROR
            logger.exception("Error sending message")
            if self.event_log:
                self.event_log.log_error(self.error, session_id=session.id)
        finally:
            self.is_loading = False

    # Learned facts

    def clear_learned_facts(self) -> None:
        """Forget everything learned and remove the persisted record."""
        self.learned_facts.clear()
        self.storage.clear_facts()

    def update_learned_facts(self, facts: Mapping[str, list[str]]) -> None:
        """Replace learned facts wholesale, as edited by the user."""
        self.learned_facts.replace(facts)
        self._persist_facts()

    def remove_fact_category(self, category: str) -> bool:
        removed = self.learned_facts.remove_category(category)
        if removed:
            self._persist_facts()
        return removed

    def remove_fact_value(self, category: str, value: str) -> bool:
        removed = self.learned_facts.remove_value(category, value)
        if removed:
            self._persist_facts()
        return removed

    # Sharing

    def transcript(self, session: Session) -> str:
        """Plain-text rendering of a session."""
        lines = []
        for message in session.messages:
            speaker = "You" if message.sender is Sender.USER else self.persona.name
            lines.append(f"{speaker}: {message.text}")
        return "\n\n".join(lines)

    async def share_session(self, session_id: str) -> str:
        """Copy a session transcript to the clipboard.

        Falls back to the current session for unknown ids.

        Returns:
            A status message for the user. Never raises.
        """
        session = self.get_session(session_id) or self.current_session
        if session is None:
            return "No session to share"

        if self.clipboard is None:
            return "Failed to copy chat"

        try:
            await asyncio.to_thread(self.clipboard.copy, self.transcript(session))
        except Exception as e:
            logger.error(f"Failed to copy: {e}")
            return "Failed to copy chat"
        return "Chat copied to clipboard"
