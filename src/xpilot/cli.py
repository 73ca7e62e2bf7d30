"""CLI interface for xpilot."""

import sys

from groq import AsyncGroq

from .chat import ChatManager, Sender, Session
from .clipboard import SystemClipboard
from .config import ChatConfig, config_from_env
from .llm import GroqChatClient
from .logging import JSONLLogger
from .memory import LearnedFacts
from .render import format_timestamp, parse_code_blocks, typing_effect
from .storage import ChatStorage, JsonFileStore, KeyValueStore, SQLiteStore

BANNER = """
╔══════════════════════════════════════════╗
║            🤖 AnkitXpilot                ║
║        Your terminal AI assistant        ║
╚══════════════════════════════════════════╝

Commands:
  /new             - Start a new chat
  /temp            - Start a temporary chat (not saved, nothing learned)
  /sessions        - List chats
  /switch <n|id>   - Switch to a chat
  /delete [n|id]   - Delete a chat (current one by default)
  /clear           - Delete all chats
  /code <message>  - Ask for code only
  /deep <message>  - Ask for an in-depth answer
  /regen           - Regenerate the last answer
  /share           - Copy the current chat to the clipboard
  /memory          - Show what I've learned about you
  /forget [category [value]] - Forget learned facts (all by default)
  /help            - Show this help
  /exit, /quit     - Exit

Type your message and press Enter.
"""

CODE_RULE = "┄" * 40


def build_store(config: ChatConfig) -> KeyValueStore:
    """Create the storage backend selected in config."""
    if config.storage_backend == "sqlite":
        store = SQLiteStore(config.store_path)
        store.init_db()
        return store
    return JsonFileStore(config.store_path)


class CLI:
    """Interactive command-line interface for the chat client."""

    def __init__(
        self,
        manager: ChatManager | None = None,
        config: ChatConfig | None = None,
        event_log: JSONLLogger | None = None,
    ) -> None:
        self.config = config or config_from_env()
        self.event_log = event_log or JSONLLogger(log_dir=self.config.log_dir)

        if manager is None:
            llm = GroqChatClient(
                AsyncGroq(api_key=self.config.api_key),
                model=self.config.model,
                event_log=self.event_log,
            )
            self.store = build_store(self.config)
            manager = ChatManager(
                llm,
                ChatStorage(self.store),
                LearnedFacts(),
                clipboard=SystemClipboard(),
                event_log=self.event_log,
            )
        else:
            self.store = None

        self.manager = manager

    @property
    def typing_delay(self) -> float:
        return self.config.typing_speed_ms / 1000

    # Output

    def _session_label(self, index: int, session: Session) -> str:
        marker = "*" if session is self.manager.current_session else " "
        temp = " (temporary)" if session.is_temporary else ""
        return f"{marker} {index + 1}. {session.title}{temp}  [{session.id[:8]}]"

    def _format_sessions(self) -> str:
        return "\n".join(
            self._session_label(i, s) for i, s in enumerate(self.manager.sessions)
        )

    def _format_memory(self) -> str:
        facts = self.manager.learned_facts
        if not facts:
            return "I haven't learned anything yet. As we chat, I'll remember important information here."
        lines = ["What I remember about you:"]
        for category in facts:
            lines.append(f"  {category}: {', '.join(facts.get(category))}")
        return "\n".join(lines)

    async def _print_reply(self, text: str) -> None:
        """Print an assistant reply, typing prose and framing code."""
        for part in parse_code_blocks(text):
            if part.is_code:
                label = f" {part.language} " if part.language else ""
                print(f"{CODE_RULE}{label}")
                print(part.text)
                print(CODE_RULE)
                continue

            printed = 0
            async for shown in typing_effect(part.text, self.typing_delay):
                sys.stdout.write(shown[printed:])
                sys.stdout.flush()
                printed = len(shown)
            sys.stdout.write("\n")
            sys.stdout.flush()

    async def _print_last_reply(self) -> None:
        session = self.manager.current_session
        if self.manager.error:
            print(f"\n❌ Error: {self.manager.error}")
            return
        if session is None or not session.messages:
            return
        last = session.messages[-1]
        if last.sender is not Sender.ASSISTANT:
            return
        print("\n" + "─" * 40)
        await self._print_reply(last.text)
        print(f"{'─' * 34} {format_timestamp(last.timestamp)}")

    # Commands

    def _resolve_session(self, ref: str) -> Session | None:
        """Find a session by 1-based list position or id prefix."""
        sessions = self.manager.sessions
        if ref.isdigit():
            index = int(ref) - 1
            return sessions[index] if 0 <= index < len(sessions) else None
        matches = [s for s in sessions if s.id.startswith(ref)]
        return matches[0] if len(matches) == 1 else None

    async def _process_message(
        self, message: str, generate_code: bool = False, think_deeply: bool = False
    ) -> None:
        """Send a message through the manager and print the reply."""
        if not message.strip():
            print("Nothing to send.")
            return
        if think_deeply:
            print("🤔 Thinking deeply...")
        await self.manager.send_user_message(message, generate_code, think_deeply)
        await self._print_last_reply()

    async def _handle_command(self, command: str) -> bool:
        """Handle a special command. Returns True if should continue, False to exit."""
        name, _, arg = command.strip().partition(" ")
        name = name.lower()
        arg = arg.strip()

        if name in ("/exit", "/quit", "exit", "quit"):
            print("\n👋 Goodbye!")
            self.event_log.log("cli_exit")
            return False

        if name == "/help":
            print(BANNER)
        elif name == "/new":
            session = self.manager.create_session()
            print(f"✓ New chat started [{session.id[:8]}]")
        elif name == "/temp":
            self.manager.create_session(temporary=True)
            print("✓ Temporary chat started. It won't be saved and nothing will be learned.")
        elif name == "/sessions":
            print(self._format_sessions())
        elif name == "/switch":
            session = self._resolve_session(arg)
            if session is None:
                print(f"No chat matches '{arg}'")
            else:
                self.manager.switch_session(session.id)
                print(f"✓ Switched to: {session.title}")
        elif name == "/delete":
            session = self._resolve_session(arg) if arg else self.manager.current_session
            if session is None:
                print(f"No chat matches '{arg}'")
            else:
                self.manager.delete_session(session.id)
                print(f"✓ Deleted: {session.title}")
        elif name == "/clear":
            self.manager.clear_all_sessions()
            print("✓ All chats deleted")
        elif name == "/code":
            await self._process_message(arg, generate_code=True)
        elif name == "/deep":
            await self._process_message(arg, think_deeply=True)
        elif name == "/regen":
            if await self.manager.regenerate_last_response():
                await self._print_last_reply()
            else:
                print("Nothing to regenerate.")
        elif name == "/share":
            session = self.manager.current_session
            if session is None:
                print("No session to share")
            else:
                print(await self.manager.share_session(session.id))
        elif name == "/memory":
            print(self._format_memory())
        elif name == "/forget":
            self._forget(arg)
        else:
            print(f"Unknown command: {name}. Type /help for the list.")

        return True

    def _forget(self, arg: str) -> None:
        if not arg:
            self.manager.clear_learned_facts()
            print("✓ I've forgotten all learned information")
            return

        category, _, value = arg.partition(" ")
        value = value.strip()
        if value:
            removed = self.manager.remove_fact_value(category, value)
        else:
            removed = self.manager.remove_fact_category(category)
        print("✓ Memory updated" if removed else f"Nothing stored for '{arg}'")

    async def run(self) -> None:
        """Run the interactive CLI."""
        self.manager.start()
        print(BANNER)
        current = self.manager.current_session
        if current is not None:
            print(f"Chat: {current.title}\n")

        try:
            while True:
                try:
                    prompt = "temp> " if self.manager.is_temporary_mode else "you> "
                    user_input = input(prompt).strip()

                    if not user_input:
                        continue

                    if user_input.startswith("/") or user_input.lower() in ("exit", "quit"):
                        if not await self._handle_command(user_input):
                            break
                        continue

                    await self._process_message(user_input)

                except KeyboardInterrupt:
                    print("\n\n⚡ Interrupted")
                    try:
                        confirm = input("Exit? (y/n): ").strip().lower()
                        if confirm in ("y", "yes"):
                            print("👋 Goodbye!")
                            break
                    except (KeyboardInterrupt, EOFError):
                        print("\n👋 Goodbye!")
                        break

                except EOFError:
                    print("\n👋 Goodbye!")
                    break
        finally:
            if isinstance(self.store, SQLiteStore):
                self.store.close()


async def run_cli() -> None:
    """Run the CLI with configuration from the environment."""
    config = config_from_env()
    event_log = JSONLLogger(log_dir=config.log_dir)

    if not config.api_key:
        print("❌ Error: GROQ_API_KEY environment variable not set")
        print("Please set it in your .env file or environment")
        return

    cli = CLI(config=config, event_log=event_log)
    await cli.run()
