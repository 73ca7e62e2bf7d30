"""Tests for persona replies and emoji annotation."""

from xpilot.chat.persona import DEFAULT_PERSONA, Persona, annotate_with_emoji


class TestCannedReply:
    def test_creator_question(self):
        assert DEFAULT_PERSONA.canned_reply("Who created you?") == DEFAULT_PERSONA.creator_reply

    def test_case_insensitive(self):
        assert DEFAULT_PERSONA.canned_reply("WHO MADE YOU") == DEFAULT_PERSONA.creator_reply

    def test_biography_question(self):
        assert DEFAULT_PERSONA.canned_reply("who's ankit anyway") == DEFAULT_PERSONA.biography

    def test_creator_checked_first(self):
        text = "who made you and who is ankit?"
        assert DEFAULT_PERSONA.canned_reply(text) == DEFAULT_PERSONA.creator_reply

    def test_regular_question(self):
        assert DEFAULT_PERSONA.canned_reply("What is Rust?") is None

    def test_custom_persona(self):
        persona = Persona(creator_triggers=("your maker",), creator_reply="Me.")
        assert persona.canned_reply("Who is your maker?") == "Me."


class TestAnnotateWithEmoji:
    def test_greeting(self):
        assert annotate_with_emoji("Hello there") == "Hello 👋 there"

    def test_thanks_appended(self):
        assert annotate_with_emoji("Thank you!") == "Thank you! 😊"

    def test_apology(self):
        assert annotate_with_emoji("I'm sorry about that") == "I'm sorry 🙏 about that"

    def test_only_first_trigger_applied(self):
        result = annotate_with_emoji("This is important code")
        assert result == "This is important ❗ code"
        assert "💻" not in result

    def test_code_mention(self):
        assert annotate_with_emoji("Your code works") == "Your code 💻 works"

    def test_idea(self):
        assert annotate_with_emoji("Good idea") == "Good idea 💡"

    def test_no_trigger(self):
        assert annotate_with_emoji("Plain answer.") == "Plain answer."

    def test_fenced_code_untouched(self):
        text = "Thanks\n```js\nconsole.log(1)\n```"
        assert annotate_with_emoji(text) == text

    def test_hi_inside_word_ignored(self):
        assert annotate_with_emoji("This is fine") == "This is fine"
