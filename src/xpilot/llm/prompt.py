"""Prompt builder for the chat model."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..chat.persona import DEFAULT_PERSONA, Persona

SYSTEM_PROMPT_BASE = """You are {name}, a helpful and knowledgeable AI assistant created by {operator}.
Your responses should be informative, concise, and user-friendly.
If someone asks 'Who made you?', always respond with: '{creator_reply}'
If someone asks 'Who is {operator_first}?', always respond with: '{biography}'
When generating code, provide well-commented, clean, and efficient solutions."""

DEEP_THINKING_INSTRUCTIONS = """
In this interaction, the user has requested a more thoughtful and in-depth response.
Take your time to explore multiple perspectives, consider edge cases, and provide a comprehensive analysis.
Your response should be more detailed than usual, thoroughly examining the subject matter.
Include relevant examples, potential implications, and nuanced considerations in your answer."""

PERSONALIZATION_TEMPLATE = """I've learned the following information about the user or their interests:
{facts}

Use this information to personalize your response when relevant, but don't explicitly mention that you've "learned" this unless asked about your memory or capabilities."""

CODE_ONLY_TEMPLATE = (
    "Please provide only code as a solution to this request. Ensure the code is "
    "well-commented, efficient, and follows best practices: {message}"
)


@dataclass
class ChatRequest:
    """Provider-neutral request for one chat turn."""

    system: str
    prompt: str
    temperature: float
    max_tokens: int

    def to_messages(self) -> list[dict[str, Any]]:
        """Chat-completions message list."""
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.prompt},
        ]


def build_system_prompt(
    persona: Persona = DEFAULT_PERSONA,
    think_deeply: bool = False,
    facts: Mapping[str, list[str]] | None = None,
    is_temporary: bool = False,
) -> str:
    """Build the system prompt with persona, depth and personalization.

    Args:
        persona: Identity the assistant speaks as.
        think_deeply: Use the deep-analysis variant.
        facts: Learned facts to personalize with.
        is_temporary: Temporary chats never receive learned facts.

    Returns:
        Complete system prompt string.
    """
    prompt = SYSTEM_PROMPT_BASE.format(
        name=persona.name,
        operator=persona.operator,
        operator_first=persona.operator.split()[0],
        creator_reply=persona.creator_reply,
        biography=persona.biography,
    )

    if think_deeply:
        prompt += DEEP_THINKING_INSTRUCTIONS

    if facts and not is_temporary:
        prompt += "\n\n" + format_facts(facts)

    return prompt


def format_facts(facts: Mapping[str, list[str]]) -> str:
    """Format learned facts as a personalization block."""
    lines = "\n".join(
        f"- {category}: {', '.join(values)}" for category, values in facts.items()
    )
    return PERSONALIZATION_TEMPLATE.format(facts=lines)


def build_request(
    text: str,
    generate_code: bool = False,
    think_deeply: bool = False,
    facts: Mapping[str, list[str]] | None = None,
    is_temporary: bool = False,
    persona: Persona = DEFAULT_PERSONA,
) -> ChatRequest:
    """Build the request for one user turn."""
    prompt = CODE_ONLY_TEMPLATE.format(message=text) if generate_code else text

    if generate_code:
        temperature = 0.2
    elif think_deeply:
        temperature = 0.5
    else:
        temperature = 0.7

    return ChatRequest(
        system=build_system_prompt(persona, think_deeply, facts, is_temporary),
        prompt=prompt,
        temperature=temperature,
        max_tokens=4096 if think_deeply else 2048,
    )
