"""
Prompt formatting for local models and the system prompts used for text enhancement.

Local providers wrap the (system, user) pair in a model-specific chat
template. Cloud vendors take the two parts separately, so they only need the
system prompt selection below.
"""

from typing import Callable, Optional
from dataclasses import dataclass

SYSTEM_MARKER = "{system}"
USER_MARKER = "{user}"
AGENT_NAME_MARKER = "{{agentName}}"

PromptFormatter = Callable[[str, str], str]


def format_prompt(template: str, text: str, system_prompt: str) -> str:
    """
    Render a local model prompt from its template.

    Only the first occurrence of each marker is substituted, system first,
    then user. A template missing a marker leaves the other one in place.

    Args:
        template: Provider prompt template containing {system} and {user}
        text: User text to enhance
        system_prompt: Instructions for the model

    Returns:
        The rendered prompt.
    """
    return template.replace(SYSTEM_MARKER, system_prompt, 1).replace(USER_MARKER, text, 1)


def create_prompt_formatter(template: str) -> PromptFormatter:
    """Bind a template into a (text, system_prompt) formatter."""
    def formatter(text: str, system_prompt: str) -> str:
        return format_prompt(template, text, system_prompt)
    return formatter


DEFAULT_REGULAR_PROMPT = """You are a professional editor helping to clean up transcribed speech. The text you receive is from speech-to-text software and may contain:

- Filler words (um, uh, like, you know)
- False starts and repetitions
- Run-on sentences
- Missing punctuation

Your task is to improve the text while preserving the original meaning and intent:

- Remove filler words and false starts
- Fix grammar, punctuation and capitalization
- Keep the core message, tone and style intact
- Preserve technical terms and proper nouns
- Do not add new information or change the meaning

Return only the cleaned text without any additional commentary or formatting."""

DEFAULT_AGENT_PROMPT = """You are {{agentName}}, a dictation assistant. The user addressed you by name, so the text contains an instruction for you followed by the content it applies to.

- Carry out the instruction (rewrite, summarize, change tone, format as a list, and so on)
- Apply it only to the dictated content, not to the instruction itself
- Never mention {{agentName}} or the instruction in your answer

Return only the resulting text without any additional commentary."""


@dataclass(frozen=True)
class CustomPrompts:
    """User overrides for the two system prompts."""
    agent: str = DEFAULT_AGENT_PROMPT
    regular: str = DEFAULT_REGULAR_PROMPT


DEFAULT_PROMPTS = CustomPrompts()


def render_agent_prompt(prompt: str, agent_name: str) -> str:
    """Replace every agent name marker in an agent prompt."""
    return prompt.replace(AGENT_NAME_MARKER, agent_name)


def addresses_agent(text: str, agent_name: str) -> bool:
    """Check whether dictated text mentions the agent by name, ignoring case."""
    name = agent_name.strip()
    if not name:
        return False
    return name.lower() in text.lower()


def select_system_prompt(
    text: str,
    agent_name: str,
    prompts: Optional[CustomPrompts] = None
) -> str:
    """
    Pick the system prompt for a piece of dictated text.

    Args:
        text: Dictated text
        agent_name: Name the user calls the assistant by
        prompts: Custom prompts, or None for the defaults

    Returns:
        The rendered agent prompt when the text addresses the agent,
        otherwise the regular cleanup prompt.
    """
    prompts = prompts or DEFAULT_PROMPTS
    if addresses_agent(text, agent_name):
        return render_agent_prompt(prompts.agent, agent_name)
    return prompts.regular
