"""Tests for prompt formatting and system prompt selection."""

from dictation_assistant.models.prompts import (
    CustomPrompts,
    DEFAULT_AGENT_PROMPT,
    DEFAULT_REGULAR_PROMPT,
    addresses_agent,
    create_prompt_formatter,
    format_prompt,
    render_agent_prompt,
    select_system_prompt
)


class TestFormatPrompt:
    """Template substitution."""

    def test_basic_substitution(self):
        assert format_prompt("SYS:{system} USR:{user}", "hello", "be terse") == "SYS:be terse USR:hello"

    def test_only_first_occurrence_is_replaced(self):
        result = format_prompt("{system}|{user}|{user}", "hi", "sys")
        assert result == "sys|hi|{user}"

    def test_missing_marker_leaves_template_literal(self):
        assert format_prompt("only {user}", "hi", "sys") == "only hi"
        assert format_prompt("only {system}", "hi", "sys") == "only sys"

    def test_system_substituted_before_user(self):
        # A system prompt containing {user} receives the user text
        assert format_prompt("{system} / {user}", "text", "see {user}") == "see text / {user}"

    def test_formatter_binds_template(self):
        formatter = create_prompt_formatter("[INST] {system}\n\n{user} [/INST]")
        assert formatter("fix this", "You edit text.") == "[INST] You edit text.\n\nfix this [/INST]"

    def test_packaged_llama_template(self, default_registry):
        provider = default_registry.get_provider("llama")
        prompt = provider.format_prompt("hello world", "clean up")
        assert "clean up" in prompt
        assert "hello world" in prompt
        assert prompt.index("clean up") < prompt.index("hello world")


class TestSystemPrompts:
    """Choosing between the agent and regular prompts."""

    def test_render_agent_prompt_replaces_every_marker(self):
        rendered = render_agent_prompt(DEFAULT_AGENT_PROMPT, "Jarvis")
        assert "{{agentName}}" not in rendered
        assert rendered.count("Jarvis") == 2

    def test_addresses_agent(self):
        assert addresses_agent("Hey Jarvis, make this a list", "Jarvis")
        assert addresses_agent("hey, jarvis summarize", "Jarvis")
        assert addresses_agent("Jarvis was here", "Jarvis")
        assert not addresses_agent("make this a list", "Jarvis")
        assert not addresses_agent("hey there", "  ")

    def test_name_without_greeting_is_enough(self):
        text = "Assistant, make this more professional: test message"
        assert addresses_agent(text, "Assistant")
        assert select_system_prompt(text, "assistant").startswith("You are assistant")

    def test_regular_prompt_by_default(self):
        assert select_system_prompt("um so the meeting is at noon", "Assistant") == DEFAULT_REGULAR_PROMPT

    def test_agent_prompt_when_addressed(self):
        prompt = select_system_prompt("Hey Assistant, shorten this", "Assistant")
        assert prompt.startswith("You are Assistant")

    def test_custom_prompts(self):
        prompts = CustomPrompts(agent="Agent {{agentName}}", regular="Regular")
        assert select_system_prompt("plain text", "Max", prompts) == "Regular"
        assert select_system_prompt("hey Max do it", "Max", prompts) == "Agent Max"
