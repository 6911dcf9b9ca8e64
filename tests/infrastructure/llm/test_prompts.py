"""Tests for prompt templates."""

from notemind.infrastructure.llm import (
    render_chat_system_prompt,
    render_reflection_system_prompt,
)


class TestPrompts:
    """Prompt rendering tests."""

    def test_chat_prompt_mentions_reply_language(self) -> None:
        prompt = render_chat_system_prompt("Chinese")

        assert "Reply in Chinese" in prompt
        assert prompt.startswith("You are an intelligent assistant")

    def test_chat_prompt_defaults_to_english(self) -> None:
        assert "Reply in English" in render_chat_system_prompt()

    def test_reflection_prompt(self) -> None:
        prompt = render_reflection_system_prompt()

        assert "reflect" in prompt
        assert "Reply in" not in prompt

    def test_reflection_prompt_with_language(self) -> None:
        assert "Reply in French." in render_reflection_system_prompt("French")
