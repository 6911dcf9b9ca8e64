"""Local LLM integration."""

from notemind.infrastructure.llm.client import OllamaChatClient
from notemind.infrastructure.llm.prompts import (
    render_chat_system_prompt,
    render_reflection_system_prompt,
)
from notemind.infrastructure.llm.sse import SSELineDecoder, extract_delta, read_data

__all__ = [
    "OllamaChatClient",
    "SSELineDecoder",
    "extract_delta",
    "read_data",
    "render_chat_system_prompt",
    "render_reflection_system_prompt",
]
