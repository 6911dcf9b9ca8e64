"""Chat message entity."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Speaker of a chat turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single chat turn sent to the inference endpoint.

    Attributes:
        role: Speaker of the turn.
        content: Turn text.
    """

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role=Role.ASSISTANT, content=content)

    def to_dict(self) -> dict[str, str]:
        """Return the OpenAI-format wire representation."""
        return {"role": self.role.value, "content": self.content}
