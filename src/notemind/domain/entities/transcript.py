"""Chat transcript entry entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from notemind.domain.entities.message import ChatMessage, Role


@dataclass
class TranscriptEntry:
    """A turn shown in the chat transcript.

    Unlike ChatMessage, the content of an assistant entry grows while a
    response is streamed in.

    Attributes:
        content: Turn text.
        is_from_user: True for user turns, False for assistant turns.
        id: Entry ID.
        timestamp: When the entry was created.
    """

    content: str
    is_from_user: bool
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_user(cls, content: str) -> "TranscriptEntry":
        return cls(content=content, is_from_user=True)

    @classmethod
    def from_assistant(cls, content: str) -> "TranscriptEntry":
        return cls(content=content, is_from_user=False)

    def append(self, delta: str) -> None:
        """Append a streamed fragment to the content."""
        self.content += delta

    def to_message(self) -> ChatMessage:
        """Map the entry to a chat message with the matching role."""
        role = Role.USER if self.is_from_user else Role.ASSISTANT
        return ChatMessage(role=role, content=self.content)
