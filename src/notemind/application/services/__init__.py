"""Application services."""

from notemind.application.services.chat_session import (
    ChatSessionController,
    SessionState,
)
from notemind.application.services.pending_messages import (
    PendingMessageChannel,
    PendingMessageRelay,
)
from notemind.application.services.reflection import ReflectionController

__all__ = [
    "ChatSessionController",
    "PendingMessageChannel",
    "PendingMessageRelay",
    "ReflectionController",
    "SessionState",
]
