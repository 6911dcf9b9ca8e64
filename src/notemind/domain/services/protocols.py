"""Domain service protocols."""

import asyncio
from collections.abc import Sequence
from typing import Protocol

from notemind.domain.entities import ChatMessage
from notemind.domain.exceptions import AIError


class ResponseHandler(Protocol):
    """Receiver of one streamed AI response.

    The client calls on_stream zero or more times, then exactly one of
    on_complete or on_error. Callbacks run on the event loop that issued
    the request.
    """

    def on_stream(self, delta: str) -> None:
        """Handle a non-empty fragment of generated text.

        Args:
            delta: Text fragment, in arrival order.
        """
        ...

    def on_complete(self) -> None:
        """Handle successful end of the response."""
        ...

    def on_error(self, error: AIError) -> None:
        """Handle request failure.

        Args:
            error: The failure.
        """
        ...


class ChatService(Protocol):
    """Streaming chat-completion abstraction."""

    def send_messages(
        self,
        messages: Sequence[ChatMessage],
        handler: ResponseHandler,
    ) -> asyncio.Task[None]:
        """Start a streaming request.

        Any request still in flight is cancelled first.

        Args:
            messages: Conversation window to send.
            handler: Receiver of the response callbacks.

        Returns:
            Task running the request.
        """
        ...

    def cancel_current_request(self) -> None:
        """Cancel the in-flight request without invoking any callback."""
        ...
