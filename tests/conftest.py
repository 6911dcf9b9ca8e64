"""Shared test doubles."""

from collections.abc import Sequence
from typing import Any

import pytest

from notemind.domain.entities import ChatMessage
from notemind.domain.exceptions import AIError
from notemind.domain.services import ResponseHandler


class RecordingHandler:
    """ResponseHandler that records every callback in order."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def on_stream(self, delta: str) -> None:
        self.events.append(("stream", delta))

    def on_complete(self) -> None:
        self.events.append(("complete",))

    def on_error(self, error: AIError) -> None:
        self.events.append(("error", error))

    @property
    def deltas(self) -> list[str]:
        return [event[1] for event in self.events if event[0] == "stream"]

    @property
    def errors(self) -> list[AIError]:
        return [event[1] for event in self.events if event[0] == "error"]

    @property
    def complete_count(self) -> int:
        return sum(1 for event in self.events if event[0] == "complete")


class FakeChatService:
    """ChatService that records requests; tests drive the handlers."""

    def __init__(self) -> None:
        self.requests: list[tuple[list[ChatMessage], ResponseHandler]] = []
        self.cancel_count = 0

    def send_messages(
        self, messages: Sequence[ChatMessage], handler: ResponseHandler
    ) -> None:
        self.requests.append((list(messages), handler))

    def cancel_current_request(self) -> None:
        self.cancel_count += 1

    @property
    def last_messages(self) -> list[ChatMessage]:
        return self.requests[-1][0]

    @property
    def last_handler(self) -> ResponseHandler:
        return self.requests[-1][1]


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def fake_chat_service() -> FakeChatService:
    return FakeChatService()


@pytest.fixture
def handler_factory() -> type[RecordingHandler]:
    """Build additional recording handlers inside a test."""
    return RecordingHandler
