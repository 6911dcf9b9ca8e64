"""Chat session controller."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from notemind.domain.entities import ChatMessage, TranscriptEntry
from notemind.domain.exceptions import AIError, ChatSessionBusyError
from notemind.domain.repositories import TranscriptRepository
from notemind.domain.services import ChatService

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Chat session state."""

    IDLE = "idle"
    SENDING = "sending"


class _ChatResponseHandler:
    """Routes callbacks of one request back to the controller.

    Callbacks of a superseded or cancelled request are dropped.
    """

    def __init__(self, controller: "ChatSessionController", generation: int) -> None:
        self._controller = controller
        self._generation = generation

    def on_stream(self, delta: str) -> None:
        if self._controller.is_current(self._generation):
            self._controller.apply_delta(delta)
        else:
            logger.debug("Dropping stale chat delta (generation=%d)", self._generation)

    def on_complete(self) -> None:
        if self._controller.is_current(self._generation):
            self._controller.complete()

    def on_error(self, error: AIError) -> None:
        if self._controller.is_current(self._generation):
            self._controller.fail(error)


class ChatSessionController:
    """Owns the chat transcript and feeds it from streamed responses.

    State machine: IDLE -> SENDING -> IDLE. A failed request returns to
    IDLE with last_error set. Only finished assistant turns are persisted.
    """

    def __init__(
        self,
        chat_service: ChatService,
        system_prompt: str,
        context_window_size: int = 10,
        transcript_repository: TranscriptRepository | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            chat_service: Streaming client.
            system_prompt: Prompt placed first in every request.
            context_window_size: Number of transcript entries sent per request.
            transcript_repository: Optional transcript store.
            on_change: Called after every transcript or state change.
        """
        if context_window_size <= 0:
            raise ValueError("context_window_size must be positive")
        self._chat_service = chat_service
        self._system_prompt = system_prompt
        self._context_window_size = context_window_size
        self._repository = transcript_repository
        self._on_change = on_change

        self._transcript: list[TranscriptEntry] = []
        self._state = SessionState.IDLE
        self._generation = 0
        self._last_error: AIError | None = None
        self._idle = asyncio.Event()
        self._idle.set()
        self._save_tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_sending(self) -> bool:
        return self._state is SessionState.SENDING

    @property
    def transcript(self) -> list[TranscriptEntry]:
        """Snapshot of the transcript in conversation order."""
        return list(self._transcript)

    @property
    def last_error(self) -> AIError | None:
        return self._last_error

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def load_history(self) -> None:
        """Replace the in-memory transcript with the stored one."""
        if self._repository is None:
            return
        self._transcript = await self._repository.find_all()
        logger.info("Loaded %d transcript entries", len(self._transcript))
        self._notify()

    async def clear_history(self) -> None:
        """Cancel any request and delete the transcript."""
        self.cancel()
        self._transcript.clear()
        if self._repository is not None:
            await self._repository.clear()
        self._notify()

    def build_conversation_window(self) -> list[ChatMessage]:
        """Return the system prompt followed by the latest transcript entries."""
        recent = self._transcript[-self._context_window_size :]
        return [ChatMessage.system(self._system_prompt)] + [
            entry.to_message() for entry in recent
        ]

    async def send(self, text: str) -> bool:
        """Append a user turn and request the assistant's reply.

        Args:
            text: User message.

        Returns:
            False if the text is blank and nothing was sent.

        Raises:
            ChatSessionBusyError: A response is still being received.
        """
        if not text.strip():
            return False
        if self.is_sending:
            raise ChatSessionBusyError()

        entry = TranscriptEntry.from_user(text)
        self._transcript.append(entry)
        self._last_error = None
        self._set_state(SessionState.SENDING)
        generation = self._generation

        if self._repository is not None:
            try:
                await self._repository.save(entry)
            except Exception:
                if self._generation == generation:
                    self._set_state(SessionState.IDLE)
                raise
            # cancel() bumps the generation; a later send may own SENDING now
            if self._generation != generation:
                logger.info("Chat request cancelled before it was sent")
                return True

        self._generation += 1
        handler = _ChatResponseHandler(self, self._generation)
        window = self.build_conversation_window()
        logger.info(
            "Sending chat message (generation=%d, window=%d)",
            self._generation,
            len(window),
        )
        self._chat_service.send_messages(window, handler)
        return True

    def cancel(self) -> None:
        """Abort the current request; its late callbacks are ignored."""
        if not self.is_sending:
            return
        self._chat_service.cancel_current_request()
        self._generation += 1
        self._set_state(SessionState.IDLE)
        logger.info("Chat request cancelled")

    async def wait_until_idle(self) -> None:
        await self._idle.wait()

    async def flush(self) -> None:
        """Wait for pending transcript saves."""
        if self._save_tasks:
            await asyncio.gather(*self._save_tasks, return_exceptions=True)

    def apply_delta(self, delta: str) -> None:
        """Merge a delta of the current response into the transcript."""
        if self._transcript and not self._transcript[-1].is_from_user:
            self._transcript[-1].append(delta)
        else:
            self._transcript.append(TranscriptEntry.from_assistant(delta))
        self._notify()

    def complete(self) -> None:
        """Finish the current response and persist the assistant entry."""
        self._set_state(SessionState.IDLE)
        last = self._transcript[-1] if self._transcript else None
        if last is not None and not last.is_from_user:
            self._schedule_save(last)
        logger.info("Chat response complete")

    def fail(self, error: AIError) -> None:
        """Record the current request's error and return to IDLE."""
        self._last_error = error
        self._set_state(SessionState.IDLE)
        logger.error("Chat request failed: %s", error)

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        if state is SessionState.IDLE:
            self._idle.set()
        else:
            self._idle.clear()
        self._notify()

    def _schedule_save(self, entry: TranscriptEntry) -> None:
        if self._repository is None:
            return
        task = asyncio.get_running_loop().create_task(self._repository.save(entry))
        self._save_tasks.add(task)
        task.add_done_callback(self._save_done)

    def _save_done(self, task: asyncio.Task[None]) -> None:
        self._save_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Failed to save transcript entry: %s", task.exception())

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
