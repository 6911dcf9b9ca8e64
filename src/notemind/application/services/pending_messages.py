"""Deferred delivery of messages into the chat session.

Other surfaces (for example a "discuss this note" action) post a message
to a PendingMessageChannel owned by the application. A PendingMessageRelay
drains the channel into the chat session once the session can accept it.
"""

import asyncio
import logging

from notemind.application.services.chat_session import ChatSessionController
from notemind.domain.exceptions import ChatSessionBusyError

logger = logging.getLogger(__name__)


class PendingMessageChannel:
    """FIFO of messages waiting to be sent to the chat session."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[str] = asyncio.Queue()

    def post(self, message: str) -> None:
        """Queue a message for the chat session.

        Args:
            message: Message text.
        """
        self._queue.put_nowait(message)
        logger.debug("Pending message queued (pending=%d)", self._queue.qsize())

    async def get(self) -> str:
        """Wait for and return the oldest pending message."""
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    def clear(self) -> None:
        """Drop all pending messages."""
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        logger.info("Pending message channel cleared")


class PendingMessageRelay:
    """Sends pending messages through the chat session, one at a time.

    Each message waits until the session is idle, then for a short delay
    so the chat surface can become visible, before it is sent.
    """

    def __init__(
        self,
        channel: PendingMessageChannel,
        controller: ChatSessionController,
        delay_seconds: float = 0.5,
        poll_interval: float = 1.0,
    ) -> None:
        """Initialize the relay.

        Args:
            channel: Channel to drain.
            controller: Chat session receiving the messages.
            delay_seconds: Delay between the session becoming idle and sending.
            poll_interval: How often the stop signal is checked while idle.
        """
        self._channel = channel
        self._controller = controller
        self._delay_seconds = delay_seconds
        self._poll_interval = poll_interval
        self._stop_event = asyncio.Event()
        self._stop_event.set()  # Initially stopped

    @property
    def is_running(self) -> bool:
        return not self._stop_event.is_set()

    async def start(self) -> None:
        """Relay messages until stop() is called."""
        if not self._stop_event.is_set():
            logger.warning("PendingMessageRelay already running")
            return

        self._stop_event.clear()
        logger.info("PendingMessageRelay started")

        while not self._stop_event.is_set():
            try:
                message = await asyncio.wait_for(
                    self._channel.get(), timeout=self._poll_interval
                )
            except asyncio.TimeoutError:
                continue

            try:
                await self._deliver(message)
            except Exception as e:
                logger.error("Failed to relay pending message: %s", e)
            finally:
                self._channel.task_done()

        logger.info("PendingMessageRelay stopped")

    async def stop(self) -> None:
        """Signal the relay to stop after the current message."""
        self._stop_event.set()

    async def _deliver(self, message: str) -> None:
        while True:
            await self._controller.wait_until_idle()
            await asyncio.sleep(self._delay_seconds)
            try:
                sent = await self._controller.send(message)
            except ChatSessionBusyError:
                # Another send won the race during the delay
                continue
            if not sent:
                logger.debug("Skipped blank pending message")
            return
