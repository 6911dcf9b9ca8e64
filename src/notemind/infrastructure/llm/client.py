"""Streaming chat-completion client for a local Ollama server."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from notemind.config import LLMConfig
from notemind.domain.entities import ChatMessage
from notemind.domain.exceptions import (
    ConfigurationError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
)
from notemind.domain.services.protocols import ResponseHandler
from notemind.infrastructure.llm.sse import (
    DONE_MARKER,
    SSELineDecoder,
    extract_delta,
    read_data,
)

logger = logging.getLogger(__name__)


class OllamaChatClient:
    """Streams chat completions from an OpenAI-compatible local endpoint.

    One request is tracked per instance. Starting a new request cancels the
    one in flight, so at most one response feeds a consumer at a time.
    """

    def __init__(
        self,
        config: LLMConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint, model and timeout settings.
            transport: Optional httpx transport (used by tests).
            debug_llm_messages: Log the outbound messages at DEBUG level.
        """
        self._config = config
        self._transport = transport
        self._debug_llm_messages = debug_llm_messages
        self._current_task: asyncio.Task[None] | None = None

    @property
    def has_active_request(self) -> bool:
        return self._current_task is not None and not self._current_task.done()

    def send_messages(
        self,
        messages: Sequence[ChatMessage],
        handler: ResponseHandler,
    ) -> asyncio.Task[None]:
        """Start a streaming request on the running event loop.

        Args:
            messages: Conversation window to send.
            handler: Receiver of the response callbacks.

        Returns:
            Task running the request.
        """
        self.cancel_current_request()
        task = asyncio.create_task(self.stream_messages(messages, handler))
        self._current_task = task
        task.add_done_callback(self._forget_task)
        return task

    def cancel_current_request(self) -> None:
        """Cancel the in-flight request, if any.

        No handler callback is invoked for a cancelled request.
        """
        task = self._current_task
        self._current_task = None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Cancelled in-flight LLM request")

    def _forget_task(self, task: asyncio.Task[None]) -> None:
        if self._current_task is task:
            self._current_task = None
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "LLM request failed unexpectedly: %r",
                task.exception(),
                exc_info=task.exception(),
            )

    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [message.to_dict() for message in messages],
            "stream": True,
        }

    def _endpoint_url(self) -> httpx.URL | None:
        try:
            url = httpx.URL(self._config.base_url)
        except (httpx.InvalidURL, TypeError):
            return None
        if url.scheme not in ("http", "https") or not url.host:
            return None
        return url

    async def stream_messages(
        self,
        messages: Sequence[ChatMessage],
        handler: ResponseHandler,
    ) -> None:
        """Send the messages and feed the streamed response to the handler.

        Errors are reported through handler.on_error and never raised.

        Args:
            messages: Conversation window to send.
            handler: Receiver of the response callbacks.
        """
        if not self._config.model or not self._config.model.strip():
            handler.on_error(ConfigurationError("LLM model is not configured"))
            return

        url = self._endpoint_url()
        if url is None:
            logger.error("Invalid LLM endpoint: %s", self._config.base_url)
            handler.on_error(InvalidURLError(self._config.base_url))
            return

        payload = self.build_payload(messages)
        logger.debug(
            "LLM request: model=%s, messages=%d", payload["model"], len(messages)
        )
        if self._debug_llm_messages:
            logger.debug("LLM messages: %s", payload["messages"])

        decoder = SSELineDecoder()
        received_body = False
        delta_count = 0

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=httpx.Timeout(self._config.timeout_seconds),
            ) as client:
                async with client.stream(
                    "POST",
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                ) as response:
                    response.raise_for_status()
                    finished = False
                    async for chunk in response.aiter_bytes():
                        if not chunk:
                            continue
                        received_body = True
                        for line in decoder.feed(chunk):
                            finished, sent = self._handle_line(line, handler)
                            delta_count += sent
                            if finished:
                                break
                        if finished:
                            break
                    if not finished:
                        for line in decoder.flush():
                            _, sent = self._handle_line(line, handler)
                            delta_count += sent
        except httpx.HTTPError as e:
            logger.error("LLM network error: %s", e)
            handler.on_error(NetworkError(e))
            return
        except UnicodeDecodeError as e:
            logger.error("LLM response is not valid UTF-8: %s", e)
            handler.on_error(InvalidResponseError("Response body is not valid UTF-8"))
            return

        if not received_body:
            logger.warning("LLM response body was empty")
            handler.on_error(InvalidResponseError("Response body was empty"))
            return

        logger.debug("LLM response complete: deltas=%d", delta_count)
        handler.on_complete()

    def _handle_line(self, line: str, handler: ResponseHandler) -> tuple[bool, int]:
        """Dispatch one stream line.

        Returns:
            (stream finished, number of deltas delivered)
        """
        data = read_data(line)
        if data is None:
            return False, 0
        if data == DONE_MARKER:
            return True, 0
        delta = extract_delta(data)
        if delta is None:
            return False, 0
        handler.on_stream(delta)
        return False, 1
