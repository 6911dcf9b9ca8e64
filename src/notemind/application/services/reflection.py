"""Reflection controller.

Asks the model to reflect on a selected span of a note and splices the
streamed reflection into the note right after the selection.
"""

import logging
from collections.abc import Callable

from notemind.domain.entities import ChatMessage, ReflectionAccumulator, TextRange
from notemind.domain.exceptions import AIError
from notemind.domain.services import ChatService

logger = logging.getLogger(__name__)

DEFAULT_OPENING_MARKER = "\n[REFLECTION:"
DEFAULT_CLOSING_MARKER = "]\n"


class _ReflectionResponseHandler:
    def __init__(self, controller: "ReflectionController", generation: int) -> None:
        self._controller = controller
        self._generation = generation

    def on_stream(self, delta: str) -> None:
        if self._controller.is_current(self._generation):
            self._controller.apply_delta(delta)

    def on_complete(self) -> None:
        if self._controller.is_current(self._generation):
            self._controller.complete()

    def on_error(self, error: AIError) -> None:
        if self._controller.is_current(self._generation):
            self._controller.fail(error)


class ReflectionController:
    """Generates a reflection for the selected text of a document.

    Every update is spliced into the document as it was when the reflection
    started, replacing the previous partial insertion. The updated document
    is published through on_content_update.
    """

    def __init__(
        self,
        chat_service: ChatService,
        system_prompt: str,
        on_content_update: Callable[[str], None] | None = None,
        opening_marker: str = DEFAULT_OPENING_MARKER,
        closing_marker: str = DEFAULT_CLOSING_MARKER,
    ) -> None:
        """Initialize the controller.

        Args:
            chat_service: Streaming client.
            system_prompt: Prompt instructing reflective-question generation.
            on_content_update: Receives every updated document.
            opening_marker: Text inserted before the reflection.
            closing_marker: Text appended after a completed reflection.
        """
        self._chat_service = chat_service
        self._system_prompt = system_prompt
        self.on_content_update = on_content_update
        self._opening_marker = opening_marker
        self._closing_marker = closing_marker

        self._selected_text = ""
        self._selection: TextRange | None = None
        self._accumulator: ReflectionAccumulator | None = None
        self._generation = 0
        self._last_error: AIError | None = None

    @property
    def selected_text(self) -> str:
        return self._selected_text

    @property
    def selection(self) -> TextRange | None:
        return self._selection

    @property
    def has_selection(self) -> bool:
        return bool(self._selected_text) and self._selection is not None

    @property
    def is_generating(self) -> bool:
        return self._accumulator is not None

    @property
    def accumulated_text(self) -> str | None:
        return self._accumulator.text if self._accumulator is not None else None

    @property
    def last_error(self) -> AIError | None:
        return self._last_error

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def update_selection(self, selected_text: str, text_range: TextRange) -> None:
        """Remember the user's current selection."""
        self._selected_text = selected_text
        self._selection = text_range

    def clear_selection(self) -> None:
        self._selected_text = ""
        self._selection = None

    def build_conversation_window(self, selected_text: str) -> list[ChatMessage]:
        return [
            ChatMessage.system(self._system_prompt),
            ChatMessage.user(selected_text),
        ]

    def generate_reflection(
        self,
        base_document: str,
        selected_text: str | None = None,
        text_range: TextRange | None = None,
    ) -> bool:
        """Start generating a reflection.

        Args:
            base_document: Full document text at invocation time.
            selected_text: Text to reflect on. Defaults to the remembered
                selection.
            text_range: Range of the selection in base_document. Defaults
                to the remembered selection.

        Returns:
            False if there is no usable selection and nothing was started.
        """
        if selected_text is not None:
            self._selected_text = selected_text
        if text_range is not None:
            self._selection = text_range

        if not self._selected_text or self._selection is None:
            logger.debug("No selection; reflection not started")
            return False
        if not self._selection.fits(base_document):
            logger.warning(
                "Selection %s does not fit document of length %d",
                self._selection,
                len(base_document),
            )
            return False

        if self.is_generating:
            self._chat_service.cancel_current_request()

        self._generation += 1
        self._last_error = None
        self._accumulator = ReflectionAccumulator(
            base_document=base_document,
            selection=self._selection,
            text=self._opening_marker,
        )
        logger.info(
            "Generating reflection (generation=%d, insert_at=%d)",
            self._generation,
            self._selection.end,
        )
        self._chat_service.send_messages(
            self.build_conversation_window(self._selected_text),
            _ReflectionResponseHandler(self, self._generation),
        )
        return True

    def cancel(self) -> None:
        """Abort the reflection; nothing more is published."""
        self._chat_service.cancel_current_request()
        self._generation += 1
        self._reset()
        logger.info("Reflection cancelled")

    def apply_delta(self, delta: str) -> None:
        """Splice the current reflection with a new delta and publish it."""
        if self._accumulator is None:
            return
        self._accumulator.append(delta)
        self._publish(self._accumulator.splice())

    def complete(self) -> None:
        if self._accumulator is None:
            return
        self._accumulator.append(self._closing_marker)
        final_document = self._accumulator.splice()
        self._reset()
        self._publish(final_document)
        logger.info("Reflection complete")

    def fail(self, error: AIError) -> None:
        self._last_error = error
        self._reset()
        logger.error("Reflection failed: %s", error)

    def _reset(self) -> None:
        self._accumulator = None
        self.clear_selection()

    def _publish(self, document: str) -> None:
        if self.on_content_update is not None:
            self.on_content_update(document)
