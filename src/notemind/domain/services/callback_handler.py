"""ResponseHandler built from plain callables."""

from collections.abc import Callable

from notemind.domain.exceptions import AIError


class CallbackResponseHandler:
    """Forwards response callbacks to the given functions."""

    def __init__(
        self,
        on_stream: Callable[[str], None],
        on_complete: Callable[[], None] | None = None,
        on_error: Callable[[AIError], None] | None = None,
    ) -> None:
        self._on_stream = on_stream
        self._on_complete = on_complete
        self._on_error = on_error

    def on_stream(self, delta: str) -> None:
        self._on_stream(delta)

    def on_complete(self) -> None:
        if self._on_complete is not None:
            self._on_complete()

    def on_error(self, error: AIError) -> None:
        if self._on_error is not None:
            self._on_error(error)
