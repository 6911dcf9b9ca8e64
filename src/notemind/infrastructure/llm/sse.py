"""Server-sent-event line decoding for streamed chat completions."""

import codecs
import json
import logging

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_MARKER = "[DONE]"


class SSELineDecoder:
    """Incremental UTF-8 decoder that splits a byte stream into lines.

    A multi-byte character or a line may be split across chunks; partial
    data is buffered until the rest arrives.

    Raises:
        UnicodeDecodeError: The stream is not valid UTF-8.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        """Decode a chunk and return the lines it completes.

        Args:
            chunk: Raw bytes from the response body.

        Returns:
            Complete lines without their line terminators.
        """
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return the trailing line that had no terminator, if any."""
        self._buffer += self._decoder.decode(b"", final=True)
        tail, self._buffer = self._buffer, ""
        tail = tail.rstrip("\r")
        return [tail] if tail else []


def read_data(line: str) -> str | None:
    """Return the payload of a `data: ` line, or None for any other line."""
    if not line.startswith(DATA_PREFIX):
        return None
    return line[len(DATA_PREFIX) :].strip()


def extract_delta(data: str) -> str | None:
    """Extract `choices[0].delta.content` from a chunk payload.

    Malformed payloads are skipped: one corrupt chunk must not abort an
    otherwise good stream.

    Args:
        data: JSON payload of a `data: ` line.

    Returns:
        The non-empty content fragment, or None.
    """
    try:
        payload = json.loads(data)
    except (ValueError, RecursionError):
        # Huge integers raise ValueError, deep nesting RecursionError
        logger.debug("Skipping malformed stream line: %.200r", data)
        return None

    try:
        content = payload["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None

    if isinstance(content, str) and content:
        return content
    return None
