"""Domain exceptions."""


class AIError(Exception):
    """Base exception for AI request failures.

    Instances are delivered to ResponseHandler.on_error rather than raised
    across the handler boundary.
    """


class InvalidURLError(AIError):
    """The inference endpoint URL is malformed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid inference endpoint URL: {url!r}")


class NetworkError(AIError):
    """Transport-level failure (connection, HTTP status, read error)."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class InvalidResponseError(AIError):
    """The response body was empty or could not be decoded as text."""

    def __init__(self, message: str = "Invalid response from inference server") -> None:
        super().__init__(message)


class DecodingError(AIError):
    """A structured payload failed to decode."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Decoding error: {cause}")


class ConfigurationError(AIError):
    """Required client setup is missing."""

    def __init__(self, message: str = "Inference client is not configured") -> None:
        super().__init__(message)


class ChatSessionBusyError(Exception):
    """A message was sent while the chat session is awaiting a response."""

    def __init__(self) -> None:
        super().__init__("Chat session is already waiting for a response")
