"""Tests for domain exceptions."""

import pytest

from notemind.domain.exceptions import (
    AIError,
    ChatSessionBusyError,
    ConfigurationError,
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
)


class TestAIErrors:
    """AIError hierarchy tests."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidURLError("::"),
            NetworkError(OSError("refused")),
            InvalidResponseError(),
            DecodingError(ValueError("bad")),
            ConfigurationError(),
        ],
    )
    def test_all_variants_are_ai_errors(self, error: AIError) -> None:
        assert isinstance(error, AIError)

    def test_network_error_keeps_cause(self) -> None:
        cause = OSError("refused")

        error = NetworkError(cause)

        assert error.cause is cause
        assert "refused" in str(error)

    def test_invalid_url_keeps_url(self) -> None:
        assert InvalidURLError("not a url").url == "not a url"

    def test_busy_error_is_not_an_ai_error(self) -> None:
        assert not isinstance(ChatSessionBusyError(), AIError)
