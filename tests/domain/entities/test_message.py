"""Tests for chat message entities."""

import pytest

from notemind.domain.entities import ChatMessage, Role


class TestChatMessage:
    """ChatMessage entity tests."""

    def test_factories_set_role(self) -> None:
        """Test the role-specific constructors."""
        assert ChatMessage.system("s").role is Role.SYSTEM
        assert ChatMessage.user("u").role is Role.USER
        assert ChatMessage.assistant("a").role is Role.ASSISTANT

    def test_to_dict(self) -> None:
        """Test the wire representation."""
        message = ChatMessage.user("Hello")

        assert message.to_dict() == {"role": "user", "content": "Hello"}

    def test_message_is_frozen(self) -> None:
        """Test that message is immutable."""
        message = ChatMessage.user("Hello")

        with pytest.raises(AttributeError):
            message.content = "Changed"  # type: ignore[misc]

    def test_role_values(self) -> None:
        assert [role.value for role in Role] == ["system", "user", "assistant"]
