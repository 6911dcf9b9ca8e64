"""Domain services."""

from notemind.domain.services.callback_handler import CallbackResponseHandler
from notemind.domain.services.protocols import ChatService, ResponseHandler

__all__ = ["CallbackResponseHandler", "ChatService", "ResponseHandler"]
