"""
Exception types and handlers for the chat API.

Errors that reach the client are rendered as plain text, matching what the
frontend reads from failed responses.
"""
import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

MISSING_TEXT_MESSAGE = "Missing 'text' in request body"
GENERIC_ERROR_MESSAGE = "Server error"


class ChatError(Exception):
    """Base exception for errors reported to the caller."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidRequest(ChatError):
    """Raised when the request body has no usable 'text'."""

    def __init__(self, message: str = MISSING_TEXT_MESSAGE):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UpstreamFailure(ChatError):
    """Raised when the language model call fails."""

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message or GENERIC_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


class KnowledgeLookupError(Exception):
    """Raised by the knowledge lookup; never reported to the caller."""


def error_message(exc: BaseException) -> str:
    """Best message for an exception: its own text, else the generic one."""
    detail = getattr(exc, "error", None)
    if isinstance(detail, str) and detail.strip():
        return detail
    text = str(exc)
    return text if text.strip() else GENERIC_ERROR_MESSAGE


async def chat_error_handler(request: Request, exc: ChatError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def generic_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return PlainTextResponse(error_message(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
