"""
Exceptions raised by the MultiVersus client.

Every failure surfaces as a subclass of MultiVersusAPIError so callers can
catch one type and still tell the kinds apart.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .auth import TokenState


class MultiVersusAPIError(Exception):
    """Base exception for MultiVersus API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(MultiVersusAPIError):
    """Raised when a ticket cannot be exchanged for an access token."""

    pass


class NotReadyError(MultiVersusAPIError):
    """Raised when a request is attempted without a valid access token."""

    def __init__(self, state: "TokenState", message: str = "Client is not ready."):
        self.state = state
        super().__init__(message)


class UnauthorizedError(MultiVersusAPIError):
    """Raised when the backend rejects the access token (HTTP 401)."""

    pass


class ApplicationError(MultiVersusAPIError):
    """Raised when the response body carries a `msg` field."""

    pass


class MalformedResponseError(MultiVersusAPIError):
    """Raised when the response body is not valid JSON."""

    def __init__(
        self,
        message: str,
        raw_text: str = "",
        status_code: int | None = None,
    ):
        self.raw_text = raw_text
        super().__init__(message, status_code=status_code)


class ValidationError(MultiVersusAPIError):
    """Raised when an argument is invalid. No request is sent."""

    pass


class NetworkError(MultiVersusAPIError):
    """Raised on transport failures (connection errors, timeouts)."""

    pass
