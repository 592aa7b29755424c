"""
MultiVersus API Integration Module.

Provides the client for the Hydra backend behind MultiVersus.
"""

from .auth import TokenManager, TokenState
from .client import MultiVersusClient
from .errors import (
    ApplicationError,
    AuthenticationError,
    MalformedResponseError,
    MultiVersusAPIError,
    NetworkError,
    NotReadyError,
    UnauthorizedError,
    ValidationError,
)
from .search import SearchPaginator
from .tickets import CallableTicketProvider, StaticTicketProvider, TicketProvider

__all__ = [
    # Client
    "MultiVersusClient",
    "SearchPaginator",
    # Auth
    "TokenManager",
    "TokenState",
    "TicketProvider",
    "StaticTicketProvider",
    "CallableTicketProvider",
    # Errors
    "MultiVersusAPIError",
    "ApplicationError",
    "AuthenticationError",
    "MalformedResponseError",
    "NetworkError",
    "NotReadyError",
    "UnauthorizedError",
    "ValidationError",
]
