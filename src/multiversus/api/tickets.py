"""
Platform ticket providers.

A ticket is an opaque proof of identity issued by a third-party platform
(Steam for MultiVersus). The token manager asks for a fresh one every
time it needs a new access token.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from .endpoints import DEFAULT_AUTH_PROVIDER
from .errors import AuthenticationError


@runtime_checkable
class TicketProvider(Protocol):
    """Anything that can produce a platform ticket on demand."""

    name: str

    async def get_ticket(self) -> bytes:
        """Return a fresh ticket."""
        ...


class StaticTicketProvider:
    """
    Provider for a ticket issued outside this process.

    Useful for scripts where the ticket is obtained from a running game
    client and passed in through configuration. Tickets are single-use,
    so the ticket is handed out once; a later renewal fails with
    AuthenticationError and a fresh ticket must be supplied.
    """

    def __init__(self, ticket: bytes | str, name: str = DEFAULT_AUTH_PROVIDER):
        """
        Args:
            ticket: Raw ticket bytes or their hex encoding
            name: Auth provider key sent to the backend
        """
        if isinstance(ticket, str):
            ticket = bytes.fromhex(ticket.strip())
        if not ticket:
            raise ValueError("A ticket must be provided.")

        self.name = name
        self._ticket: bytes | None = ticket

    @property
    def used(self) -> bool:
        """Check if the ticket has been handed out."""
        return self._ticket is None

    async def get_ticket(self) -> bytes:
        if self._ticket is None:
            raise AuthenticationError(
                "Static ticket already exchanged; supply a fresh ticket"
            )
        ticket, self._ticket = self._ticket, None
        return ticket


class CallableTicketProvider:
    """Adapts a sync or async callable returning ticket bytes."""

    def __init__(
        self,
        func: Callable[[], bytes | Awaitable[bytes]],
        name: str = DEFAULT_AUTH_PROVIDER,
    ):
        self.name = name
        self._func = func

    async def get_ticket(self) -> bytes:
        ticket = self._func()
        if inspect.isawaitable(ticket):
            ticket = await ticket
        return ticket
