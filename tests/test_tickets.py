"""
Tests for the ticket providers.
"""

import pytest

from conftest import TICKET
from multiversus.api import (
    AuthenticationError,
    CallableTicketProvider,
    StaticTicketProvider,
    TicketProvider,
    TokenState,
)


class TestStaticTicketProvider:
    """Ticket passed in from outside the process."""

    async def test_from_hex(self):
        provider = StaticTicketProvider(" 14ab\n")

        assert isinstance(provider, TicketProvider)
        assert provider.name == "steam"
        assert not provider.used
        assert await provider.get_ticket() == b"\x14\xab"
        assert provider.used

    async def test_from_bytes(self):
        provider = StaticTicketProvider(TICKET, name="epic")

        assert provider.name == "epic"
        assert await provider.get_ticket() == TICKET

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            StaticTicketProvider("")

    async def test_ticket_is_handed_out_once(self):
        provider = StaticTicketProvider(TICKET)
        await provider.get_ticket()

        with pytest.raises(AuthenticationError, match="already exchanged"):
            await provider.get_ticket()

    async def test_renewal_fails_once_ticket_is_spent(self, client, backend):
        client.auth._provider = StaticTicketProvider(TICKET)
        await client.authenticate()

        client.auth.schedule_renewal(stale_token="token-1")
        ready = await client.auth.wait_ready()

        assert not ready
        assert client.auth.state is TokenState.FAILED
        assert len(backend.calls("POST", "/access")) == 1


class TestCallableTicketProvider:
    """Ticket produced by a callable."""

    async def test_async_callable(self):
        async def fetch() -> bytes:
            return b"\x01"

        provider = CallableTicketProvider(fetch)

        assert isinstance(provider, TicketProvider)
        assert await provider.get_ticket() == b"\x01"

    async def test_sync_callable(self):
        provider = CallableTicketProvider(lambda: b"\x02", name="epic")

        assert provider.name == "epic"
        assert await provider.get_ticket() == b"\x02"

    async def test_called_for_every_ticket(self):
        issued = iter([b"\x01", b"\x02"])
        provider = CallableTicketProvider(lambda: next(issued))

        assert await provider.get_ticket() == b"\x01"
        assert await provider.get_ticket() == b"\x02"
