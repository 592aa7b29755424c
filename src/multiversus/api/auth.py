"""
MultiVersus Authentication Handler.

Exchanges platform tickets for Hydra access tokens and renews them when
the backend rejects the current one.
"""

import asyncio
import logging
from enum import StrEnum

import httpx

from .endpoints import ACCESS
from .errors import AuthenticationError, MalformedResponseError
from .responses import Failure, decode_response
from .tickets import TicketProvider

logger = logging.getLogger(__name__)


class TokenState(StrEnum):
    """Lifecycle of the access token."""

    UNAUTHENTICATED = "unauthenticated"
    ACQUIRING = "acquiring"
    READY = "ready"
    FAILED = "failed"


class TokenManager:
    """
    Owns the current access token.

    The token is obtained by posting a platform ticket to the access
    endpoint. Renewals are coalesced: while one is in flight, further
    triggers share it instead of asking the ticket provider again.
    """

    def __init__(
        self,
        ticket_provider: TicketProvider,
        http_client: httpx.AsyncClient,
        identity_headers: dict[str, str],
    ):
        """
        Initialize the token manager.

        Args:
            ticket_provider: Source of platform tickets
            http_client: Client used for the token exchange
            identity_headers: API key, client id and user-agent headers
        """
        self._provider = ticket_provider
        self._http = http_client
        self._identity_headers = identity_headers
        self._token: str | None = None
        self._state = TokenState.UNAUTHENTICATED
        self._pending: asyncio.Task[str] | None = None

    @property
    def state(self) -> TokenState:
        """Current token state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        """Check if a valid access token is held."""
        return self._state is TokenState.READY

    @property
    def token(self) -> str | None:
        """Current access token, None unless ready."""
        return self._token if self.is_ready else None

    @property
    def renewing(self) -> bool:
        """Check if an acquisition is in flight."""
        return self._pending is not None and not self._pending.done()

    async def acquire(self) -> str:
        """
        Obtain an access token, joining an acquisition already in flight.

        Returns:
            The new access token

        Raises:
            AuthenticationError: If the ticket or the exchange fails
        """
        return await asyncio.shield(self._start())

    def schedule_renewal(self, stale_token: str | None = None) -> asyncio.Task[str] | None:
        """
        Renew the token in the background.

        Failures are logged, not raised.

        Args:
            stale_token: The token the backend rejected. If a different
                token is already current, it was renewed since and
                nothing is scheduled.

        Returns:
            The renewal task, or None if no renewal was needed
        """
        if (
            stale_token is not None
            and self.is_ready
            and self._token != stale_token
        ):
            logger.debug("Rejected token already replaced, skipping renewal")
            return None

        joining = self.renewing
        task = self._start()
        if not joining:
            logger.info("Scheduling access token renewal")
            task.add_done_callback(_log_renewal_failure)
        return task

    async def wait_ready(self) -> bool:
        """
        Wait for any in-flight acquisition to settle.

        Returns:
            True if a valid token is held afterwards
        """
        pending = self._pending
        if pending is not None and not pending.done():
            await asyncio.wait({pending})
        return self.is_ready

    def invalidate(self) -> None:
        """Drop the current token."""
        self._token = None
        if not self.renewing:
            self._state = TokenState.UNAUTHENTICATED

    async def aclose(self) -> None:
        """Cancel an acquisition in flight."""
        pending = self._pending
        if pending is not None and not pending.done():
            pending.cancel()
            await asyncio.wait({pending})

        if self._state is TokenState.ACQUIRING:
            self._state = TokenState.UNAUTHENTICATED

    def _start(self) -> asyncio.Task[str]:
        """Start an acquisition unless one is already running."""
        if self._pending is None or self._pending.done():
            self._token = None
            self._state = TokenState.ACQUIRING
            self._pending = asyncio.create_task(self._exchange())
        return self._pending

    async def _exchange(self) -> str:
        try:
            token = await self._fetch_token()
        except asyncio.CancelledError:
            self._state = TokenState.UNAUTHENTICATED
            raise
        except Exception:
            self._state = TokenState.FAILED
            raise

        self._token = token
        self._state = TokenState.READY
        logger.info("Access token acquired")
        return token

    async def _fetch_token(self) -> str:
        try:
            ticket = await self._provider.get_ticket()
        except AuthenticationError:
            raise
        except Exception as e:
            raise AuthenticationError(f"Ticket provider failed: {e}") from e

        if not isinstance(ticket, (bytes, bytearray)):
            raise AuthenticationError(
                f"Ticket provider returned {type(ticket).__name__}, expected bytes"
            )
        if not ticket:
            raise AuthenticationError("Ticket provider returned an empty ticket")

        payload = {
            "auth": {
                self._provider.name: ticket.hex(),
                "fail_on_missing": True,
            }
        }

        try:
            response = await self._http.post(
                ACCESS,
                json=payload,
                headers={
                    **self._identity_headers,
                    "Content-Type": "application/json",
                },
            )
        except httpx.RequestError as e:
            raise AuthenticationError(f"Token exchange request failed: {e}") from e

        try:
            envelope = decode_response(response)
        except MalformedResponseError as e:
            raise AuthenticationError(
                "Token exchange returned an invalid response body",
                status_code=response.status_code,
            ) from e

        if isinstance(envelope, Failure):
            raise AuthenticationError(envelope.message, status_code=response.status_code)

        data = envelope.payload
        token = data.get("token") if isinstance(data, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
            )

        return token


def _log_renewal_failure(task: asyncio.Task[str]) -> None:
    """Log the outcome of a background renewal."""
    if task.cancelled():
        logger.debug("Access token renewal cancelled")
        return

    error = task.exception()
    if error is not None:
        logger.error(f"Access token renewal failed: {error}")
