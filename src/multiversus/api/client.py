"""
MultiVersus API Client.

Async HTTP client for the Hydra backend behind MultiVersus.
Handles access tokens, response classification and username search.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import httpx
import pydantic

from ..data.characters import Character
from ..data.models import RequestDescriptor, SearchPage
from .auth import TokenManager
from .endpoints import (
    BATCH,
    DEFAULT_USER_AGENT,
    HYDRA_BASE_URL,
    LEADERBOARD_TYPES,
    SEARCH_BY_USERNAME,
    get_account_path,
    get_leaderboard_path,
    get_leaderboard_rank_path,
    get_match_path,
    get_matches_path,
    get_profile_path,
)
from .errors import (
    ApplicationError,
    MultiVersusAPIError,
    NetworkError,
    NotReadyError,
    UnauthorizedError,
    ValidationError,
)
from .responses import Failure, decode_response
from .search import SearchPaginator
from .tickets import TicketProvider

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


class MultiVersusClient:
    """
    Async client for the MultiVersus backend.

    Call authenticate() before any request. A 401 schedules a token
    renewal in the background and fails the call; it is not retried.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        api_key: str,
        client_id: str,
        ticket_provider: TicketProvider,
        user_agent: str | None = None,
        base_url: str = HYDRA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Hydra API key
            client_id: Hydra client id
            ticket_provider: Source of platform tickets
            user_agent: Hydra user-agent (default: Hydra-Cpp/1.132.0)
            base_url: Backend base URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport
        """
        self._identity_headers = {
            "x-hydra-api-key": api_key,
            "x-hydra-client-id": client_id,
            "x-hydra-user-agent": user_agent or DEFAULT_USER_AGENT,
        }
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self.auth = TokenManager(ticket_provider, self._client, self._identity_headers)
        self.search = SearchPaginator(self)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        ticket_provider: TicketProvider,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MultiVersusClient":
        """Build a client from application settings."""
        hydra = settings.hydra
        return cls(
            api_key=hydra.api_key.get_secret_value(),
            client_id=hydra.client_id,
            ticket_provider=ticket_provider,
            user_agent=hydra.user_agent,
            base_url=hydra.base_url,
            timeout=hydra.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "MultiVersusClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Cancel pending renewals and close the HTTP client."""
        await self.auth.aclose()
        await self._client.aclose()

    @property
    def is_ready(self) -> bool:
        """Check if requests can be sent."""
        return self.auth.is_ready

    async def authenticate(self) -> None:
        """
        Acquire an access token.

        Raises:
            AuthenticationError: If the ticket exchange fails
        """
        await self.auth.acquire()

    async def request(
        self,
        path: str,
        method: str = "GET",
        params: Any = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Send an authenticated request.

        Args:
            path: Path relative to the base URL
            method: HTTP method
            params: Query parameters
            json: JSON body
            headers: Extra headers

        Returns:
            Parsed JSON response

        Raises:
            NotReadyError: If no valid access token is held
            UnauthorizedError: On HTTP 401
            ApplicationError: If the body carries a `msg` field
            MalformedResponseError: If the body is not JSON
            NetworkError: On transport failure
        """
        token = self.auth.token
        if token is None:
            raise NotReadyError(self.auth.state)

        request_headers = {**self._identity_headers, "x-hydra-access-token": token}
        if headers:
            request_headers.update(headers)

        logger.debug(f"Request: {method} {path}")

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request failed: {e}") from e

        if response.status_code == 401:
            logger.warning(f"Access token rejected: {method} {path}")
            self.auth.schedule_renewal(stale_token=token)
            raise UnauthorizedError("Invalid access token.", status_code=401)

        envelope = decode_response(response)

        if isinstance(envelope, Failure):
            raise ApplicationError(envelope.message, status_code=response.status_code)

        if response.is_error:
            raise MultiVersusAPIError(
                f"Unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        return envelope.payload

    async def get(self, path: str, **kwargs: Any) -> Any:
        """Make a GET request."""
        return await self.request(path, method="GET", **kwargs)

    async def batch(
        self,
        requests: Sequence[RequestDescriptor | Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Send several requests as one all-or-nothing batch.

        `allow_failures` is always sent as false.

        Args:
            requests: Sub-requests, in order
            options: Extra batch options
        """
        if not requests:
            raise ValidationError("At least one request must be provided.")

        try:
            descriptors = [
                r if isinstance(r, RequestDescriptor) else RequestDescriptor.model_validate(r)
                for r in requests
            ]
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid batch request: {e}") from e

        body = {
            "options": {**(options or {}), "allow_failures": False},
            "requests": [d.to_batch_entry() for d in descriptors],
        }
        return await self.request(BATCH, method="PUT", json=body)

    # =========================================================================
    # Search
    # =========================================================================

    async def search_by_username(self, username: str, limit: int = 25) -> dict[str, Any]:
        """Get the raw first page of a username search."""
        if not username:
            raise ValidationError("A query must be provided.")

        data = await self.get(
            SEARCH_BY_USERNAME,
            params={"username": username, "limit": limit},
        )
        return data  # type: ignore

    async def search_by_prefix(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
        platform: str | None = None,
    ) -> SearchPage:
        """Get one page of usernames starting with `query`."""
        return await self.search.search_by_prefix(query, limit, cursor, platform)

    async def search_exact(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any] | None:
        """Find the account whose username equals `query`, or None."""
        return await self.search.search_exact(query, limit, cursor, platform)

    # =========================================================================
    # Profiles and Matches
    # =========================================================================

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        """Get a player's profile."""
        _require(user_id, "A user ID must be provided.")
        data = await self.get(get_profile_path(user_id))
        return data  # type: ignore

    async def get_account(self, user_id: str) -> dict[str, Any]:
        """Get a player's account and linked identities."""
        _require(user_id, "A user ID must be provided.")
        data = await self.get(get_account_path(user_id))
        return data  # type: ignore

    async def get_match(self, match_id: str) -> dict[str, Any]:
        """Get a single match."""
        _require(match_id, "A match ID must be provided.")
        data = await self.get(get_match_path(match_id))
        return data  # type: ignore

    async def get_matches(self, user_id: str, page: int = 1) -> dict[str, Any]:
        """Get one page of a player's match history."""
        _require(user_id, "A user ID must be provided.")
        if page < 1:
            raise ValidationError("Page must be a positive integer.")

        data = await self.get(get_matches_path(user_id), params={"page": page})
        return data  # type: ignore

    # =========================================================================
    # Leaderboards
    # =========================================================================

    async def get_leaderboard(self, leaderboard_type: str) -> dict[str, Any]:
        """Get the global leaderboard for "1v1" or "2v2"."""
        _validate_leaderboard_type(leaderboard_type)
        data = await self.get(get_leaderboard_path(leaderboard_type))
        return data  # type: ignore

    async def get_profile_leaderboard(
        self, user_id: str, leaderboard_type: str
    ) -> dict[str, Any]:
        """Get a player's score and rank on a leaderboard."""
        _validate_leaderboard_type(leaderboard_type)
        _require(user_id, "A user ID must be provided.")
        data = await self.get(get_leaderboard_rank_path(user_id, leaderboard_type))
        return data  # type: ignore

    async def get_profile_leaderboard_for_character(
        self,
        user_id: str,
        leaderboard_type: str,
        character: Character | str,
    ) -> dict[str, Any]:
        """
        Get a player's score and rank on a character leaderboard.

        Args:
            user_id: Player account ID
            leaderboard_type: "1v1" or "2v2"
            character: Catalog character or raw character id
        """
        _validate_leaderboard_type(leaderboard_type)
        _require(user_id, "A user ID must be provided.")
        _require(character, "A character must be provided.")

        path = get_leaderboard_rank_path(user_id, leaderboard_type, str(character))
        data = await self.get(path)
        return data  # type: ignore


def _require(value: Any, message: str) -> None:
    if not value:
        raise ValidationError(message)


def _validate_leaderboard_type(leaderboard_type: str) -> None:
    if leaderboard_type not in LEADERBOARD_TYPES:
        raise ValidationError("Leaderboard type must be 1v1 or 2v2.")
