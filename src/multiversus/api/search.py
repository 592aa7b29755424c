"""
Username search.

The search endpoint is cursor paginated and matches on prefixes, so
finding one exact username can take several pages.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import TYPE_CHECKING, Any

import pydantic

from ..data.models import SearchPage
from .endpoints import SEARCH_BY_USERNAME
from .errors import MalformedResponseError, UnauthorizedError, ValidationError

if TYPE_CHECKING:
    from .client import MultiVersusClient

logger = logging.getLogger(__name__)

# Page size for every page after the first
SEARCH_PAGE_SIZE = 100

# Account sections requested with each result
ACCOUNT_FIELDS = ("identity", "presence", "server_data", "data")


def platform_usernames(entry: dict[str, Any], platform: str | None = None) -> list[str]:
    """
    Get the platform usernames of a search result.

    Reads result.account.identity.alternate[<platform>][0].username.
    Missing or mistyped fields yield no username.

    Args:
        entry: One item of a search page
        platform: Only read this platform (e.g. "steam", "wb_network")
    """
    result = entry.get("result")
    account = result.get("account") if isinstance(result, dict) else None
    identity = account.get("identity") if isinstance(account, dict) else None
    alternate = identity.get("alternate") if isinstance(identity, dict) else None
    if not isinstance(alternate, dict):
        return []

    if platform is not None:
        accounts = [alternate.get(platform)]
    else:
        accounts = list(alternate.values())

    usernames = []
    for linked in accounts:
        if not isinstance(linked, list) or not linked:
            continue
        first = linked[0]
        username = first.get("username") if isinstance(first, dict) else None
        if isinstance(username, str):
            usernames.append(username)

    return usernames


def _validate(query: str, limit: int) -> None:
    if not query:
        raise ValidationError("A query must be provided.")
    if limit < 1:
        raise ValidationError("Limit must be a positive integer.")


class SearchPaginator:
    """Runs username searches through a client."""

    def __init__(self, client: "MultiVersusClient"):
        self._client = client

    async def fetch_page(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
    ) -> SearchPage:
        """
        Fetch one raw page of search results.

        Raises:
            MalformedResponseError: If the body is not a search page
        """
        params: list[tuple[str, str | int]] = [
            ("username", query),
            ("limit", limit),
        ]
        if cursor:
            params.append(("cursor", cursor))
        params.extend(("account_fields", field) for field in ACCOUNT_FIELDS)

        data = await self._client.request(SEARCH_BY_USERNAME, params=params)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                "Search response is not an object.", raw_text=repr(data)
            )

        try:
            return SearchPage.model_validate(data)
        except pydantic.ValidationError as e:
            raise MalformedResponseError(
                f"Search response has an unexpected shape: {e}", raw_text=repr(data)
            ) from e

    async def search_by_prefix(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
        platform: str | None = None,
    ) -> SearchPage:
        """
        Fetch a single page of usernames starting with `query`.

        Args:
            query: Username prefix
            limit: Page size
            cursor: Continuation marker from a previous page
            platform: Keep only results whose username on this platform
                contains `query` (case-insensitive)

        Returns:
            The page, filtered if `platform` is set, with its cursor
        """
        _validate(query, limit)
        page = await self.fetch_page(query, limit, cursor)

        if platform is None:
            return page

        needle = query.casefold()
        results = [
            entry
            for entry in page.results
            if any(needle in name.casefold() for name in platform_usernames(entry, platform))
        ]
        return SearchPage(results=results, cursor=page.cursor)

    async def iter_pages(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
    ) -> AsyncIterator[SearchPage]:
        """
        Iterate over pages until the backend stops returning a cursor.

        The first page uses `limit`, later pages SEARCH_PAGE_SIZE. A page
        rejected with 401 is retried once after the token is renewed.
        """
        _validate(query, limit)
        page_size = limit

        while True:
            page = await self._fetch_with_renewal(query, page_size, cursor)
            yield page

            if not page.has_more:
                return
            if page.cursor == cursor:
                logger.warning("Search cursor did not advance, stopping")
                return

            cursor = page.cursor
            page_size = SEARCH_PAGE_SIZE

    async def search_exact(
        self,
        query: str,
        limit: int = 25,
        cursor: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any] | None:
        """
        Page through results until a username equals `query`.

        Comparison is case-insensitive. The first match wins; pages are
        not ranked.

        Args:
            query: Exact username
            limit: Size of the first page
            cursor: Start from this continuation marker
            platform: Only compare usernames on this platform

        Returns:
            The matching search result, or None if the results ran out
        """
        needle = query.casefold()
        pages = 0

        async with aclosing(self.iter_pages(query, limit, cursor)) as page_iter:
            async for page in page_iter:
                pages += 1
                for entry in page.results:
                    names = platform_usernames(entry, platform)
                    if any(name.casefold() == needle for name in names):
                        logger.debug(f"Found {query!r} after {pages} page(s)")
                        return entry

        logger.debug(f"No exact match for {query!r} in {pages} page(s)")
        return None

    async def _fetch_with_renewal(
        self,
        query: str,
        limit: int,
        cursor: str | None,
    ) -> SearchPage:
        try:
            return await self.fetch_page(query, limit, cursor)
        except UnauthorizedError:
            if not await self._client.auth.wait_ready():
                raise
            logger.info("Retrying search page with renewed token")
            return await self.fetch_page(query, limit, cursor)
