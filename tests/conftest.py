"""
Shared fixtures: a fake Hydra backend served through httpx.MockTransport.
"""

import asyncio
import inspect
import json
from collections.abc import Awaitable, Callable

import httpx
import pytest

from multiversus.api import MultiVersusClient

API_KEY = "test-api-key"
CLIENT_ID = "test-client-id"
TICKET = b"\x14\x00\xab\xcd"

Responder = (
    httpx.Response
    | Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]
)


class FakeBackend:
    """
    Routes requests to queued responses.

    Each route holds a queue; the last response is repeated once the
    queue is down to one. POST /access issues token-1, token-2, ...
    unless a route overrides it.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], list[Responder]] = {}
        self.tokens_issued = 0

    def add(self, method: str, path: str, *responses: Responder) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))

        if queue:
            responder = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(responder, httpx.Response):
                return responder
            response = responder(request)
            if inspect.isawaitable(response):
                response = await response
            return response

        if request.method == "POST" and request.url.path == "/access":
            self.tokens_issued += 1
            return httpx.Response(200, json={"token": f"token-{self.tokens_issued}"})

        return httpx.Response(404, json={"msg": "Not found"})


class RecordingTicketProvider:
    """Ticket provider that counts calls and can be held open."""

    name = "steam"

    def __init__(self, ticket: bytes = TICKET):
        self.ticket = ticket
        self.calls = 0
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def get_ticket(self) -> bytes:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.ticket


def body_of(request: httpx.Request):
    return json.loads(request.content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def tickets() -> RecordingTicketProvider:
    return RecordingTicketProvider()


@pytest.fixture
async def client(backend, tickets):
    async with MultiVersusClient(
        api_key=API_KEY,
        client_id=CLIENT_ID,
        ticket_provider=tickets,
        transport=httpx.MockTransport(backend.handler),
    ) as client:
        yield client


@pytest.fixture
async def ready_client(client):
    await client.authenticate()
    return client
