import json
from collections.abc import Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import eanlookup.app as app_module
from eanlookup.app import app
from eanlookup.services.ean_search import LookupClient

TOKEN = "secret-token"


class FakeApi:
    """Scripted stand-in for the EAN-Search API.

    Replies are consumed in order; the last one repeats once the script runs
    out.  Every request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.replies: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []
        self.requests: list[httpx.Request] = []

    def reply(self, body, status: int = 200) -> "FakeApi":
        content = body if isinstance(body, str) else json.dumps(body)
        self.replies.append(httpx.Response(status, text=content))
        return self

    def fail(self, exc: Exception) -> "FakeApi":
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.replies.append(_raise)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.replies)) - 1
        reply = self.replies[index]
        if callable(reply):
            return reply(request)
        return reply

    @property
    def params(self) -> dict[str, str]:
        """Query parameters of the most recent request."""
        return dict(self.requests[-1].url.params)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def lookup(fake_api: FakeApi) -> LookupClient:
    """A LookupClient talking to the scripted fake API."""
    return LookupClient(TOKEN, transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record retry delays instead of sleeping."""
    delays: list[float] = []
    monkeypatch.setattr("eanlookup.services.ean_search.time.sleep", delays.append)
    return delays


@pytest.fixture
async def client(lookup: LookupClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(app_module, "lookup_client", lookup)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
