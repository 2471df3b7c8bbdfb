import asyncio
import json
from collections import defaultdict, deque

import httpx
import pytest
import pytest_asyncio

from swarmnode import SwarmNode, disable_tracing


class FakeAPI:
    """httpx.MockTransport handler serving queued responses per (method, path)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: dict[tuple[str, str], deque] = defaultdict(deque)

    def add(self, method: str, path: str, json_body=None, status: int = 200, **kwargs) -> None:
        if json_body is not None:
            kwargs["json"] = json_body
        self._responses[(method.upper(), path)].append((status, kwargs))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._responses.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        status, kwargs = queue.popleft()
        return httpx.Response(status, **kwargs)

    def body_of(self, index: int = -1):
        return json.loads(self.requests[index].content)


class FakeDuplex:
    """In-memory duplex connection driven by the test."""

    def __init__(self) -> None:
        self.url: str | None = None
        self.headers: dict | None = None
        self.close_calls = 0
        self._inbox: asyncio.Queue = asyncio.Queue()

    def send(self, *fragments: str) -> None:
        for fragment in fragments:
            self._inbox.put_nowait(("message", fragment))

    def remote_close(self) -> None:
        self._inbox.put_nowait(("close", None))

    def fail(self, error: Exception) -> None:
        self._inbox.put_nowait(("error", error))

    async def recv(self):
        kind, value = await self._inbox.get()
        if kind == "error":
            raise value
        return value

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture(autouse=True)
def reset_tracing():
    yield
    disable_tracing()


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def duplex() -> FakeDuplex:
    return FakeDuplex()


@pytest.fixture
def connector(duplex):
    async def connect(url, headers):
        duplex.url = url
        duplex.headers = headers
        return duplex

    return connect


@pytest_asyncio.fixture
async def http_client(api):
    client = httpx.AsyncClient(transport=httpx.MockTransport(api))
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(http_client, connector):
    async with SwarmNode(
        api_key="test-key",
        base_url="api.test",
        http_client=http_client,
        connector=connector,
    ) as swarmnode:
        yield swarmnode
