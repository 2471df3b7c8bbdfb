from __future__ import annotations

from typing import Any, AsyncIterator, Callable

import httpx

from swarmnode.core.http import HTTPHandler
from swarmnode.core.websocket import Connector, WebSocketHandler
from swarmnode.utils.pagination import CursorPage, Page
from swarmnode.utils.settings import ClientConfig
from swarmnode.utils.types import Headers, R, RequestOptions, T


class APIClient:
    """Base API client that handles both HTTP and WebSocket communication.

    Subclasses override auth_headers() to authenticate requests.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        connector: Connector | None = None,
    ) -> None:
        self.config = config
        self._http = HTTPHandler(
            config.base_url,
            self.auth_headers,
            timeout=config.default_timeout,
            client=http_client,
        )
        self._ws = WebSocketHandler(
            config.base_url,
            self.auth_headers,
            timeout=config.stream_timeout,
            connector=connector,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def auth_headers(self) -> Headers:
        return {}

    # --- HTTP ---

    async def get(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self._http.request("get", path, options)

    async def post(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self._http.request("post", path, options)

    async def put(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self._http.request("put", path, options)

    async def patch(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self._http.request("patch", path, options)

    async def delete(self, path: str, options: RequestOptions | None = None) -> Any:
        return await self._http.request("delete", path, options)

    # --- Pagination ---

    async def get_api_list(
        self,
        path: str,
        options: RequestOptions | None = None,
        transformer: Callable[[T], R] | None = None,
    ) -> Page[T, R]:
        """Fetch the first page of an offset-paginated list endpoint."""
        response = await self.get(path, options)
        return Page(self, path, response, options, transformer)

    async def get_api_cursor_list(
        self,
        path: str,
        options: RequestOptions | None = None,
        transformer: Callable[[T], R] | None = None,
    ) -> CursorPage[T, R]:
        """Fetch the first page of a cursor-paginated list endpoint."""
        response = await self.get(path, options)
        return CursorPage(self, path, response, options, transformer)

    # --- WebSocket ---

    async def listen(self, path: str, timeout: float | None = None) -> Any:
        """Wait for the single complete message delivered at path."""
        return await self._ws.listen(path, timeout)

    def stream(self, path: str, timeout: float | None = None) -> AsyncIterator[Any]:
        """Stream the JSON messages delivered at path."""
        return self._ws.stream(path, timeout)
