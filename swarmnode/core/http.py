from __future__ import annotations

import asyncio
import json
import logging
from contextlib import suppress
from typing import Any, Callable

import httpx

from swarmnode.lifecycle.observability import track_request
from swarmnode.utils.exceptions import (
    APIConnectionError,
    APIConnectionTimeoutError,
    APIError,
    APIUserAbortError,
)
from swarmnode.utils.types import DEFAULT_TIMEOUT, Headers, HTTPMethod, Query, RequestOptions

logger = logging.getLogger(__name__)


class HTTPHandler:
    """JSON-over-HTTP transport used by every resource call and page fetch.

    Usage:
        async with HTTPHandler("api.swarmnode.ai", lambda: {}) as http:
            data = await http.request("get", "/v1/stores/")
    """

    def __init__(
        self,
        base_url: str,
        get_auth_headers: Callable[[], Headers],
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._get_auth_headers = get_auth_headers
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()

    async def __aenter__(self) -> HTTPHandler:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(
        self,
        method: HTTPMethod,
        path: str,
        options: RequestOptions | None = None,
    ) -> Any:
        """Send a request and decode the response.

        Args:
            method: HTTP method
            path: API path, or an absolute URL
            options: Query, body, headers, cancellation signal and timeout

        Returns:
            Decoded JSON, the response text for non-JSON bodies, or None for 204

        Raises:
            APIError: On a non-2xx response
            APIConnectionError: When no response was received
            APIUserAbortError: When options.signal is set before completion
        """
        options = options or RequestOptions()
        url = self._build_url(path)
        request = self._client.build_request(
            method.upper(),
            url,
            params=self._build_params(options.query),
            headers=self._build_headers(options.headers),
            content=json.dumps(options.body).encode() if options.body is not None else None,
            timeout=options.timeout if options.timeout is not None else self.timeout,
        )

        async with track_request(method, path) as ctx:
            logger.debug(f"{method.upper()} {request.url}")
            response = await self._send(request, options.signal)
            ctx["status"] = response.status_code
            return self._handle_response(response)

    def _build_url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        if "://" in self.base_url:
            return f"{self.base_url}{path}"
        return f"https://{self.base_url}{path}"

    @staticmethod
    def _build_params(query: Query | None) -> dict[str, str]:
        if not query:
            return {}
        return {key: value for key, value in query.items() if value is not None}

    def _build_headers(self, custom: Headers | None) -> Headers:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            **self._get_auth_headers(),
            **(custom or {}),
        }

    async def _send(self, request: httpx.Request, signal: asyncio.Event | None) -> httpx.Response:
        if signal is None:
            return await self._send_unguarded(request)

        if signal.is_set():
            raise APIUserAbortError()

        send_task = asyncio.ensure_future(self._send_unguarded(request))
        abort_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (send_task, abort_task):
                if not task.done():
                    task.cancel()
                    with suppress(asyncio.CancelledError):
                        await task

        if send_task in done:
            return send_task.result()
        logger.debug(f"Request to {request.url} aborted by caller")
        raise APIUserAbortError()

    async def _send_unguarded(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            raise APIConnectionTimeoutError(cause=e) from e
        except httpx.RequestError as e:
            raise APIConnectionError(f"Failed to connect to {request.url}: {e}", cause=e) from e

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            raise self._create_api_error(response)

        if response.status_code == 204:
            return None

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    @staticmethod
    def _create_api_error(response: httpx.Response) -> APIError:
        text = response.text
        try:
            body = json.loads(text)
        except ValueError:
            logger.debug(f"Error body from {response.url} is not JSON")
            body = None
        return APIError.generate(
            response.status_code,
            body,
            None if body is not None else text,
            dict(response.headers),
        )
