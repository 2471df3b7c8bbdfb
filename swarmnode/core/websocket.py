"""Duplex (WebSocket) transport for execution results and execution streams.

Two consumption modes share one connection model:

- ``listen`` collects every fragment until the server closes the
  connection and decodes the concatenation as a single JSON document.
- ``stream`` decodes each fragment as its own JSON document and yields
  them as they arrive, failing if the connection stays idle too long.

Each call opens its own connection; connections are never reused.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import suppress
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Literal, Protocol

import aiohttp

from swarmnode.utils.exceptions import WebSocketError
from swarmnode.utils.types import DEFAULT_STREAM_TIMEOUT, Headers

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"
    ERROR = "error"


class DuplexTransport(Protocol):
    """Minimal interface of an open duplex connection."""

    async def recv(self) -> str | None:
        """Return the next text fragment, or None once the peer has closed.

        Raises on a transport fault.
        """
        ...

    async def close(self) -> None:
        ...


Connector = Callable[[str, Headers], Awaitable[DuplexTransport]]


class AiohttpTransport:
    """DuplexTransport backed by an aiohttp WebSocket client."""

    def __init__(self, session: aiohttp.ClientSession, ws: aiohttp.ClientWebSocketResponse) -> None:
        self._session = session
        self._ws = ws

    @classmethod
    async def connect(cls, url: str, headers: Headers) -> AiohttpTransport:
        session = aiohttp.ClientSession()
        try:
            ws = await session.ws_connect(url, headers=headers)
        except BaseException:
            await session.close()
            raise
        return cls(session, ws)

    async def recv(self) -> str | None:
        msg = await self._ws.receive()
        if msg.type == aiohttp.WSMsgType.TEXT:
            return msg.data
        if msg.type == aiohttp.WSMsgType.BINARY:
            return msg.data.decode("utf-8")
        if msg.type == aiohttp.WSMsgType.ERROR:
            raise self._ws.exception() or aiohttp.ClientError("WebSocket error")
        # CLOSE, CLOSING and CLOSED all mean the peer is done
        return None

    async def close(self) -> None:
        try:
            await self._ws.close()
        finally:
            await self._session.close()


@dataclass(frozen=True)
class _Event:
    kind: Literal["message", "close", "error"]
    data: str = ""
    error: BaseException | None = None


class _Connection:
    """One open duplex connection feeding a single-consumer event queue.

    A pump task reads the transport and turns every inbound fragment,
    the remote close, or a fault into an _Event; the consumer drains them
    in arrival order with next_event().
    """

    def __init__(self, url: str, transport: DuplexTransport) -> None:
        self.url = url
        self.state = ConnectionState.OPEN
        self._transport = transport
        self._events: asyncio.Queue[_Event] = asyncio.Queue()
        self._released = False
        self._pump = asyncio.create_task(self._run())

    @property
    def closed(self) -> bool:
        return self.state in (ConnectionState.CLOSED, ConnectionState.ERROR)

    async def _run(self) -> None:
        try:
            while True:
                data = await self._transport.recv()
                if data is None:
                    self.state = ConnectionState.CLOSED
                    logger.debug(f"WebSocket disconnected from {self.url}")
                    self._events.put_nowait(_Event("close"))
                    return
                self._events.put_nowait(_Event("message", data))
        except Exception as e:
            self.state = ConnectionState.ERROR
            logger.warning(f"WebSocket error on {self.url}: {e!r}")
            self._events.put_nowait(_Event("error", error=e))

    async def next_event(self) -> _Event:
        """Wait for the next of {message, close, error}."""
        return await self._events.get()

    async def close(self) -> None:
        """Stop reading and release the transport. Safe to call repeatedly."""
        if self._released:
            return
        self._released = True
        if self.state == ConnectionState.OPEN:
            self.state = ConnectionState.CLOSING

        self._pump.cancel()
        with suppress(asyncio.CancelledError):
            await self._pump
        try:
            await self._transport.close()
        finally:
            if self.state == ConnectionState.CLOSING:
                self.state = ConnectionState.CLOSED
                logger.debug(f"WebSocket closed {self.url}")


class WebSocketHandler:
    """Opens duplex connections under ``/ws`` and decodes their JSON payloads."""

    def __init__(
        self,
        base_url: str,
        get_auth_headers: Callable[[], Headers],
        *,
        timeout: float = DEFAULT_STREAM_TIMEOUT,
        connector: Connector | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._get_auth_headers = get_auth_headers
        self._connector = connector or AiohttpTransport.connect

    def build_url(self, path: str) -> str:
        if "://" in self.base_url:
            scheme, host = self.base_url.split("://", 1)
            scheme = {"https": "wss", "http": "ws"}.get(scheme, scheme)
            return f"{scheme}://{host}/ws{path}"
        return f"wss://{self.base_url}/ws{path}"

    async def _open(self, path: str) -> _Connection:
        url = self.build_url(path)
        try:
            # Auth headers are produced once, at open time
            transport = await self._connector(url, self._get_auth_headers())
        except Exception as e:
            logger.warning(f"WebSocket connection to {url} failed: {e!r}")
            raise WebSocketError("WebSocket connection error", e) from e
        logger.debug(f"WebSocket connected to {url}")
        return _Connection(url, transport)

    async def listen(self, path: str, timeout: float | None = None) -> Any:
        """Collect one complete message delivered over a connection's lifetime.

        Fragments are concatenated and decoded as one JSON document once
        the server closes the connection. The timeout covers the whole
        connection and is not reset by incoming data.

        Args:
            path: Address path, appended to ``/ws``
            timeout: Seconds to wait for the close; handler default when None

        Returns:
            The decoded JSON message

        Raises:
            WebSocketError: On timeout, transport fault, empty close, or invalid JSON
        """
        timeout = timeout if timeout is not None else self.timeout
        connection: _Connection | None = None
        chunks: list[str] = []
        try:
            async with asyncio.timeout(timeout):
                connection = await self._open(path)
                while True:
                    event = await connection.next_event()
                    if event.kind == "message":
                        chunks.append(event.data)
                    elif event.kind == "error":
                        raise WebSocketError("WebSocket connection error", event.error)
                    else:
                        break
        except TimeoutError as e:
            raise WebSocketError(f"WebSocket connection timed out after {timeout}s") from e
        finally:
            if connection is not None:
                await connection.close()

        message = "".join(chunks)
        if not message:
            raise WebSocketError("Connection closed without receiving any message")
        return _decode(message)

    async def stream(self, path: str, timeout: float | None = None) -> AsyncIterator[Any]:
        """Yield each fragment of a connection as its own decoded JSON message.

        Terminates cleanly once the server closes and every queued
        fragment has been yielded. The idle timeout bounds opening the
        connection and restarts on every wait. The connection is closed on every exit path; callers that
        stop early should close the generator (``contextlib.aclosing``).

        Raises:
            WebSocketError: On idle timeout, transport fault, or invalid JSON
        """
        timeout = timeout if timeout is not None else self.timeout
        try:
            async with asyncio.timeout(timeout):
                connection = await self._open(path)
        except TimeoutError as e:
            raise WebSocketError(f"WebSocket connection timed out after {timeout}s") from e
        try:
            while True:
                try:
                    event = await asyncio.wait_for(connection.next_event(), timeout)
                except TimeoutError as e:
                    raise WebSocketError(f"WebSocket connection timed out after {timeout}s") from e

                if event.kind == "close":
                    return
                if event.kind == "error":
                    raise WebSocketError("WebSocket stream error", event.error)
                yield _decode(event.data)
        finally:
            await connection.close()


def _decode(message: str) -> Any:
    try:
        return json.loads(message)
    except ValueError as e:
        raise WebSocketError("Failed to parse WebSocket message as JSON", e) from e
