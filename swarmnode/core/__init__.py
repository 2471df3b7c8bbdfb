from swarmnode.core.client import APIClient
from swarmnode.core.http import HTTPHandler
from swarmnode.core.websocket import (
    AiohttpTransport,
    ConnectionState,
    DuplexTransport,
    WebSocketHandler,
)

__all__ = [
    "APIClient",
    "HTTPHandler",
    "AiohttpTransport",
    "ConnectionState",
    "DuplexTransport",
    "WebSocketHandler",
]
