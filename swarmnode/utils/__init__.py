from swarmnode.utils.exceptions import (
    SwarmNodeError,
    ErrorKind,
    error_kind_for_status,
    APIError,
    APIConnectionError,
    APIConnectionTimeoutError,
    APIUserAbortError,
    WebSocketError,
    BuildFailedError,
    BuildTimeoutError,
)
from swarmnode.utils.pagination import Page, CursorPage
from swarmnode.utils.settings import ClientConfig, resolve_config
from swarmnode.utils.types import (
    JsonValue,
    Query,
    Headers,
    RequestOptions,
    PagePaginatedResponse,
    CursorPaginatedResponse,
    next_page_options,
    DEFAULT_STREAM_TIMEOUT,
)

__all__ = [
    "SwarmNodeError",
    "ErrorKind",
    "error_kind_for_status",
    "APIError",
    "APIConnectionError",
    "APIConnectionTimeoutError",
    "APIUserAbortError",
    "WebSocketError",
    "BuildFailedError",
    "BuildTimeoutError",
    "Page",
    "CursorPage",
    "ClientConfig",
    "resolve_config",
    "JsonValue",
    "Query",
    "Headers",
    "RequestOptions",
    "PagePaginatedResponse",
    "CursorPaginatedResponse",
    "next_page_options",
    "DEFAULT_STREAM_TIMEOUT",
]
