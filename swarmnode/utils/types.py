from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Literal, TypedDict, TypeVar
from urllib.parse import parse_qsl, urlsplit

# Type aliases for better clarity
JsonValue = Any
Query = dict[str, str | None]
Headers = dict[str, str]
HTTPMethod = Literal["get", "post", "put", "patch", "delete"]

# Generic type variables for raw and transformed list items
T = TypeVar("T")
R = TypeVar("R")

# Constants
DEFAULT_BASE_URL = "api.swarmnode.ai"
DEFAULT_TIMEOUT = 30.0
DEFAULT_STREAM_TIMEOUT = 600.0  # 10 minutes
DEFAULT_BUILD_WAIT_TIMEOUT = 300.0


class PagePaginatedResponse(TypedDict, total=False):
    next: str | None
    previous: str | None
    results: list[Any]
    total_count: int
    current_page: int


class CursorPaginatedResponse(TypedDict, total=False):
    next: str | None
    previous: str | None
    results: list[Any]


@dataclass(frozen=True)
class RequestOptions:
    """Per-request options for the HTTP transport.

    Attributes:
        query: Query parameters; entries set to None are dropped
        body: JSON-serializable request body
        headers: Extra headers, applied over the defaults
        signal: Event that aborts the request once set
        timeout: Request timeout in seconds
    """

    query: Query | None = None
    body: Any = None
    headers: Headers | None = None
    signal: asyncio.Event | None = None
    timeout: float | None = None


def query_from_url(url: str) -> dict[str, str]:
    """Extract the query-string parameters of a URL.

    Repeated keys keep their last value.
    """
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))


def next_page_options(previous: RequestOptions | None, next_url: str) -> RequestOptions:
    """Build the options for fetching the page at next_url.

    The query is replaced wholesale by the parameters of next_url, never
    merged with the previous query. Every other field is carried forward;
    headers are copied so consecutive pages never share one mapping.

    Args:
        previous: Options used for the current page
        next_url: The server-provided URL of the next page

    Returns:
        New RequestOptions for the next fetch
    """
    base = previous or RequestOptions()
    headers = dict(base.headers) if base.headers is not None else None
    return replace(base, query=query_from_url(next_url), headers=headers)


def compact_query(**params: Any) -> Query:
    """Drop None values and stringify the rest."""
    return {
        key: value.value if isinstance(value, Enum) else str(value)
        for key, value in params.items()
        if value is not None
    }


def compact_body(**fields: Any) -> dict[str, Any]:
    """Keep only the fields that were given."""
    return {key: value for key, value in fields.items() if value is not None}
