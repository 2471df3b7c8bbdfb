from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, AsyncIterator, Callable, Generic, Self

from swarmnode.utils.types import (
    CursorPaginatedResponse,
    PagePaginatedResponse,
    R,
    RequestOptions,
    T,
    next_page_options,
)

if TYPE_CHECKING:
    from swarmnode.core.client import APIClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _BasePage(Generic[T, R]):
    """One fetched batch of list results plus what is needed to fetch the next.

    Instances are immutable; advancing builds a new page that carries the
    same client, path and transformer forward.
    """

    client: APIClient = field(repr=False)
    path: str
    response: Any
    options: RequestOptions | None = None
    transformer: Callable[[T], R] | None = field(default=None, repr=False)

    def get_items(self) -> list[R]:
        """Return the items of this page, transformed, in server order."""
        results = self.response.get("results") or []
        if self.transformer is None:
            return list(results)
        return [self.transformer(item) for item in results]

    def has_next_page(self) -> bool:
        return bool(self.response.get("next"))

    async def get_next_page(self) -> Self | None:
        """Fetch the following page, or return None on the last page.

        Transport errors propagate unchanged.
        """
        next_url = self.response.get("next")
        if not next_url:
            return None

        options = next_page_options(self.options, next_url)
        logger.debug(f"Fetching next page of {self.path} with query {options.query}")
        response = await self.client.get(self.path, options)
        return type(self)(self.client, self.path, response, options, self.transformer)

    async def __aiter__(self) -> AsyncIterator[R]:
        page: Self | None = self
        while page is not None:
            for item in page.get_items():
                yield item
            page = await page.get_next_page()


@dataclass(frozen=True)
class Page(_BasePage[T, R]):
    """Offset-based pagination result."""

    response: PagePaginatedResponse

    def get_current_page_number(self) -> int:
        return self.response.get("current_page") or 1

    @property
    def total_count(self) -> int | None:
        return self.response.get("total_count")


@dataclass(frozen=True)
class CursorPage(_BasePage[T, R]):
    """Cursor-based pagination result driven by the server's next URL."""

    response: CursorPaginatedResponse
