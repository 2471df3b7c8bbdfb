from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from swarmnode.resources.base import APIResource
from swarmnode.utils.pagination import Page
from swarmnode.utils.types import RequestOptions, compact_body, compact_query


class Store(BaseModel):
    id: str
    name: str
    data: Any = None
    created: datetime


class Stores(APIResource):
    BASE_PATH = "stores"

    async def list(self, page: int | None = None) -> Page[dict, Store]:
        """List stores, one page at a time."""
        return await self._client.get_api_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=compact_query(page=page)),
            Store.model_validate,
        )

    async def create(self, name: str) -> Store:
        data = await self._client.post(self._path("create"), RequestOptions(body={"name": name}))
        return Store.model_validate(data)

    async def retrieve(self, id: str) -> Store:
        return Store.model_validate(await self._client.get(self._path(id)))

    async def update(self, id: str, name: str | None = None) -> Store:
        data = await self._client.patch(
            self._path(id, "update"),
            RequestOptions(body=compact_body(name=name)),
        )
        return Store.model_validate(data)

    async def remove(self, id: str) -> None:
        await self._client.delete(self._path(id, "delete"))
