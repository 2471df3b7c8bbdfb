from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from swarmnode.resources.base import APIResource
from swarmnode.utils.pagination import Page
from swarmnode.utils.types import RequestOptions, compact_query


class BuildStatus(str, Enum):
    SUCCESS = "success"
    IN_PROGRESS = "in_progress"
    FAILURE = "failure"


class Build(BaseModel):
    id: str
    agent_builder_job_id: str
    status: BuildStatus
    logs: list[Any] = Field(default_factory=list)
    created: datetime


class Builds(APIResource):
    BASE_PATH = "builds"

    async def list(
        self,
        agent_builder_job_id: str | None = None,
        page: int | None = None,
    ) -> Page[dict, Build]:
        return await self._client.get_api_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=compact_query(agent_builder_job_id=agent_builder_job_id, page=page)),
            Build.model_validate,
        )

    async def retrieve(self, id: str) -> Build:
        return Build.model_validate(await self._client.get(self._path(id)))
