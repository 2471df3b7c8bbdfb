from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from swarmnode.resources.base import APIResource
from swarmnode.utils.pagination import Page
from swarmnode.utils.types import RequestOptions, compact_query


class AgentBuilderJob(BaseModel):
    id: str
    agent_id: str
    created: datetime


class AgentBuilderJobs(APIResource):
    BASE_PATH = "agent-builder-jobs"

    async def list(
        self,
        agent_id: str | None = None,
        page: int | None = None,
    ) -> Page[dict, AgentBuilderJob]:
        return await self._client.get_api_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=compact_query(agent_id=agent_id, page=page)),
            AgentBuilderJob.model_validate,
        )

    async def retrieve(self, id: str) -> AgentBuilderJob:
        return AgentBuilderJob.model_validate(await self._client.get(self._path(id)))
