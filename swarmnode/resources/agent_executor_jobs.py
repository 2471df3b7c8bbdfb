from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from swarmnode.resources.base import APIResource
from swarmnode.utils.pagination import CursorPage
from swarmnode.utils.types import RequestOptions, compact_query


class AgentExecutorJob(BaseModel):
    """An on-demand run request; its execution_address is listened on for the result."""

    id: str
    agent_id: str
    execution_address: str
    created: datetime


class AgentExecutorJobs(APIResource):
    BASE_PATH = "agent-executor-jobs"

    async def list(
        self,
        agent_id: str | None = None,
        page: int | None = None,
    ) -> CursorPage[dict, AgentExecutorJob]:
        return await self._client.get_api_cursor_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=compact_query(agent_id=agent_id, page=page)),
            AgentExecutorJob.model_validate,
        )

    async def retrieve(self, id: str) -> AgentExecutorJob:
        return AgentExecutorJob.model_validate(await self._client.get(self._path(id)))

    async def create(self, agent_id: str, payload: Any = None) -> AgentExecutorJob:
        body: dict[str, Any] = {"agent_id": agent_id}
        if payload is not None:
            body["payload"] = payload
        data = await self._client.post(self._path("create"), RequestOptions(body=body))
        return AgentExecutorJob.model_validate(data)
