from __future__ import annotations

from contextlib import aclosing
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator

from pydantic import BaseModel, PrivateAttr

from swarmnode.resources.base import APIResource, require_bound
from swarmnode.resources.executions import ExecutionInfo
from swarmnode.utils.pagination import Page
from swarmnode.utils.types import RequestOptions, compact_body, compact_query


class AgentExecutorCronJobStatus(str, Enum):
    SUSPENDED = "suspended"
    RUNNING = "running"


class AgentExecutorCronJob(BaseModel):
    """A schedule that executes an agent on a cron expression."""

    id: str
    agent_id: str
    name: str
    status: AgentExecutorCronJobStatus
    expression: str
    execution_stream_address: str
    created: datetime
    modified: datetime

    _resource: Any = PrivateAttr(default=None)

    async def stream(self, timeout: float | None = None) -> AsyncIterator[ExecutionInfo]:
        """Yield every execution the schedule produces, as it finishes.

        Args:
            timeout: Idle seconds allowed between executions
        """
        cron_jobs = require_bound(self._resource, f"Cron job {self.id}")
        messages = cron_jobs._client.stream(
            f"/v1/execution-stream/{self.execution_stream_address}/", timeout
        )
        async with aclosing(messages):
            async for message in messages:
                yield ExecutionInfo.model_validate(message)


class AgentExecutorCronJobs(APIResource):
    BASE_PATH = "agent-executor-cron-jobs"

    async def list(
        self,
        agent_id: str | None = None,
        page: int | None = None,
    ) -> Page[dict, AgentExecutorCronJob]:
        return await self._client.get_api_list(
            self._path(),
            RequestOptions(query=compact_query(agent_id=agent_id, page=page)),
            self._enhance,
        )

    async def retrieve(self, id: str) -> AgentExecutorCronJob:
        return self._enhance(await self._client.get(self._path(id)))

    async def create(self, name: str, expression: str, agent_id: str) -> AgentExecutorCronJob:
        body = {"name": name, "expression": expression, "agent_id": agent_id}
        data = await self._client.post(self._path("create"), RequestOptions(body=body))
        return self._enhance(data)

    async def update(
        self,
        id: str,
        *,
        name: str | None = None,
        status: AgentExecutorCronJobStatus | str | None = None,
    ) -> AgentExecutorCronJob:
        body = compact_body(
            name=name,
            status=AgentExecutorCronJobStatus(status) if status is not None else None,
        )
        data = await self._client.patch(self._path(id, "update"), RequestOptions(body=body))
        return self._enhance(data)

    async def remove(self, id: str) -> None:
        await self._client.delete(self._path(id, "delete"))

    def _enhance(self, data: dict[str, Any]) -> AgentExecutorCronJob:
        cron_job = AgentExecutorCronJob.model_validate(data)
        cron_job._resource = self
        return cron_job
