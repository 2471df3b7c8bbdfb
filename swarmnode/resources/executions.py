from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from swarmnode.resources.base import APIResource
from swarmnode.utils.pagination import CursorPage
from swarmnode.utils.types import RequestOptions, compact_query


class ExecutionStatus(str, Enum):
    SUCCESS = "success"
    IN_PROGRESS = "in_progress"
    FAILURE = "failure"
    TERMINATION = "termination"


class ExecutionInfo(BaseModel):
    """One run of an agent's script, with its logs and return value."""

    id: str
    agent_id: str
    agent_executor_job_id: str | None = None
    agent_executor_cron_job_id: str | None = None
    status: ExecutionStatus
    start: datetime
    finish: datetime | None = None
    logs: list[Any] = Field(default_factory=list)
    return_value: Any = None


class Executions(APIResource):
    BASE_PATH = "executions"

    async def list(
        self,
        agent_id: str | None = None,
        agent_executor_job_id: str | None = None,
        agent_executor_cron_job_id: str | None = None,
        page: int | None = None,
    ) -> CursorPage[dict, ExecutionInfo]:
        """List executions, optionally filtered by agent or job."""
        query = compact_query(
            agent_id=agent_id,
            agent_executor_job_id=agent_executor_job_id,
            agent_executor_cron_job_id=agent_executor_cron_job_id,
            page=page,
        )
        return await self._client.get_api_cursor_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=query),
            ExecutionInfo.model_validate,
        )

    async def retrieve(self, id: str) -> ExecutionInfo:
        return ExecutionInfo.model_validate(await self._client.get(self._path(id)))
