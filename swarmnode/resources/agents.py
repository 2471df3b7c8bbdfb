from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, PrivateAttr

from swarmnode.resources.agent_executor_jobs import AgentExecutorJob, AgentExecutorJobs
from swarmnode.resources.base import APIResource, require_bound
from swarmnode.resources.executions import ExecutionInfo
from swarmnode.utils.pagination import Page
from swarmnode.utils.types import RequestOptions, compact_body, compact_query


class PythonVersion(str, Enum):
    V3_9 = "3.9"
    V3_10 = "3.10"
    V3_11 = "3.11"
    V3_12 = "3.12"


class AgentExecutorJobResult(BaseModel):
    type: Literal["agent_executor_job"] = "agent_executor_job"
    data: AgentExecutorJob


class ExecutionResult(BaseModel):
    type: Literal["execution"] = "execution"
    data: ExecutionInfo


AgentExecuteResult = Annotated[
    Union[AgentExecutorJobResult, ExecutionResult],
    Field(discriminator="type"),
]


class Agent(BaseModel):
    """A deployed script plus its build configuration.

    Agents loaded through the API can be executed directly.
    """

    id: str
    name: str
    script: str
    requirements: str = ""
    env_vars: str = ""
    python_version: PythonVersion
    store_id: str
    created: datetime
    modified: datetime

    _resource: Any = PrivateAttr(default=None)

    async def execute(self, wait: bool = False, payload: Any = None) -> AgentExecuteResult:
        """Run the agent.

        Args:
            wait: Block until the execution finishes and return its result
            payload: JSON-serializable input passed to the script

        Returns:
            ExecutionResult when waiting, otherwise AgentExecutorJobResult
        """
        agents = require_bound(self._resource, f"Agent {self.id}")
        return await agents._execute(self, wait=wait, payload=payload)


class Agents(APIResource):
    BASE_PATH = "agents"

    async def list(self, page: int | None = None) -> Page[dict, Agent]:
        return await self._client.get_api_list(
            f"/v1/{self.BASE_PATH}",
            RequestOptions(query=compact_query(page=page)),
            self._enhance,
        )

    async def create(
        self,
        name: str,
        script: str,
        python_version: PythonVersion | str,
        store_id: str,
        requirements: str | None = None,
        env_vars: str | None = None,
    ) -> Agent:
        body = compact_body(
            name=name,
            script=script,
            python_version=PythonVersion(python_version),
            store_id=store_id,
            requirements=requirements,
            env_vars=env_vars,
        )
        data = await self._client.post(self._path("create"), RequestOptions(body=body))
        return self._enhance(data)

    async def retrieve(self, id: str) -> Agent:
        return self._enhance(await self._client.get(self._path(id)))

    async def update(
        self,
        id: str,
        *,
        name: str | None = None,
        script: str | None = None,
        requirements: str | None = None,
        env_vars: str | None = None,
        python_version: PythonVersion | str | None = None,
        store_id: str | None = None,
    ) -> Agent:
        body = compact_body(
            name=name,
            script=script,
            requirements=requirements,
            env_vars=env_vars,
            python_version=PythonVersion(python_version) if python_version is not None else None,
            store_id=store_id,
        )
        data = await self._client.patch(self._path(id, "update"), RequestOptions(body=body))
        return self._enhance(data)

    async def remove(self, id: str) -> None:
        await self._client.delete(self._path(id, "delete"))

    def _enhance(self, data: dict[str, Any]) -> Agent:
        agent = Agent.model_validate(data)
        agent._resource = self
        return agent

    async def _execute(self, agent: Agent, wait: bool, payload: Any) -> AgentExecuteResult:
        body: dict[str, Any] = {"agent_id": agent.id}
        if payload is not None:
            body["payload"] = payload
        job = AgentExecutorJob.model_validate(
            await self._client.post(AgentExecutorJobs._path("create"), RequestOptions(body=body))
        )

        if not wait:
            return AgentExecutorJobResult(data=job)

        execution = await self._client.listen(f"/v1/execution/{job.execution_address}/")
        return ExecutionResult(data=ExecutionInfo.model_validate(execution))
