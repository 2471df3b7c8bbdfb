from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from swarmnode.core.client import APIClient
from swarmnode.core.websocket import Connector
from swarmnode.resources import (
    AgentBuilderJobs,
    AgentExecutorCronJobs,
    AgentExecutorJobs,
    Agents,
    Build,
    Builds,
    BuildStatus,
    Executions,
    Stores,
)
from swarmnode.utils.exceptions import BuildFailedError, BuildTimeoutError, SwarmNodeError
from swarmnode.utils.settings import ClientConfig, resolve_config
from swarmnode.utils.types import Headers

logger = logging.getLogger(__name__)


class SwarmNode(APIClient):
    """SwarmNode API client.

    Usage:
        async with SwarmNode(api_key="...") as client:
            page = await client.stores.list()
            async for store in page:
                print(store.name)
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        connector: Connector | None = None,
        **overrides: Any,
    ) -> None:
        super().__init__(
            resolve_config(config, **overrides),
            http_client=http_client,
            connector=connector,
        )
        self._stores = Stores(self)
        self._agents = Agents(self)
        self._builds = Builds(self)
        self._agent_builder_jobs = AgentBuilderJobs(self)
        self._agent_executor_jobs = AgentExecutorJobs(self)
        self._agent_executor_cron_jobs = AgentExecutorCronJobs(self)
        self._executions = Executions(self)

    def auth_headers(self) -> Headers:
        return self.config.auth_headers()

    @property
    def stores(self) -> Stores:
        return self._stores

    @property
    def agents(self) -> Agents:
        return self._agents

    @property
    def builds(self) -> Builds:
        return self._builds

    @property
    def agent_builder_jobs(self) -> AgentBuilderJobs:
        return self._agent_builder_jobs

    @property
    def agent_executor_jobs(self) -> AgentExecutorJobs:
        return self._agent_executor_jobs

    @property
    def agent_executor_cron_jobs(self) -> AgentExecutorCronJobs:
        return self._agent_executor_cron_jobs

    @property
    def executions(self) -> Executions:
        return self._executions

    async def wait_for_build_completion(
        self,
        agent_id: str,
        timeout: float | None = None,
        poll_interval: float = 1.0,
    ) -> Build:
        """Poll an agent's latest build until it succeeds or fails.

        Args:
            agent_id: Agent whose build to wait for
            timeout: Seconds before giving up; config.build_wait_timeout when None
            poll_interval: Seconds between polls

        Returns:
            The successful Build

        Raises:
            SwarmNodeError: If the agent has no builder job
            BuildFailedError: If the build fails
            BuildTimeoutError: If the build is still running at the deadline
        """
        timeout = timeout if timeout is not None else self.config.build_wait_timeout
        jobs = (await self.agent_builder_jobs.list(agent_id=agent_id)).get_items()
        if not jobs:
            raise SwarmNodeError(f"Agent builder job not found for agent '{agent_id}'")
        job = jobs[0]

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            builds = (await self.builds.list(agent_builder_job_id=job.id)).get_items()
            build = builds[0] if builds else None

            if build is not None and build.status == BuildStatus.SUCCESS:
                logger.info(f"Build {build.id} for agent '{agent_id}' succeeded")
                return build
            if build is not None and build.status == BuildStatus.FAILURE:
                logger.error(f"Build {build.id} for agent '{agent_id}' failed")
                raise BuildFailedError(f"Build {build.id} failed")

            if loop.time() + poll_interval > deadline:
                raise BuildTimeoutError(
                    f"Build for agent '{agent_id}' did not finish within {timeout}s"
                )
            await asyncio.sleep(poll_interval)
