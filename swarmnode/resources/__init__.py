from swarmnode.resources.base import APIResource
from swarmnode.resources.stores import Store, Stores
from swarmnode.resources.agents import (
    Agent,
    AgentExecuteResult,
    AgentExecutorJobResult,
    Agents,
    ExecutionResult,
    PythonVersion,
)
from swarmnode.resources.builds import Build, Builds, BuildStatus
from swarmnode.resources.agent_builder_jobs import AgentBuilderJob, AgentBuilderJobs
from swarmnode.resources.agent_executor_jobs import AgentExecutorJob, AgentExecutorJobs
from swarmnode.resources.agent_executor_cron_jobs import (
    AgentExecutorCronJob,
    AgentExecutorCronJobs,
    AgentExecutorCronJobStatus,
)
from swarmnode.resources.executions import ExecutionInfo, Executions, ExecutionStatus

__all__ = [
    "APIResource",
    "Store",
    "Stores",
    "Agent",
    "AgentExecuteResult",
    "AgentExecutorJobResult",
    "Agents",
    "ExecutionResult",
    "PythonVersion",
    "Build",
    "Builds",
    "BuildStatus",
    "AgentBuilderJob",
    "AgentBuilderJobs",
    "AgentExecutorJob",
    "AgentExecutorJobs",
    "AgentExecutorCronJob",
    "AgentExecutorCronJobs",
    "AgentExecutorCronJobStatus",
    "ExecutionInfo",
    "Executions",
    "ExecutionStatus",
]
