from swarmnode.client import SwarmNode
from swarmnode.core import APIClient, WebSocketHandler, HTTPHandler
from swarmnode.lifecycle import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
    set_debug_mode,
)
from swarmnode.resources import (
    Agent,
    AgentBuilderJob,
    AgentExecuteResult,
    AgentExecutorCronJob,
    AgentExecutorCronJobStatus,
    AgentExecutorJob,
    AgentExecutorJobResult,
    Build,
    BuildStatus,
    ExecutionInfo,
    ExecutionResult,
    ExecutionStatus,
    PythonVersion,
    Store,
)
from swarmnode.utils import (
    SwarmNodeError,
    ErrorKind,
    APIError,
    APIConnectionError,
    APIConnectionTimeoutError,
    APIUserAbortError,
    WebSocketError,
    BuildFailedError,
    BuildTimeoutError,
    Page,
    CursorPage,
    ClientConfig,
    RequestOptions,
)

__all__ = [
    # Client
    "SwarmNode",
    "APIClient",
    "HTTPHandler",
    "WebSocketHandler",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    "set_debug_mode",
    # Resources
    "Agent",
    "AgentBuilderJob",
    "AgentExecuteResult",
    "AgentExecutorCronJob",
    "AgentExecutorCronJobStatus",
    "AgentExecutorJob",
    "AgentExecutorJobResult",
    "Build",
    "BuildStatus",
    "ExecutionInfo",
    "ExecutionResult",
    "ExecutionStatus",
    "PythonVersion",
    "Store",
    # Utils
    "SwarmNodeError",
    "ErrorKind",
    "APIError",
    "APIConnectionError",
    "APIConnectionTimeoutError",
    "APIUserAbortError",
    "WebSocketError",
    "BuildFailedError",
    "BuildTimeoutError",
    "Page",
    "CursorPage",
    "ClientConfig",
    "RequestOptions",
]

__version__ = "0.1.0"
