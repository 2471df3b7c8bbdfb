from swarmnode.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
    set_debug_mode,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    "set_debug_mode",
]
