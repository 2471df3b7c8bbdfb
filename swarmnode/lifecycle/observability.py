from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger("swarmnode")


@dataclass(frozen=True)
class RequestEvent:
    """Represents a single HTTP request for tracing."""

    method: str
    path: str
    status: int | None = None
    duration_ms: float = 0.0
    error: str | None = None


class _ObservabilityState:
    """Global mutable state for observability."""

    def __init__(self) -> None:
        self.enabled: bool = False
        self.slow_request_threshold_ms: float = 1000.0
        self.listeners: list[Callable[[RequestEvent], Any]] = []
        self.events: list[RequestEvent] = []
        self.capture_events: bool = False
        self.debug_handler: logging.Handler | None = None


_state = _ObservabilityState()


def enable_tracing(slow_request_ms: float = 1000.0, capture_events: bool = False) -> None:
    """Enable request tracing and observability."""
    _state.enabled = True
    _state.slow_request_threshold_ms = slow_request_ms
    _state.capture_events = capture_events


def disable_tracing() -> None:
    """Disable tracing and clear all state."""
    _state.enabled = False
    _state.slow_request_threshold_ms = 1000.0
    _state.listeners.clear()
    _state.events.clear()
    _state.capture_events = False


def get_events() -> list[RequestEvent]:
    """Return captured events."""
    return list(_state.events)


def clear_events() -> None:
    """Clear captured events."""
    _state.events.clear()


def add_listener(callback: Callable[[RequestEvent], Any]) -> None:
    """Register a listener that receives a RequestEvent for each request."""
    _state.listeners.append(callback)


def remove_listener(callback: Callable[[RequestEvent], Any]) -> None:
    """Remove a previously registered listener."""
    _state.listeners.remove(callback)


def emit_event(event: RequestEvent) -> None:
    """Emit a request event: store, log slow requests, notify listeners."""
    if not _state.enabled:
        return

    if _state.capture_events:
        _state.events.append(event)

    if event.duration_ms > _state.slow_request_threshold_ms:
        logger.warning(
            "Slow request: %s %s took %.1fms (threshold: %.1fms)",
            event.method.upper(),
            event.path,
            event.duration_ms,
            _state.slow_request_threshold_ms,
        )

    for listener in _state.listeners:
        listener(event)

    _try_emit_otel_span(event)


def _try_emit_otel_span(event: RequestEvent) -> None:
    """Attempt to emit an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace

        tracer = trace.get_tracer("swarmnode")
        with tracer.start_as_current_span(f"swarmnode.{event.method}") as span:
            span.set_attribute("http.request.method", event.method.upper())
            span.set_attribute("url.path", event.path)
            if event.status is not None:
                span.set_attribute("http.response.status_code", event.status)
            if event.duration_ms:
                span.set_attribute("swarmnode.duration_ms", event.duration_ms)
    except ImportError:
        pass


@asynccontextmanager
async def track_request(method: str, path: str):
    """Context manager that times a request and emits a RequestEvent."""
    if not _state.enabled:
        yield {"status": None}
        return

    start = time.perf_counter()
    ctx: dict[str, Any] = {"status": None}
    error: str | None = None
    try:
        yield ctx
    except Exception as e:
        error = type(e).__name__
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        event = RequestEvent(
            method=method,
            path=path,
            status=ctx.get("status"),
            duration_ms=duration_ms,
            error=error,
        )
        emit_event(event)


def set_debug_mode(enabled: bool) -> None:
    """Send the package's debug logs to stderr, or stop doing so."""
    if enabled:
        if _state.debug_handler is None:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter("[swarmnode] %(levelname)s %(name)s: %(message)s"))
            logger.addHandler(handler)
            _state.debug_handler = handler
        logger.setLevel(logging.DEBUG)
    else:
        if _state.debug_handler is not None:
            logger.removeHandler(_state.debug_handler)
            _state.debug_handler = None
        logger.setLevel(logging.NOTSET)


if os.environ.get("SWARMNODE_DEBUG", "").lower() in ("1", "true", "yes"):
    set_debug_mode(True)
