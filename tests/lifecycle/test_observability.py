import logging

import pytest

from swarmnode import APIError
from swarmnode.lifecycle.observability import (
    RequestEvent,
    add_listener,
    clear_events,
    disable_tracing,
    enable_tracing,
    get_events,
    remove_listener,
    set_debug_mode,
)


class TestObservability:
    async def test_tracing_disabled_by_default(self, client, api):
        api.add("GET", "/v1/stores/s1/", {"id": "s1", "name": "a", "created": "2024-01-01T00:00:00Z"})
        await client.stores.retrieve("s1")
        assert get_events() == []

    async def test_enable_tracing_captures_events(self, client, api):
        enable_tracing(capture_events=True)
        api.add("GET", "/v1/stores/s1/", {"id": "s1", "name": "a", "created": "2024-01-01T00:00:00Z"})
        await client.stores.retrieve("s1")
        events = get_events()
        assert len(events) == 1
        assert events[0].method == "get"
        assert events[0].path == "/v1/stores/s1/"
        assert events[0].status == 200
        assert events[0].error is None

    async def test_failed_request_records_error(self, client, api):
        enable_tracing(capture_events=True)
        api.add("GET", "/v1/stores/s1/", {"message": "nope"}, status=404)
        with pytest.raises(APIError):
            await client.stores.retrieve("s1")
        event = get_events()[0]
        assert event.status == 404
        assert event.error == "APIError"

    async def test_disable_tracing_clears_state(self, client, api):
        enable_tracing(capture_events=True)
        api.add("DELETE", "/v1/stores/s1/delete/", status=204)
        await client.stores.remove("s1")
        assert len(get_events()) > 0
        disable_tracing()
        assert len(get_events()) == 0

    async def test_slow_request_logs_warning(self, client, api, caplog):
        enable_tracing(slow_request_ms=0.0)
        api.add("DELETE", "/v1/stores/s1/delete/", status=204)
        with caplog.at_level(logging.WARNING, logger="swarmnode"):
            await client.stores.remove("s1")
        assert any("Slow request" in record.message for record in caplog.records)

    async def test_listener_receives_events(self, client, api):
        received = []

        def listener(event: RequestEvent):
            received.append(event)

        enable_tracing()
        add_listener(listener)
        api.add("DELETE", "/v1/stores/s1/delete/", status=204)
        await client.stores.remove("s1")
        assert [e.method for e in received] == ["delete"]

        remove_listener(listener)
        api.add("DELETE", "/v1/stores/s1/delete/", status=204)
        await client.stores.remove("s1")
        assert len(received) == 1

    async def test_events_have_duration(self, client, api):
        enable_tracing(capture_events=True)
        api.add("DELETE", "/v1/stores/s1/delete/", status=204)
        await client.stores.remove("s1")
        clear_events()
        api.add("DELETE", "/v1/stores/s2/delete/", status=204)
        await client.stores.remove("s2")
        events = get_events()
        assert len(events) == 1
        assert all(e.duration_ms >= 0 for e in events)


class TestDebugMode:
    def test_toggles_package_logger(self):
        logger = logging.getLogger("swarmnode")
        set_debug_mode(True)
        try:
            assert logger.level == logging.DEBUG
            handlers = list(logger.handlers)
            set_debug_mode(True)
            assert logger.handlers == handlers
        finally:
            set_debug_mode(False)
        assert logger.level == logging.NOTSET
