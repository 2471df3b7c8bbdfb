import pytest
from pydantic import ValidationError

from swarmnode import (
    BuildFailedError,
    BuildTimeoutError,
    ClientConfig,
    SwarmNode,
    SwarmNodeError,
)

CREATED = "2024-05-01T12:00:00Z"
BUILDER_JOBS = {"results": [{"id": "bj1", "agent_id": "a1", "created": CREATED}], "next": None}


def _builds(status):
    return {
        "results": [{"id": "b1", "agent_builder_job_id": "bj1", "status": status, "created": CREATED}],
        "next": None,
    }


class TestFacade:
    async def test_resources_created_once(self, client):
        assert client.agents is client.agents
        assert client.stores is client.stores

    async def test_bearer_header(self, client, api):
        api.add("GET", "/v1/stores", {"results": [], "next": None})
        await client.stores.list()
        assert api.requests[0].headers["Authorization"] == "Bearer test-key"

    async def test_no_key_sends_no_authorization(self, http_client, api, monkeypatch):
        monkeypatch.delenv("SWARMNODE_API_KEY", raising=False)
        api.add("GET", "/v1/stores", {"results": [], "next": None})
        async with SwarmNode(base_url="api.test", http_client=http_client) as swarmnode:
            await swarmnode.stores.list()
        assert "Authorization" not in api.requests[0].headers

    def test_config_object_with_overrides(self):
        swarmnode = SwarmNode(ClientConfig(api_key="a", base_url="one.test"), base_url="two.test")
        assert swarmnode.config.base_url == "two.test"
        assert swarmnode.config.api_key == "a"

    def test_misspelled_option_raises(self):
        with pytest.raises(ValidationError):
            SwarmNode(api_key="a", default_timout=5)


class TestWaitForBuildCompletion:
    async def test_returns_successful_build(self, client, api):
        api.add("GET", "/v1/agent-builder-jobs", BUILDER_JOBS)
        api.add("GET", "/v1/builds", _builds("in_progress"))
        api.add("GET", "/v1/builds", _builds("success"))

        build = await client.wait_for_build_completion("a1", timeout=5, poll_interval=0.01)

        assert build.id == "b1"
        assert dict(api.requests[0].url.params) == {"agent_id": "a1"}
        assert dict(api.requests[1].url.params) == {"agent_builder_job_id": "bj1"}

    async def test_failed_build(self, client, api):
        api.add("GET", "/v1/agent-builder-jobs", BUILDER_JOBS)
        api.add("GET", "/v1/builds", _builds("failure"))
        with pytest.raises(BuildFailedError):
            await client.wait_for_build_completion("a1", poll_interval=0.01)

    async def test_missing_builder_job(self, client, api):
        api.add("GET", "/v1/agent-builder-jobs", {"results": [], "next": None})
        with pytest.raises(SwarmNodeError, match="Agent builder job not found"):
            await client.wait_for_build_completion("a1")

    async def test_deadline(self, client, api):
        api.add("GET", "/v1/agent-builder-jobs", BUILDER_JOBS)
        for _ in range(20):
            api.add("GET", "/v1/builds", _builds("in_progress"))
        with pytest.raises(BuildTimeoutError):
            await client.wait_for_build_completion("a1", timeout=0.05, poll_interval=0.01)
