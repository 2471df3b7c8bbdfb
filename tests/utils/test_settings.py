import pytest
from pydantic import ValidationError

from swarmnode.utils.settings import ClientConfig, resolve_config


class TestClientConfig:
    def test_defaults_without_environment(self, monkeypatch):
        monkeypatch.delenv("SWARMNODE_API_URL", raising=False)
        monkeypatch.delenv("SWARMNODE_API_KEY", raising=False)
        config = ClientConfig()
        assert config.base_url == "api.swarmnode.ai"
        assert config.api_key is None
        assert config.default_timeout == 30.0
        assert config.stream_timeout == 600.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SWARMNODE_API_URL", "staging.swarmnode.ai/")
        monkeypatch.setenv("SWARMNODE_API_KEY", "env-key")
        config = ClientConfig()
        assert config.base_url == "staging.swarmnode.ai"
        assert config.api_key == "env-key"

    def test_empty_environment_url_falls_back(self, monkeypatch):
        monkeypatch.setenv("SWARMNODE_API_URL", "")
        assert ClientConfig().base_url == "api.swarmnode.ai"

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            ClientConfig(default_timout=5)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ClientConfig(stream_timeout=0)

    def test_is_frozen(self):
        config = ClientConfig(api_key="k")
        with pytest.raises(ValidationError):
            config.api_key = "other"

    def test_api_key_hidden_from_repr(self):
        assert "secret" not in repr(ClientConfig(api_key="secret"))

    def test_auth_headers(self):
        assert ClientConfig(api_key="k").auth_headers() == {"Authorization": "Bearer k"}
        assert ClientConfig(api_key=None).auth_headers() == {}


class TestResolveConfig:
    def test_overrides_apply_over_base(self):
        base = ClientConfig(api_key="a", base_url="one.test")
        resolved = resolve_config(base, base_url="two.test", api_key=None)
        assert resolved.base_url == "two.test"
        assert resolved.api_key == "a"

    def test_base_returned_as_is_without_overrides(self):
        base = ClientConfig(api_key="a")
        assert resolve_config(base) is base

    def test_overrides_are_validated(self):
        with pytest.raises(ValidationError):
            resolve_config(ClientConfig(), default_timeout=-1)

    def test_misspelled_override_is_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(ClientConfig(api_key="a"), default_timout=5)

    def test_misspelled_override_without_base_is_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(default_timout=5)
