"""Configuration resolution for the SwarmNode client."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swarmnode.utils.types import (
    DEFAULT_BASE_URL,
    DEFAULT_BUILD_WAIT_TIMEOUT,
    DEFAULT_STREAM_TIMEOUT,
    DEFAULT_TIMEOUT,
)

API_URL_ENV = "SWARMNODE_API_URL"
API_KEY_ENV = "SWARMNODE_API_KEY"


def _env_base_url() -> str:
    return os.environ.get(API_URL_ENV) or DEFAULT_BASE_URL


def _env_api_key() -> str | None:
    return os.environ.get(API_KEY_ENV) or None


class ClientConfig(BaseModel):
    """Connection settings for a SwarmNode client.

    Unset values fall back to the SWARMNODE_API_URL and SWARMNODE_API_KEY
    environment variables. All timeouts are in seconds.
    """

    # Environment defaults go through the validators too; unknown fields are errors
    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    base_url: str = Field(default_factory=_env_base_url)
    api_key: str | None = Field(default_factory=_env_api_key, repr=False)
    default_timeout: float = DEFAULT_TIMEOUT
    stream_timeout: float = DEFAULT_STREAM_TIMEOUT
    build_wait_timeout: float = DEFAULT_BUILD_WAIT_TIMEOUT

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value:
            raise ValueError("base_url cannot be empty")
        return value.rstrip("/")

    @field_validator("default_timeout", "stream_timeout", "build_wait_timeout")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeouts must be > 0")
        return value

    def auth_headers(self) -> dict[str, str]:
        """Return the bearer authorization header, or nothing without a key."""
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}


def resolve_config(config: ClientConfig | None = None, **overrides: Any) -> ClientConfig:
    """Merge explicit overrides over a base config.

    Args:
        config: Base configuration; environment defaults when omitted
        **overrides: Field values to apply; None values are ignored

    Returns:
        The resolved ClientConfig
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    if config is None:
        return ClientConfig(**values)
    if not values:
        return config
    # Rebuild rather than model_copy so overrides are validated
    return ClientConfig(**{**config.model_dump(), **values})
