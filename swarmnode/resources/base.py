from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from swarmnode.utils.exceptions import SwarmNodeError

if TYPE_CHECKING:
    from swarmnode.core.client import APIClient


class APIResource:
    """Base class for one group of API endpoints under ``/v1/<BASE_PATH>``."""

    BASE_PATH: ClassVar[str] = ""

    def __init__(self, client: APIClient) -> None:
        self._client = client

    @classmethod
    def _path(cls, *parts: str) -> str:
        """Build ``/v1/<BASE_PATH>/<parts...>/``."""
        return "/".join(["/v1", cls.BASE_PATH, *parts]) + "/"


def require_bound(resource: APIResource | None, what: str) -> APIResource:
    """Return the resource an enhanced model was loaded through."""
    if resource is None:
        raise SwarmNodeError(f"{what} is not bound to a client; load it through the API")
    return resource
