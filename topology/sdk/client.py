"""HTTP client for the topology server.

    client = TopologyClient("http://localhost:8000")
    session = client.open_session("demo-topology")
    ...
    client.save_topology(session.save())
"""

from __future__ import annotations

import logging

import httpx

from topology.errors import TopologyClientError
from topology.models.cache_group import CacheGroup
from topology.models.persisted import PersistedTopology
from topology.sdk.session import EditSession

logger = logging.getLogger(__name__)


class TopologyClient:
    """Load and store topologies and cache groups through the API server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the topology server
            timeout: HTTP request timeout in seconds
            transport: optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}/api{path}"
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise TopologyClientError(
                f"Failed to connect to server at {self.base_url}: {e}"
            ) from e

        if response.status_code == 404:
            raise TopologyClientError(f"Not found: {path}", {"status_code": 404})
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text or None
            detail = body.get("detail") if isinstance(body, dict) else body
            raise TopologyClientError(
                f"{method} {path} failed with status {response.status_code}",
                {"status_code": response.status_code, "detail": detail},
            )
        return response

    def list_cache_groups(self) -> list[CacheGroup]:
        response = self._request("GET", "/cachegroups")
        return [CacheGroup.model_validate(item) for item in response.json()]

    def put_cache_group(self, cache_group: CacheGroup) -> CacheGroup:
        """Create or update a cache group in the catalog."""
        response = self._request(
            "PUT",
            f"/cachegroups/{cache_group.name}",
            json=cache_group.model_dump(by_alias=True),
        )
        return CacheGroup.model_validate(response.json())

    def list_topologies(self) -> list[PersistedTopology]:
        response = self._request("GET", "/topologies")
        return [PersistedTopology.model_validate(item) for item in response.json()]

    def get_topology(self, name: str) -> PersistedTopology:
        response = self._request("GET", f"/topologies/{name}")
        return PersistedTopology.model_validate(response.json())

    def save_topology(self, topology: PersistedTopology) -> PersistedTopology:
        """Store a topology under its name, replacing any previous version."""
        response = self._request(
            "PUT",
            f"/topologies/{topology.name}",
            json=topology.model_dump(by_alias=True, exclude={"last_updated"}),
        )
        logger.info(f"Saved topology {topology.name!r} with {len(topology.nodes)} nodes")
        return PersistedTopology.model_validate(response.json())

    def delete_topology(self, name: str) -> None:
        self._request("DELETE", f"/topologies/{name}")

    def open_session(self, name: str, strict: bool = False) -> EditSession:
        """Fetch a topology and the catalog and start editing."""
        topology = self.get_topology(name)
        return EditSession(topology, self.list_cache_groups(), strict=strict)
