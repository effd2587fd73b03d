"""Tests for the cache group and topology API routes."""

import pytest
from fastapi.testclient import TestClient

from server import cache_group_db, topology_db
from server.app import app


@pytest.fixture
def client(monkeypatch, tmp_path):
    """API client backed by a fresh sqlite file."""
    monkeypatch.setattr(topology_db, "TOPOLOGY_DB_PATH", tmp_path / "topology.db")
    with TestClient(app) as test_client:
        yield test_client


def _seed_catalog(client: TestClient) -> None:
    for cache_group_id, name, type_name in [
        ("1", "origin", "ORG_LOC"),
        ("2", "mid-a", "MID_LOC"),
        ("3", "mid-b", "MID_LOC"),
        ("4", "edge-1", "EDGE_LOC"),
    ]:
        response = client.put(f"/api/cachegroups/{name}", json={"id": cache_group_id, "typeName": type_name})
        assert response.status_code == 200


TOPOLOGY_BODY = {
    "description": "two mids",
    "nodes": [
        {"cachegroup": "origin", "parents": []},
        {"cachegroup": "mid-a", "parents": [0]},
        {"cachegroup": "mid-b", "parents": [0]},
        {"cachegroup": "edge-1", "parents": [1, 2]},
    ],
}


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestCacheGroupRoutes:
    """Test the catalog endpoints."""

    def test_put_and_list(self, client):
        _seed_catalog(client)

        response = client.get("/api/cachegroups")

        assert response.status_code == 200
        names = [cg["name"] for cg in response.json()]
        assert names == ["edge-1", "mid-a", "mid-b", "origin"]
        assert response.json()[0]["typeName"] == "EDGE_LOC"

    def test_get_missing(self, client):
        assert client.get("/api/cachegroups/nope").status_code == 404

    def test_delete_unused(self, client):
        _seed_catalog(client)

        response = client.delete("/api/cachegroups/mid-b")

        assert response.status_code == 200
        assert client.get("/api/cachegroups/mid-b").status_code == 404

    def test_delete_used_conflicts(self, client):
        _seed_catalog(client)
        client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        response = client.delete("/api/cachegroups/mid-a")

        assert response.status_code == 409
        assert "cdn" in response.json()["detail"]


class TestTopologyRoutes:
    """Test the topology endpoints."""

    def test_put_and_get(self, client):
        _seed_catalog(client)

        response = client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "cdn"
        assert body["description"] == "two mids"
        assert body["lastUpdated"]

        fetched = client.get("/api/topologies/cdn").json()
        assert fetched["nodes"] == TOPOLOGY_BODY["nodes"]
        assert [t["name"] for t in client.get("/api/topologies").json()] == ["cdn"]

    def test_put_replaces(self, client):
        _seed_catalog(client)
        client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        client.put("/api/topologies/cdn", json={"description": "origin only", "nodes": [{"cachegroup": "origin"}]})

        fetched = client.get("/api/topologies/cdn").json()
        assert fetched["description"] == "origin only"
        assert len(fetched["nodes"]) == 1

    def test_put_rejects_cycles(self, client):
        _seed_catalog(client)
        body = {"nodes": [
            {"cachegroup": "mid-a", "parents": [1]},
            {"cachegroup": "mid-b", "parents": [0]},
        ]}

        response = client.put("/api/topologies/loop", json=body)

        assert response.status_code == 400
        assert any("cycle" in problem for problem in response.json()["detail"])
        assert client.get("/api/topologies/loop").status_code == 404

    def test_put_rejects_unknown_cache_group(self, client):
        _seed_catalog(client)
        body = {"nodes": [{"cachegroup": "ghost", "parents": []}]}

        response = client.put("/api/topologies/haunted", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == ["cache group ghost does not exist"]

    def test_get_tree(self, client):
        _seed_catalog(client)
        client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        response = client.get("/api/topologies/cdn/tree")

        assert response.status_code == 200
        root = response.json()
        assert root["cachegroup"] is None
        origin = root["children"][0]
        assert origin["cachegroup"] == "origin"
        assert origin["type"] == "ORG_LOC"
        mid_a = origin["children"][0]
        edge = mid_a["children"][0]
        assert edge["parent"] == "mid-a"
        assert edge["secParent"] == "mid-b"

    def test_tree_with_deleted_cache_group(self, client):
        """Stored topologies whose cache groups vanished cannot be opened."""
        _seed_catalog(client)
        client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        cache_group_db.delete_cache_group("edge-1")

        response = client.get("/api/topologies/cdn/tree")

        assert response.status_code == 400
        assert "edge-1" in response.json()["detail"]

    def test_missing_topology(self, client):
        assert client.get("/api/topologies/none").status_code == 404
        assert client.get("/api/topologies/none/tree").status_code == 404
        assert client.delete("/api/topologies/none").status_code == 404

    def test_delete(self, client):
        _seed_catalog(client)
        client.put("/api/topologies/cdn", json=TOPOLOGY_BODY)

        assert client.delete("/api/topologies/cdn").json() == {"deleted": "cdn"}
        assert client.get("/api/topologies/cdn").status_code == 404
