"""Seed a running topology server with a sample catalog and topology.

Builds a small two-tier CDN: one origin, two mid tiers and a handful of
edge groups, with each edge failing over to the other mid tier.

    python -m topology.scripts.seed_topology --base-url http://localhost:8000
"""

import argparse

from topology.models.cache_group import CacheGroup
from topology.models.persisted import PersistedTopology
from topology.sdk.client import TopologyClient
from topology.sdk.session import EditSession


def create_sample_catalog() -> list[CacheGroup]:
    """Catalog used by the sample topology."""
    return [
        CacheGroup(id="1", name="origin-east", type_name="ORG_LOC"),
        CacheGroup(id="2", name="mid-east", type_name="MID_LOC"),
        CacheGroup(id="3", name="mid-west", type_name="MID_LOC"),
        CacheGroup(id="4", name="edge-nyc", type_name="EDGE_LOC"),
        CacheGroup(id="5", name="edge-bos", type_name="EDGE_LOC"),
        CacheGroup(id="6", name="edge-sfo", type_name="EDGE_LOC"),
    ]


def create_sample_topology(name: str = "demo-topology") -> PersistedTopology:
    """Lay out the sample topology with an edit session, then flatten it."""
    catalog = {cg.name: cg for cg in create_sample_catalog()}
    session = EditSession(PersistedTopology(name=name, desc="Sample two-tier topology"), catalog)

    session.add_cache_groups(session.forest, [catalog["origin-east"]])
    origin = session.find("origin-east")
    session.add_cache_groups(origin, [catalog["mid-west"], catalog["mid-east"]])

    session.add_cache_groups(session.find("mid-east"), [catalog["edge-nyc"], catalog["edge-bos"]], sec_parent="mid-west")
    session.add_cache_groups(session.find("mid-west"), [catalog["edge-sfo"]], sec_parent="mid-east")
    return session.save()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a topology server with sample data")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--name", default="demo-topology")
    args = parser.parse_args()

    client = TopologyClient(base_url=args.base_url)
    for cache_group in create_sample_catalog():
        client.put_cache_group(cache_group)
    saved = client.save_topology(create_sample_topology(args.name))

    print(f"Seeded topology {saved.name} with {len(saved.nodes)} nodes")
    for position, node in enumerate(saved.nodes):
        print(f"  [{position}] {node.cachegroup} parents={node.parents}")


if __name__ == "__main__":
    main()
