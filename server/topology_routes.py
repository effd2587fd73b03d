"""API routes for topology management."""

import logging
import os

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from topology.analysis.validation import validate_topology
from topology.codec.tree import decode
from topology.errors import CacheGroupNotFoundError, MalformedTopologyError
from topology.models.editable import EditableNode
from topology.models.persisted import PersistedNode, PersistedTopology
from topology.utils.identifiers import utc_timestamp
from server.cache_group_db import list_cache_groups as db_list_cache_groups
from server.topology_db import (
    upsert_topology as db_upsert_topology,
    get_topology as db_get_topology,
    list_topologies as db_list_topologies,
    delete_topology as db_delete_topology,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# reject stored topologies with dangling parent indices instead of repairing them
STRICT_DECODE = os.getenv("TOPOLOGY_STRICT_DECODE", "false").lower() in {"1", "true", "yes"}


class UpsertTopologyRequest(BaseModel):
    """request body for creating or updating a topology."""

    model_config = {"populate_by_name": True}

    desc: str = Field(default="", alias="description")
    nodes: list[PersistedNode]


@router.get("/topologies")
def list_topologies() -> list[PersistedTopology]:
    """list all stored topologies."""
    return db_list_topologies()


@router.get("/topologies/{name}")
def get_topology(name: str) -> PersistedTopology:
    """get a specific topology."""
    topology = db_get_topology(name)
    if not topology:
        raise HTTPException(status_code=404, detail=f"Topology not found: {name}")
    return topology


@router.put("/topologies/{name}")
def upsert_topology(name: str, request: UpsertTopologyRequest) -> PersistedTopology:
    """create or update a topology.

    The topology must be structurally valid and may only use cache groups
    that exist in the catalog.
    """
    topology = PersistedTopology(
        name=name,
        desc=request.desc,
        nodes=request.nodes,
        last_updated=utc_timestamp(),
    )

    problems = validate_topology(topology)
    known = {cache_group.name for cache_group in db_list_cache_groups()}
    problems.extend(
        f"cache group {node.cachegroup} does not exist"
        for node in topology.nodes
        if node.cachegroup and node.cachegroup not in known
    )
    if problems:
        raise HTTPException(status_code=400, detail=problems)

    db_upsert_topology(topology)
    return topology


@router.get("/topologies/{name}/tree")
def get_topology_tree(name: str) -> EditableNode:
    """get a topology as a hydrated tree, ready for editing."""
    topology = db_get_topology(name)
    if not topology:
        raise HTTPException(status_code=404, detail=f"Topology not found: {name}")

    try:
        return decode(topology, db_list_cache_groups(), strict=STRICT_DECODE)
    except (CacheGroupNotFoundError, MalformedTopologyError) as e:
        logger.warning(f"Cannot build tree for topology {name!r}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/topologies/{name}")
def delete_topology(name: str) -> dict:
    """delete a topology."""
    if not db_get_topology(name):
        raise HTTPException(status_code=404, detail=f"Topology not found: {name}")
    db_delete_topology(name)
    return {"deleted": name}
