"""API routes for the cache group catalog."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from topology.models.cache_group import CacheGroup
from server.cache_group_db import (
    upsert_cache_group as db_upsert_cache_group,
    get_cache_group as db_get_cache_group,
    list_cache_groups as db_list_cache_groups,
    delete_cache_group as db_delete_cache_group,
)
from server.topology_db import list_topologies as db_list_topologies

router = APIRouter()


class UpsertCacheGroupRequest(BaseModel):
    """request body for creating or updating a cache group."""

    model_config = {"populate_by_name": True}

    id: str
    type_name: str = Field(alias="typeName")


@router.get("/cachegroups")
def list_cache_groups() -> list[CacheGroup]:
    """list the whole catalog."""
    return db_list_cache_groups()


@router.get("/cachegroups/{name}")
def get_cache_group(name: str) -> CacheGroup:
    """get a single cache group."""
    cache_group = db_get_cache_group(name)
    if not cache_group:
        raise HTTPException(status_code=404, detail=f"Cache group not found: {name}")
    return cache_group


@router.put("/cachegroups/{name}")
def upsert_cache_group(name: str, request: UpsertCacheGroupRequest) -> CacheGroup:
    """create or update a cache group."""
    cache_group = CacheGroup(id=request.id, name=name, type_name=request.type_name)
    db_upsert_cache_group(cache_group)
    return cache_group


@router.delete("/cachegroups/{name}")
def delete_cache_group(name: str) -> dict:
    """delete a cache group that no topology uses."""
    if not db_get_cache_group(name):
        raise HTTPException(status_code=404, detail=f"Cache group not found: {name}")

    users = [
        topology.name
        for topology in db_list_topologies()
        if any(node.cachegroup == name for node in topology.nodes)
    ]
    if users:
        raise HTTPException(
            status_code=409,
            detail=f"Cache group {name} is used by topologies: {', '.join(users)}",
        )

    db_delete_cache_group(name)
    return {"deleted": name}
