"""Persisted (flat) form of a topology.

Each node refers to its parents by position in the topology's node list:
parents[0] is the primary parent, parents[1] the optional secondary parent.
A node with no parents is a root of the forest.
"""

from pydantic import BaseModel, Field


class PersistedNode(BaseModel):
    """a cache group placed in a topology."""

    cachegroup: str
    parents: list[int] = Field(default_factory=list)


class HydratedNode(PersistedNode):
    """a persisted node joined with its catalog record."""

    id: str
    type: str


class PersistedTopology(BaseModel):
    """a named topology in the form it is stored and sent over the wire."""

    model_config = {"populate_by_name": True}

    name: str
    desc: str = Field(default="", alias="description")
    nodes: list[PersistedNode] = Field(default_factory=list)
    last_updated: str | None = Field(default=None, alias="lastUpdated")
