"""Data models for topologies and cache groups."""

from topology.models.cache_group import CacheGroup, CacheGroupType
from topology.models.editable import ROOT_LABEL, EditableNode, node_label
from topology.models.persisted import (
    HydratedNode,
    PersistedNode,
    PersistedTopology,
)

__all__ = [
    # Catalog
    "CacheGroup",
    "CacheGroupType",
    # Persisted form
    "HydratedNode",
    "PersistedNode",
    "PersistedTopology",
    # Editable form
    "EditableNode",
    "ROOT_LABEL",
    "node_label",
]
