"""CDN topology editing: persisted/tree conversion and placement rules."""

from topology.codec import decode, encode, hydrate
from topology.errors import (
    CacheGroupNotFoundError,
    MalformedTopologyError,
    RejectedEdit,
    TopologyClientError,
    TopologyError,
)
from topology.models import (
    CacheGroup,
    CacheGroupType,
    EditableNode,
    HydratedNode,
    PersistedNode,
    PersistedTopology,
    node_label,
)
from topology.sdk import EditSession, TopologyClient

__all__ = [
    # Models
    "CacheGroup",
    "CacheGroupType",
    "EditableNode",
    "HydratedNode",
    "PersistedNode",
    "PersistedTopology",
    "node_label",
    # Codec
    "decode",
    "encode",
    "hydrate",
    # Errors
    "CacheGroupNotFoundError",
    "MalformedTopologyError",
    "RejectedEdit",
    "TopologyClientError",
    "TopologyError",
    # High-level APIs
    "EditSession",
    "TopologyClient",
]
