"""Tree walks and structural validation for topologies."""

from topology.analysis.validation import (
    ensure_valid,
    find_cycles,
    strongly_connected_components,
    validate_topology,
)
from topology.analysis.walk import (
    collect_cache_group_names,
    find_node,
    find_parent,
    iter_cache_group_nodes,
    iter_nodes,
    scrub_secondary_parent,
)

__all__ = [
    # walk exports
    "collect_cache_group_names",
    "find_node",
    "find_parent",
    "iter_cache_group_nodes",
    "iter_nodes",
    "scrub_secondary_parent",
    # validation exports
    "ensure_valid",
    "find_cycles",
    "strongly_connected_components",
    "validate_topology",
]
