"""Edit-time placement rules for topology trees."""

from topology.guard.edit_guard import (
    EDGE_LOC_NO_CHILDREN,
    NO_DESTINATION,
    ORG_LOC_TOP_LEVEL,
    EditResult,
    assign_secondary_parent,
    can_attach,
    eligible_secondary_parents,
    insert_nodes,
    remove_node,
)

__all__ = [
    "EDGE_LOC_NO_CHILDREN",
    "NO_DESTINATION",
    "ORG_LOC_TOP_LEVEL",
    "EditResult",
    "assign_secondary_parent",
    "can_attach",
    "eligible_secondary_parents",
    "insert_nodes",
    "remove_node",
]
