"""Placement rules for editing a topology tree.

Every operation either applies its full set of changes or leaves the tree
untouched and returns a rejection with a message meant for the operator.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from topology.analysis.walk import (
    collect_cache_group_names,
    find_parent,
    iter_nodes,
    scrub_secondary_parent,
)
from topology.codec.hydrate import Catalog, catalog_by_name
from topology.errors import RejectedEdit
from topology.models.cache_group import CacheGroup
from topology.models.editable import EditableNode

logger = logging.getLogger(__name__)

NO_DESTINATION = "no destination"
ORG_LOC_TOP_LEVEL = "Cache groups of ORG_LOC type must be at the top of the topology tree."
EDGE_LOC_NO_CHILDREN = "Cache groups of EDGE_LOC type must not have children."
ROOT_NOT_REMOVABLE = "The topology root cannot be removed."
NOT_IN_TOPOLOGY = "The cache group is not part of the topology."
MOVE_BELOW_ITSELF = "A cache group cannot be moved below itself."


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit decision."""

    accepted: bool
    reason: str = ""

    def raise_if_rejected(self) -> "EditResult":
        if not self.accepted:
            raise RejectedEdit(self.reason)
        return self


ACCEPTED = EditResult(accepted=True)


def _reject(reason: str, node: EditableNode | None = None) -> EditResult:
    name = node.cachegroup if node is not None else None
    logger.info(f"Rejected topology edit for {name!r}: {reason}")
    return EditResult(accepted=False, reason=reason)


def can_attach(dragged: EditableNode, destination: EditableNode | None) -> EditResult:
    """Decide whether `dragged` may be placed under `destination`.

    On acceptance the dragged node's parent name is updated: the destination's
    cache group, or empty for the synthetic root (which also clears the
    secondary parent, since a root has none). A secondary parent equal to the
    new primary parent is cleared.

    The caller owns the children lists; this only updates the parent names.
    """
    if destination is None:
        return _reject(NO_DESTINATION, dragged)

    if dragged.is_origin and not destination.is_root:
        return _reject(ORG_LOC_TOP_LEVEL, dragged)

    if destination.is_edge:
        return _reject(EDGE_LOC_NO_CHILDREN, dragged)

    if destination is dragged or any(node is destination for node in iter_nodes(dragged)):
        return _reject(MOVE_BELOW_ITSELF, dragged)

    if destination.is_root:
        dragged.parent = ""
        dragged.sec_parent = ""
    else:
        dragged.parent = destination.cachegroup
        if dragged.sec_parent == dragged.parent:
            dragged.sec_parent = ""
    return ACCEPTED


def eligible_secondary_parents(
    node: EditableNode,
    forest: EditableNode,
    catalog: Catalog,
) -> list[CacheGroup]:
    """Cache groups that may become `node`'s secondary parent.

    A candidate must already be placed in the forest, must not be an
    EDGE_LOC group and must not be the node's primary parent. Root nodes
    have no candidates.
    """
    if not node.parent:
        return []

    in_topology = collect_cache_group_names(forest)
    return [
        cache_group
        for cache_group in catalog_by_name(catalog).values()
        if not cache_group.is_edge
        and cache_group.name != node.parent
        and cache_group.name in in_topology
    ]


def assign_secondary_parent(node: EditableNode, chosen: CacheGroup | str) -> None:
    """Set the secondary parent to a candidate picked from eligible_secondary_parents()."""
    node.sec_parent = chosen if isinstance(chosen, str) else chosen.name


def remove_node(forest: EditableNode, node: EditableNode) -> EditResult:
    """Detach `node` (and its subtree) from the forest.

    Secondary parent references to the removed cache group and to every
    cache group in its subtree are cleared first so none are left dangling.
    """
    if not node.cachegroup:
        return _reject(ROOT_NOT_REMOVABLE, node)

    parent = find_parent(forest, node)
    if parent is None:
        return _reject(NOT_IN_TOPOLOGY, node)

    removed = collect_cache_group_names(node) | {node.cachegroup}
    scrubbed = []
    for name in sorted(removed):
        scrubbed.extend(scrub_secondary_parent(forest, name))
    parent.children = [child for child in parent.children if child is not node]
    logger.info(
        f"Removed cache group {node.cachegroup!r} from topology, "
        f"cleared {len(scrubbed)} secondary parent reference(s)"
    )
    return ACCEPTED


def insert_nodes(parent: EditableNode, new_nodes: Iterable[EditableNode]) -> EditResult:
    """Put new nodes at the front of `parent`'s children.

    Nodes are inserted one at a time in the order given, each ahead of the
    previous one.
    """
    new_nodes = list(new_nodes)
    if parent.is_edge:
        return _reject(EDGE_LOC_NO_CHILDREN, parent)
    if not parent.is_root and any(node.is_origin for node in new_nodes):
        return _reject(ORG_LOC_TOP_LEVEL, parent)

    for node in new_nodes:
        parent.children.insert(0, node)
    return ACCEPTED
