"""Convert between the persisted node list and the editable tree.

decode() places nodes through an arena of list positions: edges stay integer
indices until the very end, where parent names are filled in for the
editable form. encode() goes the other way by flattening the tree in
pre-order and resolving names to positions in the new list.
"""

import logging

from topology.analysis.validation import ensure_valid
from topology.analysis.walk import iter_cache_group_nodes
from topology.codec.hydrate import Catalog, hydrate
from topology.models.editable import EditableNode
from topology.models.persisted import HydratedNode, PersistedNode, PersistedTopology

logger = logging.getLogger(__name__)


def _resolves(position: int, count: int) -> bool:
    return 0 <= position < count


def _editable(node: PersistedNode) -> EditableNode:
    if isinstance(node, HydratedNode):
        return EditableNode(cachegroup=node.cachegroup, id=node.id, type=node.type)
    return EditableNode(cachegroup=node.cachegroup)


def decode(
    topology: PersistedTopology,
    catalog: Catalog | None = None,
    strict: bool = False,
) -> EditableNode:
    """Build the editable tree for a persisted topology.

    Only the primary parent places a node in the tree; the secondary parent
    is kept as a name on the node. Children keep the order they have in the
    persisted list.

    A node whose primary parent index points outside the list is treated as
    a root. Pass strict=True to reject such data (and any other structural
    problem, cycles included) instead.

    Args:
        topology: the persisted topology.
        catalog: optional cache group catalog; when given, nodes are hydrated
            first so the tree carries ids and types.
        strict: raise MalformedTopologyError on malformed input.

    Returns:
        The synthetic root whose children are the topology's root nodes.
    """
    if strict:
        ensure_valid(topology)

    nodes: list[PersistedNode] = list(topology.nodes)
    if catalog is not None:
        nodes = hydrate(nodes, catalog)

    count = len(nodes)
    arena = [_editable(node) for node in nodes]
    children: list[list[int]] = [[] for _ in nodes]
    roots: list[int] = []

    for position, node in enumerate(nodes):
        parents = node.parents
        if not parents:
            roots.append(position)
            continue

        primary = parents[0]
        if not _resolves(primary, count):
            logger.warning(
                f"Topology {topology.name!r}: {node.cachegroup} has unknown parent "
                f"index {primary}, placing it at the top"
            )
            roots.append(position)
            continue

        children[primary].append(position)
        arena[position].parent = nodes[primary].cachegroup
        if len(parents) > 1 and _resolves(parents[1], count):
            arena[position].sec_parent = nodes[parents[1]].cachegroup

    for position, child_positions in enumerate(children):
        arena[position].children.extend(arena[child] for child in child_positions)

    root = EditableNode()
    root.children.extend(arena[position] for position in roots)
    logger.debug(f"Decoded topology {topology.name!r}: {count} nodes, {len(roots)} roots")
    return root


def encode(forest: EditableNode, name: str, desc: str = "") -> PersistedTopology:
    """Flatten the editable tree back into a persisted topology.

    Nodes are emitted in pre-order. Parent names are resolved against the
    emitted list: an unknown primary parent leaves the node without parents,
    an unknown secondary parent is dropped.
    """
    flat = list(iter_cache_group_nodes(forest))

    positions: dict[str, int] = {}
    for position, node in enumerate(flat):
        positions.setdefault(node.cachegroup, position)

    persisted = []
    for node in flat:
        parents = []
        primary = positions.get(node.parent)
        if primary is not None:
            parents.append(primary)
            secondary = positions.get(node.sec_parent)
            if secondary is not None:
                parents.append(secondary)
        persisted.append(PersistedNode(cachegroup=node.cachegroup, parents=parents))

    logger.debug(f"Encoded topology {name!r}: {len(persisted)} nodes")
    return PersistedTopology(name=name, desc=desc, nodes=persisted)
