"""Interactive editing session over a single topology.

Ties the codec and the edit rules together the way an editor front end uses
them: load once, apply gestures one at a time, save.

Example:
    session = EditSession(topology, cache_groups)
    mid = session.find("mid-east")
    session.add_cache_groups(mid, [edge_group])
    persisted = session.save()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from topology.analysis.walk import collect_cache_group_names, find_node, find_parent
from topology.codec.hydrate import Catalog, catalog_by_name
from topology.codec.tree import decode, encode
from topology.errors import RejectedEdit
from topology.guard.edit_guard import (
    NOT_IN_TOPOLOGY,
    assign_secondary_parent,
    can_attach,
    eligible_secondary_parents,
    insert_nodes,
    remove_node,
)
from topology.models.cache_group import CacheGroup
from topology.models.editable import EditableNode
from topology.models.persisted import PersistedTopology

logger = logging.getLogger(__name__)

# receives the eligible cache groups and a prompt, returns the pick or None on cancel
SecondaryParentChooser = Callable[[list[CacheGroup], str], "CacheGroup | None"]


class EditSession:
    """Owns the editable tree of one topology for the length of an edit.

    Every gesture either applies completely or raises RejectedEdit with a
    message for the operator and leaves the tree as it was.
    """

    def __init__(
        self,
        topology: PersistedTopology,
        catalog: Catalog,
        strict: bool = False,
    ) -> None:
        """
        Args:
            topology: the stored topology to edit.
            catalog: all known cache groups.
            strict: reject malformed stored data instead of repairing it.

        Raises:
            CacheGroupNotFoundError: a node's cache group is not in the catalog.
            MalformedTopologyError: strict is set and the topology is malformed.
        """
        self.topology = topology
        self.catalog = catalog_by_name(catalog)
        self.forest = decode(topology, self.catalog, strict=strict)

    def find(self, cachegroup: str) -> EditableNode | None:
        """Node placing the given cache group, if any."""
        return find_node(self.forest, cachegroup)

    def used_cache_group_names(self) -> set[str]:
        return collect_cache_group_names(self.forest)

    def available_cache_groups(self) -> list[CacheGroup]:
        """Catalog entries not yet placed in the topology."""
        used = self.used_cache_group_names()
        return [cg for cg in self.catalog.values() if cg.name not in used]

    def _require_placed(self, node: EditableNode) -> EditableNode:
        parent = find_parent(self.forest, node)
        if parent is None:
            raise RejectedEdit(NOT_IN_TOPOLOGY, {"cachegroup": node.cachegroup})
        return parent

    def move(self, node: EditableNode, destination: EditableNode | None, position: int = 0) -> None:
        """Drag `node` with its subtree under `destination` at the given index."""
        old_parent = self._require_placed(node)
        if destination is not None and not destination.is_root:
            self._require_placed(destination)

        can_attach(node, destination).raise_if_rejected()

        old_parent.children = [child for child in old_parent.children if child is not node]
        destination.children.insert(position, node)
        logger.info(f"Moved cache group {node.cachegroup!r} under {destination.cachegroup or 'the root'!r}")

    def edit_secondary_parent(
        self,
        node: EditableNode,
        chooser: SecondaryParentChooser,
        verify: bool = False,
    ) -> CacheGroup | None:
        """Ask `chooser` for a secondary parent and assign it.

        Nodes without a primary parent cannot have a secondary one; nothing is
        asked in that case.

        Args:
            node: the node to edit.
            chooser: picks one of the eligible cache groups, or None to cancel.
            verify: re-check the pick against the current tree before assigning,
                also refusing the node itself and its own descendants.

        Returns:
            The assigned cache group, or None when nothing changed.
        """
        if not node.parent:
            return None

        candidates = eligible_secondary_parents(node, self.forest, self.catalog)
        message = (
            f"Please select a secondary parent that is part of the "
            f"{self.topology.name} topology"
        )
        chosen = chooser(candidates, message)
        if chosen is None:
            return None

        if verify:
            eligible = {cg.name for cg in eligible_secondary_parents(node, self.forest, self.catalog)}
            # the node itself or one of its descendants would close a cycle
            eligible -= collect_cache_group_names(node) | {node.cachegroup}
            if chosen.name not in eligible:
                raise RejectedEdit(
                    f"{chosen.name} cannot be the secondary parent of {node.cachegroup}.",
                    {"cachegroup": node.cachegroup, "secParent": chosen.name},
                )

        assign_secondary_parent(node, chosen)
        return chosen

    def delete(self, node: EditableNode) -> None:
        """Remove a node with its subtree."""
        remove_node(self.forest, node).raise_if_rejected()

    def add_cache_groups(
        self,
        parent: EditableNode,
        cache_groups: Iterable[CacheGroup],
        sec_parent: str = "",
    ) -> list[EditableNode]:
        """Place catalog cache groups as new children of `parent`.

        A secondary parent given for the new nodes must already be placed in
        the topology, must not be an EDGE_LOC group and must differ from
        `parent`. It is ignored when `parent` is the root.

        Returns:
            The created nodes, in the order they were given.
        """
        cache_groups = list(cache_groups)
        used = self.used_cache_group_names()
        for cache_group in cache_groups:
            if cache_group.name in used:
                raise RejectedEdit(
                    f"Cache group {cache_group.name} is already part of the topology.",
                    {"cachegroup": cache_group.name},
                )
            used.add(cache_group.name)

        if not parent.cachegroup:
            sec_parent = ""
        if sec_parent:
            self._check_new_secondary_parent(parent, sec_parent)

        new_nodes = [
            EditableNode(
                id=cache_group.id,
                cachegroup=cache_group.name,
                type=cache_group.type_name,
                parent=parent.cachegroup or "",
                sec_parent=sec_parent,
            )
            for cache_group in cache_groups
        ]
        insert_nodes(parent, new_nodes).raise_if_rejected()
        return new_nodes

    def _check_new_secondary_parent(self, parent: EditableNode, sec_parent: str) -> None:
        secondary = find_node(self.forest, sec_parent)
        if sec_parent == parent.cachegroup or secondary is None or secondary.is_edge:
            raise RejectedEdit(
                f"{sec_parent} cannot be the secondary parent of cache groups "
                f"placed under {parent.cachegroup}.",
                {"cachegroup": parent.cachegroup, "secParent": sec_parent},
            )

    def save(self, name: str | None = None, desc: str | None = None) -> PersistedTopology:
        """Flatten the current tree, keeping the loaded name/description unless given."""
        return encode(
            self.forest,
            name if name is not None else self.topology.name,
            desc if desc is not None else self.topology.desc,
        )
