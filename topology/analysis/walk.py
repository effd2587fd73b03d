"""Depth-first walks over the editable topology tree.

All helpers are pure functions of the tree they are given; callers recompute
results after every structural change instead of caching them.
"""

from collections.abc import Iterator

from topology.models.editable import EditableNode


def iter_nodes(root: EditableNode) -> Iterator[EditableNode]:
    """Yield every node below `root` in pre-order, `root` excluded."""
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_cache_group_nodes(root: EditableNode) -> Iterator[EditableNode]:
    """Pre-order walk yielding only nodes that carry a cache group."""
    for node in iter_nodes(root):
        if node.cachegroup:
            yield node


def collect_cache_group_names(root: EditableNode) -> set[str]:
    """Names of all cache groups currently placed in the tree."""
    return {node.cachegroup for node in iter_cache_group_nodes(root)}


def find_node(root: EditableNode, cachegroup: str) -> EditableNode | None:
    """First node (pre-order) placing the given cache group."""
    for node in iter_nodes(root):
        if node.cachegroup == cachegroup:
            return node
    return None


def find_parent(root: EditableNode, target: EditableNode) -> EditableNode | None:
    """The node whose children list holds `target` (compared by identity)."""
    stack = [root]
    while stack:
        node = stack.pop()
        for child in node.children:
            if child is target:
                return node
            stack.append(child)
    return None


def scrub_secondary_parent(root: EditableNode, cachegroup: str) -> list[EditableNode]:
    """Clear every secondary parent reference to `cachegroup`.

    Returns:
        The nodes that were changed.
    """
    scrubbed = []
    for node in iter_nodes(root):
        if node.sec_parent and node.sec_parent == cachegroup:
            node.sec_parent = ""
            scrubbed.append(node)
    return scrubbed
