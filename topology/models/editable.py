"""Editable (tree) form of a topology.

The forest is wrapped in a synthetic root node with no cache group. Every
other node carries the names of its primary and secondary parents so the
tree can be flattened back without looking anything up.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from topology.models.cache_group import CacheGroupType

ROOT_LABEL = "TOPOLOGY ROOT (ORIGIN LAYER)"


class EditableNode(BaseModel):
    """a node of the editable topology tree."""

    model_config = {"populate_by_name": True}

    cachegroup: str | None = None  # None only for the synthetic root
    id: str | None = None
    type: str | None = None
    parent: str = ""
    sec_parent: str = Field(default="", alias="secParent")
    children: list[EditableNode] = Field(default_factory=list)

    @property
    def is_root(self) -> bool:
        """True for the synthetic root that wraps the forest."""
        return not self.cachegroup

    @property
    def is_edge(self) -> bool:
        return self.type == CacheGroupType.EDGE_LOC

    @property
    def is_origin(self) -> bool:
        return self.type == CacheGroupType.ORG_LOC


def node_label(node: EditableNode) -> str:
    """Display label for a tree node, e.g. "mid-east [MID_LOC]"."""
    if node.is_root:
        return ROOT_LABEL
    return f"{node.cachegroup} [{node.type}]"
