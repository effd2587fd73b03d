"""Cache group catalog records.

A cache group is a named group of caching servers with a declared type.
Only two types matter for topology placement: ORG_LOC groups sit at the
top of a topology and EDGE_LOC groups serve clients and never have children.
"""

from enum import Enum

from pydantic import BaseModel, Field


class CacheGroupType(str, Enum):
    """Known cache group kinds."""

    EDGE_LOC = "EDGE_LOC"
    MID_LOC = "MID_LOC"
    ORG_LOC = "ORG_LOC"
    TR_LOC = "TR_LOC"  # traffic router
    TC_LOC = "TC_LOC"  # traffic control components


class CacheGroup(BaseModel):
    """a cache group as returned by the catalog."""

    model_config = {"populate_by_name": True}

    id: str
    name: str
    type_name: str = Field(alias="typeName")

    @property
    def is_edge(self) -> bool:
        return self.type_name == CacheGroupType.EDGE_LOC
