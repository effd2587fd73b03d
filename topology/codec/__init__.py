"""Conversion between persisted and editable topologies."""

from topology.codec.hydrate import Catalog, catalog_by_name, hydrate
from topology.codec.tree import decode, encode

__all__ = [
    "Catalog",
    "catalog_by_name",
    "decode",
    "encode",
    "hydrate",
]
