"""Join persisted topology nodes with cache group catalog records."""

import logging
from collections.abc import Iterable, Mapping

from topology.errors import CacheGroupNotFoundError
from topology.models.cache_group import CacheGroup
from topology.models.persisted import HydratedNode, PersistedNode

logger = logging.getLogger(__name__)

Catalog = Mapping[str, CacheGroup] | Iterable[CacheGroup]


def catalog_by_name(catalog: Catalog) -> dict[str, CacheGroup]:
    """Normalize a catalog to a name -> CacheGroup mapping."""
    if isinstance(catalog, Mapping):
        return dict(catalog)
    return {cache_group.name: cache_group for cache_group in catalog}


def hydrate(nodes: list[PersistedNode], catalog: Catalog) -> list[HydratedNode]:
    """Attach the catalog id and type to every node.

    Args:
        nodes: persisted nodes, in topology order.
        catalog: cache groups keyed by name, or any iterable of them.

    Returns:
        New HydratedNode objects in the same order.

    Raises:
        CacheGroupNotFoundError: a node names a cache group missing from the
            catalog. Nothing is returned in that case.
    """
    by_name = catalog_by_name(catalog)
    hydrated = []
    for node in nodes:
        cache_group = by_name.get(node.cachegroup)
        if cache_group is None:
            logger.warning(f"Cannot hydrate topology node, unknown cache group {node.cachegroup!r}")
            raise CacheGroupNotFoundError(node.cachegroup)
        hydrated.append(HydratedNode(
            cachegroup=node.cachegroup,
            parents=list(node.parents),
            id=cache_group.id,
            type=cache_group.type_name,
        ))
    return hydrated
