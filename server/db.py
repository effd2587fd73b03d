"""database initialization helpers."""

from server.cache_group_db import init_db as init_cache_group_db
from server.topology_db import init_db as init_topology_db


def init_all() -> None:
    """initialize all sqlite tables."""
    init_cache_group_db()
    init_topology_db()
