"""SQLite storage for the cache group catalog."""

from server import topology_db
from topology.models.cache_group import CacheGroup


def init_db() -> None:
    with topology_db.connect() as conn:
        conn.execute(
            """
            create table if not exists cache_groups (
                name text primary key,
                group_json text not null,
                type_name text not null
            )
            """
        )
        conn.execute(
            "create index if not exists idx_cache_groups_type_name on cache_groups(type_name)"
        )
        conn.commit()


def upsert_cache_group(cache_group: CacheGroup) -> None:
    """insert or update a cache group."""
    with topology_db.connect() as conn:
        conn.execute(
            """
            insert into cache_groups (name, group_json, type_name)
            values (?, ?, ?)
            on conflict(name) do update set
                group_json = excluded.group_json,
                type_name = excluded.type_name
            """,
            (
                cache_group.name,
                cache_group.model_dump_json(by_alias=True),
                cache_group.type_name,
            ),
        )
        conn.commit()


def get_cache_group(name: str) -> CacheGroup | None:
    with topology_db.connect() as conn:
        row = conn.execute(
            "select group_json from cache_groups where name = ?",
            (name,),
        ).fetchone()
    if not row:
        return None
    return CacheGroup.model_validate_json(row["group_json"])


def list_cache_groups() -> list[CacheGroup]:
    with topology_db.connect() as conn:
        rows = conn.execute(
            "select group_json from cache_groups order by name"
        ).fetchall()
    return [CacheGroup.model_validate_json(row["group_json"]) for row in rows]


def delete_cache_group(name: str) -> None:
    with topology_db.connect() as conn:
        conn.execute("delete from cache_groups where name = ?", (name,))
        conn.commit()
