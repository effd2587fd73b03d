"""SQLite storage for topologies."""

import logging
import os
import sqlite3
from pathlib import Path

from topology.models.persisted import PersistedTopology

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent / "data" / "topology.db"
TOPOLOGY_DB_PATH = Path(os.getenv("TOPOLOGY_DB_PATH", str(DEFAULT_DB_PATH)))


def connect() -> sqlite3.Connection:
    TOPOLOGY_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(TOPOLOGY_DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    with connect() as conn:
        conn.execute(
            """
            create table if not exists topologies (
                name text primary key,
                topology_json text not null,
                last_updated text not null
            )
            """
        )
        conn.commit()


def upsert_topology(topology: PersistedTopology) -> None:
    """insert or update a topology."""
    with connect() as conn:
        conn.execute(
            """
            insert into topologies (name, topology_json, last_updated)
            values (?, ?, ?)
            on conflict(name) do update set
                topology_json = excluded.topology_json,
                last_updated = excluded.last_updated
            """,
            (
                topology.name,
                topology.model_dump_json(by_alias=True),
                topology.last_updated,
            ),
        )
        conn.commit()
    logger.info(f"Stored topology {topology.name!r} ({len(topology.nodes)} nodes)")


def get_topology(name: str) -> PersistedTopology | None:
    with connect() as conn:
        row = conn.execute(
            "select topology_json from topologies where name = ?",
            (name,),
        ).fetchone()
    if not row:
        return None
    return PersistedTopology.model_validate_json(row["topology_json"])


def list_topologies() -> list[PersistedTopology]:
    with connect() as conn:
        rows = conn.execute(
            "select topology_json from topologies order by name"
        ).fetchall()
    return [PersistedTopology.model_validate_json(row["topology_json"]) for row in rows]


def delete_topology(name: str) -> None:
    with connect() as conn:
        conn.execute("delete from topologies where name = ?", (name,))
        conn.commit()
