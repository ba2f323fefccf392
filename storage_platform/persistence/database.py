"""Platform-owned SQLite database primitives."""

import logging
import sqlite3
from pathlib import Path

from storage_platform.config import DB_NAME, INFO_TABLE

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def get_db_path(files_dir: Path) -> Path:
    """Return the path to the ``Info`` database under the app-private dir."""
    return files_dir / "databases" / DB_NAME


def get_connection(files_dir: Path) -> sqlite3.Connection:
    """Open (or create) the Info database and ensure the schema exists.

    The caller is responsible for closing the connection. Connections are
    bound to the thread that opened them.
    """
    db_path = get_db_path(files_dir)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        init_db(conn)
    except Exception:
        conn.close()
        raise
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables if they don't exist.

    There is no migration path: a database written with any other schema
    version is wiped and recreated.
    """
    current = _stored_version(conn)
    if current is not None and current != SCHEMA_VERSION:
        _drop_all(conn, current)

    conn.executescript(_SCHEMA_SQL)
    if current != SCHEMA_VERSION:
        conn.execute(
            "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()


def _stored_version(conn: sqlite3.Connection):
    """Return the recorded schema version, or None for a fresh database."""
    row = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if row is None:
        return None
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0]


def _drop_all(conn: sqlite3.Connection, found_version) -> None:
    logger.info(
        "Schema version %s does not match %s; recreating database",
        found_version, SCHEMA_VERSION,
    )
    conn.execute(f"DROP TABLE IF EXISTS {INFO_TABLE}")
    conn.execute("DROP TABLE IF EXISTS schema_version")
    conn.commit()


_SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS {INFO_TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    text TEXT
);
"""


__all__ = ["SCHEMA_VERSION", "get_db_path", "get_connection", "init_db"]
