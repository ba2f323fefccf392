"""Platform-owned store for the single-record ``InfoTable``."""

import sqlite3

from storage_platform.config import INFO_TABLE
from storage_platform.models import EmptyStoreError, TableRecord


class InfoStore:
    """CRUD operations for text records."""

    @staticmethod
    def insert(conn: sqlite3.Connection, text: str) -> int:
        """Insert a new record. Returns the id assigned by the store."""
        cursor = conn.execute(
            f"INSERT INTO {INFO_TABLE} (text) VALUES (?)",
            (text,),
        )
        conn.commit()
        return cursor.lastrowid

    @staticmethod
    def count(conn: sqlite3.Connection) -> int:
        row = conn.execute(f"SELECT COUNT(*) FROM {INFO_TABLE}").fetchone()
        return row[0]

    @staticmethod
    def read_first(conn: sqlite3.Connection) -> TableRecord:
        """Return the record with the lowest id.

        Callers are expected to check :meth:`count` first; an empty table
        raises ``EmptyStoreError``.
        """
        row = conn.execute(
            f"SELECT id, text FROM {INFO_TABLE} ORDER BY id ASC LIMIT 1"
        ).fetchone()
        if row is None:
            raise EmptyStoreError(f"{INFO_TABLE} is empty")
        return TableRecord(id=row["id"], text=row["text"])

    @staticmethod
    def read_first_text(conn: sqlite3.Connection) -> str:
        return InfoStore.read_first(conn).text

    @staticmethod
    def delete_all(conn: sqlite3.Connection) -> int:
        """Remove every record. Returns the number of rows deleted."""
        cursor = conn.execute(f"DELETE FROM {INFO_TABLE}")
        conn.commit()
        return cursor.rowcount
