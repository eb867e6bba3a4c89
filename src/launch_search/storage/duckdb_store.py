"""DuckDB-based blob store."""

from datetime import datetime
from pathlib import Path

import duckdb

from launch_search.exceptions import PersistenceConnectionError, PersistenceError
from launch_search.storage.base import BlobStore


class DuckDBBlobStore(BlobStore):
    """DuckDB-backed key/blob store for persisted engine state.

    Attributes:
        db_path: Path to the DuckDB database file, or None for in-memory.
    """

    _CREATE_TABLE = """
        CREATE TABLE IF NOT EXISTS blob_store (
            blob_key VARCHAR PRIMARY KEY,
            blob_value VARCHAR NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """

    _INSERT_OR_REPLACE = """
        INSERT OR REPLACE INTO blob_store (blob_key, blob_value, updated_at)
        VALUES (?, ?, ?)
    """

    _SELECT_BY_KEY = "SELECT blob_value FROM blob_store WHERE blob_key = ?"

    _DELETE_BY_KEY = "DELETE FROM blob_store WHERE blob_key = ?"

    _SELECT_KEYS = "SELECT blob_key FROM blob_store ORDER BY blob_key"

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to the database file. If None, uses in-memory database.
        """
        self.db_path = Path(db_path) if db_path else None
        self._conn: duckdb.DuckDBPyConnection | None = None
        self._init_db()

    def _init_db(self) -> None:
        """Open the connection and create the schema."""
        try:
            if self.db_path:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = duckdb.connect(str(self.db_path))
            else:
                self._conn = duckdb.connect(":memory:")
            self._conn.execute(self._CREATE_TABLE)
        except (duckdb.Error, OSError) as e:
            raise PersistenceConnectionError(
                f"Failed to open state database {self.db_path or ':memory:'}: {e}"
            ) from e

    def _ensure_connection(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            self._init_db()
        if self._conn is None:
            raise PersistenceConnectionError("Database connection not available")
        return self._conn

    def get(self, key: str) -> str | None:
        try:
            row = self._ensure_connection().execute(self._SELECT_BY_KEY, [key]).fetchone()
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to read {key!r}: {e}") from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self._ensure_connection().execute(
                self._INSERT_OR_REPLACE, [key, value, datetime.now()]
            )
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to write {key!r}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            conn = self._ensure_connection()
            existed = conn.execute(self._SELECT_BY_KEY, [key]).fetchone() is not None
            if existed:
                conn.execute(self._DELETE_BY_KEY, [key])
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to delete {key!r}: {e}") from e
        return existed

    def keys(self) -> list[str]:
        try:
            rows = self._ensure_connection().execute(self._SELECT_KEYS).fetchall()
        except duckdb.Error as e:
            raise PersistenceError(f"Failed to list keys: {e}") from e
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
