"""Persistence for engine state.

The only persisted artifact is the learning table, stored as an opaque
JSON blob. ``DuckDBBlobStore`` keeps it on disk; ``MemoryBlobStore`` is
used when learning persistence is disabled.

Usage:
    from launch_search.storage import DuckDBBlobStore

    store = DuckDBBlobStore("~/.cache/launch-search/state.duckdb")
    store.set("learning", '{"fire": {"firefox.desktop": 1}}')
    raw = store.get("learning")
"""

from launch_search.storage.base import BlobStore, MemoryBlobStore
from launch_search.storage.duckdb_store import DuckDBBlobStore

__all__ = [
    "BlobStore",
    "MemoryBlobStore",
    "DuckDBBlobStore",
]
