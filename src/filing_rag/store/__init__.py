"""Filing persistence — SQLite tables plus an FTS5 index over chunk text."""

from filing_rag.store.database import create_db_engine, init_db, rebuild_fts_index
from filing_rag.store.filing_store import FilingStore
from filing_rag.store.models import Base, ChunkRecord, FilingRecord
from filing_rag.store.schemas import FilingStats, StoredFiling

__all__ = [
    "Base",
    "ChunkRecord",
    "FilingRecord",
    "FilingStats",
    "FilingStore",
    "StoredFiling",
    "create_db_engine",
    "init_db",
    "rebuild_fts_index",
]
