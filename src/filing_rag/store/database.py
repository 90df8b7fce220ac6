"""SQLite engine setup and schema creation, including the FTS5 index."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.pool import StaticPool

from filing_rag.store.models import Base

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

# External-content FTS5 table over filing_chunks.content, kept in sync by triggers.
_FTS_DDL: tuple[str, ...] = (
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS filing_chunks_fts USING fts5(
        content,
        content='filing_chunks',
        content_rowid='id'
    )
    """,
    """
    CREATE TRIGGER IF NOT EXISTS filing_chunks_ai AFTER INSERT ON filing_chunks BEGIN
        INSERT INTO filing_chunks_fts(rowid, content) VALUES (new.id, new.content);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS filing_chunks_ad AFTER DELETE ON filing_chunks BEGIN
        INSERT INTO filing_chunks_fts(filing_chunks_fts, rowid, content)
        VALUES ('delete', old.id, old.content);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS filing_chunks_au AFTER UPDATE ON filing_chunks BEGIN
        INSERT INTO filing_chunks_fts(filing_chunks_fts, rowid, content)
        VALUES ('delete', old.id, old.content);
        INSERT INTO filing_chunks_fts(rowid, content) VALUES (new.id, new.content);
    END
    """,
)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(path: str | Path = MEMORY_PATH, echo: bool = False) -> Engine:
    """Create a SQLite engine for a database file (or ``:memory:``).

    In-memory databases share a single connection so every session sees
    the same data.
    """
    if str(path) == MEMORY_PATH:
        engine = create_engine(
            "sqlite://",
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        db_path = Path(path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(f"sqlite:///{db_path}", echo=echo)

    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """Create tables, the full-text index and its sync triggers if missing."""
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        for ddl in _FTS_DDL:
            conn.exec_driver_sql(ddl)
    logger.debug("Initialized filing schema on %s", engine.url)


def rebuild_fts_index(engine: Engine) -> None:
    """Repopulate the full-text index from filing_chunks."""
    with engine.begin() as conn:
        conn.exec_driver_sql(
            "INSERT INTO filing_chunks_fts(filing_chunks_fts) VALUES ('rebuild')"
        )
    logger.info("Rebuilt full-text index")
