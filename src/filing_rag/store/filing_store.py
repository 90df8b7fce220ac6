"""Filing persistence — upsert by accession number and chunk-set replacement."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy import Engine, delete, func, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, sessionmaker

from filing_rag.chunking.schemas import Chunk
from filing_rag.config import Settings
from filing_rag.documents.schemas import FilingMetadata
from filing_rag.store.database import create_db_engine, init_db
from filing_rag.store.models import ChunkRecord, FilingRecord
from filing_rag.store.schemas import FilingStats, StoredFiling

logger = logging.getLogger(__name__)


def _filing_values(metadata: FilingMetadata) -> dict:
    return {
        "symbol": metadata.symbol.upper(),
        "form": metadata.form.upper(),
        "filing_date": metadata.filing_date,
        "accession_number": metadata.accession_number,
        "file_url": metadata.file_url,
    }


class FilingStore:
    """SQLite-backed store for filings and their chunks.

    Write helpers take an open ``Session`` so callers can group several of
    them into one transaction via ``session()``.
    """

    def __init__(self, engine: Engine, create_schema: bool = True):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        if create_schema:
            init_db(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> FilingStore:
        return cls(create_db_engine(settings.store.path, echo=settings.store.echo))

    @classmethod
    def in_memory(cls) -> FilingStore:
        """Create a store backed by a private in-memory database."""
        return cls(create_db_engine())

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session inside a transaction; commit on success, roll back on error."""
        with self._session_factory.begin() as session:
            yield session

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upsert_filing(self, session: Session, metadata: FilingMetadata, raw_text: str) -> int:
        """Insert a filing, or overwrite its text and processing time.

        Returns:
            The filing id.
        """
        now = datetime.now(UTC)
        stmt = sqlite_insert(FilingRecord).values(
            **_filing_values(metadata),
            raw_text=raw_text,
            processed_at=now,
            created_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[FilingRecord.accession_number],
            set_={
                "raw_text": stmt.excluded.raw_text,
                "processed_at": stmt.excluded.processed_at,
            },
        )
        session.execute(stmt)
        return self._filing_id(session, metadata.accession_number)

    def register_filing(self, metadata: FilingMetadata) -> int:
        """Record filing metadata without text; existing rows are left untouched.

        Returns:
            The filing id.
        """
        with self.session() as session:
            stmt = sqlite_insert(FilingRecord).values(
                **_filing_values(metadata),
                created_at=datetime.now(UTC),
            )
            session.execute(stmt.on_conflict_do_nothing(
                index_elements=[FilingRecord.accession_number],
            ))
            return self._filing_id(session, metadata.accession_number)

    def replace_chunks(self, session: Session, filing_id: int, chunks: list[Chunk]) -> int:
        """Delete every chunk of a filing and insert ``chunks`` in their place.

        Returns:
            Number of chunks written.
        """
        session.execute(delete(ChunkRecord).where(ChunkRecord.filing_id == filing_id))
        if chunks:
            session.execute(
                insert(ChunkRecord),
                [
                    {
                        "filing_id": filing_id,
                        "section_name": c.section_name,
                        "chunk_index": c.chunk_index,
                        "content": c.content,
                        "token_count": c.token_count,
                    }
                    for c in chunks
                ],
            )
        return len(chunks)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_filing(self, accession_number: str) -> StoredFiling | None:
        with self.session() as session:
            row = session.scalar(
                select(FilingRecord).where(FilingRecord.accession_number == accession_number)
            )
            if row is None:
                return None
            return StoredFiling(
                id=row.id,
                symbol=row.symbol,
                form=row.form,
                filing_date=row.filing_date,
                accession_number=row.accession_number,
                file_url=row.file_url,
                processed_at=row.processed_at,
                raw_text=row.raw_text,
            )

    def is_filing_processed(self, accession_number: str) -> bool:
        with self.session() as session:
            filing_id = session.scalar(
                select(FilingRecord.id).where(
                    FilingRecord.accession_number == accession_number,
                    FilingRecord.processed_at.is_not(None),
                )
            )
            return filing_id is not None

    def get_filing_stats(self, filing_id: int) -> FilingStats:
        with self.session() as session:
            chunk_count, total_tokens = session.execute(
                select(func.count(ChunkRecord.id), func.sum(ChunkRecord.token_count))
                .where(ChunkRecord.filing_id == filing_id)
            ).one()
            sections = session.scalars(
                select(ChunkRecord.section_name)
                .where(ChunkRecord.filing_id == filing_id)
                .distinct()
                .order_by(ChunkRecord.section_name)
            ).all()
        return FilingStats(
            chunk_count=chunk_count or 0,
            total_tokens=total_tokens or 0,
            sections=list(sections),
        )

    @staticmethod
    def _filing_id(session: Session, accession_number: str) -> int:
        return session.execute(
            select(FilingRecord.id).where(FilingRecord.accession_number == accession_number)
        ).scalar_one()
