"""ORM models for filings and their chunks."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class FilingRecord(Base):
    """One SEC filing, unique by accession number."""
    __tablename__ = "sec_filings"

    id = Column(Integer, primary_key=True)
    symbol = Column(String(16), nullable=False, index=True)
    form = Column(String(20), nullable=False)
    filing_date = Column(Date, nullable=False)
    accession_number = Column(String(25), unique=True, nullable=False)
    file_url = Column(String(500))

    # Null until the filing text has been ingested
    raw_text = Column(Text)
    processed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    chunks = relationship(
        "ChunkRecord",
        back_populates="filing",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChunkRecord.id",
    )

    __table_args__ = (
        Index("ix_sec_filings_symbol_form", "symbol", "form"),
        Index("ix_sec_filings_filing_date", "filing_date"),
    )


class ChunkRecord(Base):
    """A chunk of filing text; indexed for full-text search by filing_chunks_fts."""
    __tablename__ = "filing_chunks"

    id = Column(Integer, primary_key=True)
    filing_id = Column(
        Integer, ForeignKey("sec_filings.id", ondelete="CASCADE"), nullable=False
    )
    section_name = Column(String(100), nullable=False)
    chunk_index = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    token_count = Column(Integer, nullable=False)

    filing = relationship("FilingRecord", back_populates="chunks")

    __table_args__ = (
        UniqueConstraint(
            "filing_id", "section_name", "chunk_index", name="uq_filing_chunks_position"
        ),
        Index("ix_filing_chunks_filing_id", "filing_id"),
        Index("ix_filing_chunks_section_name", "section_name"),
    )
