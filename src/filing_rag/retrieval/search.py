"""Search over indexed filing chunks.

Full-text queries go through the SQLite FTS5 index and are ranked with
``bm25()``. FTS5 reports bm25 as a negative number where lower is better;
results are ordered on the raw value and exposed with the sign removed.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy import Select, column, func, literal_column, select, table, text
from sqlalchemy.exc import SQLAlchemyError

from filing_rag.config import SearchSettings
from filing_rag.retrieval.schemas import (
    UNRANKED_SCORE,
    ProcessedFiling,
    SearchOptions,
    SearchResult,
    SearchStats,
)
from filing_rag.store.filing_store import FilingStore
from filing_rag.store.models import ChunkRecord, FilingRecord

logger = logging.getLogger(__name__)

RISK_FACTORS_SECTION = "Risk Factors"

_FTS_TABLE = "filing_chunks_fts"
_QUOTE_RE = re.compile(r"['\"]")


def build_match_query(query: str) -> str:
    """Turn free text into an FTS5 query matching any of its terms.

    Quotes are stripped and every whitespace-separated term becomes a
    quoted phrase, so FTS5 operators typed by the user are matched
    literally. Returns an empty string when no terms remain.
    """
    terms = _QUOTE_RE.sub("", query).split()
    return " OR ".join(f'"{term}"' for term in terms)


def _chunk_columns() -> tuple:
    return (
        ChunkRecord.id.label("chunk_id"),
        ChunkRecord.filing_id,
        FilingRecord.symbol,
        FilingRecord.form,
        FilingRecord.filing_date,
        ChunkRecord.section_name,
        ChunkRecord.chunk_index,
        ChunkRecord.content,
        ChunkRecord.token_count,
    )


def _to_result(row, score: float = UNRANKED_SCORE) -> SearchResult:
    return SearchResult(
        chunk_id=row.chunk_id,
        filing_id=row.filing_id,
        symbol=row.symbol,
        form=row.form,
        filing_date=row.filing_date,
        section_name=row.section_name,
        chunk_index=row.chunk_index,
        content=row.content,
        token_count=row.token_count,
        score=score,
    )


class SearchEngine:
    """Ranked full-text search, section lookups and corpus statistics."""

    def __init__(self, store: FilingStore, settings: SearchSettings | None = None):
        self.store = store
        self.settings = settings or SearchSettings()

    # ------------------------------------------------------------------
    # Full-text search
    # ------------------------------------------------------------------

    def search_text(self, query: str, options: SearchOptions | None = None) -> list[SearchResult]:
        """Search chunk text, most relevant first.

        Any query term may match. An empty query returns no results without
        touching the database, and so does a failing search (missing index,
        query FTS5 rejects); failures are logged.

        Args:
            query: Free text.
            options: Filters and paging.

        Returns:
            Results ordered by descending relevance.
        """
        opts = options or SearchOptions()
        limit = opts.limit if opts.limit is not None else self.settings.default_limit
        match = build_match_query(query)
        if not match:
            return []

        bm25 = literal_column(f"bm25({_FTS_TABLE})")
        fts = table(_FTS_TABLE, column("rowid"))
        stmt = (
            select(*_chunk_columns(), bm25.label("score"))
            .select_from(fts)
            .join(ChunkRecord, ChunkRecord.id == fts.c.rowid)
            .join(FilingRecord, FilingRecord.id == ChunkRecord.filing_id)
            .where(text(f"{_FTS_TABLE} MATCH :match").bindparams(match=match))
        )
        stmt = self._apply_filters(stmt, opts)
        stmt = stmt.order_by(bm25).limit(limit).offset(opts.offset)

        try:
            with self.store.session() as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.warning("Full-text search failed for %r: %s", match, exc)
            return []

        results = [_to_result(row, score=abs(row.score)) for row in rows]
        logger.info("Full-text search %r returned %d results", match, len(results))
        return results

    @staticmethod
    def _apply_filters(stmt: Select, opts: SearchOptions) -> Select:
        if opts.symbol:
            stmt = stmt.where(FilingRecord.symbol == opts.symbol.upper())
        if opts.form:
            stmt = stmt.where(FilingRecord.form == opts.form.upper())
        if opts.section:
            stmt = stmt.where(ChunkRecord.section_name.contains(opts.section, autoescape=True))
        return stmt

    # ------------------------------------------------------------------
    # Section lookups
    # ------------------------------------------------------------------

    def search_section(
        self,
        section_name: str,
        symbol: str | None = None,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """Return chunks whose section name contains ``section_name``.

        Ordered by filing date (newest first), then chunk index. Results are
        not scored.
        """
        stmt = (
            select(*_chunk_columns())
            .select_from(ChunkRecord)
            .join(FilingRecord, FilingRecord.id == ChunkRecord.filing_id)
            .where(ChunkRecord.section_name.contains(section_name, autoescape=True))
        )
        if symbol:
            stmt = stmt.where(FilingRecord.symbol == symbol.upper())
        stmt = stmt.order_by(
            FilingRecord.filing_date.desc(), ChunkRecord.chunk_index.asc()
        ).limit(limit if limit is not None else self.settings.section_limit)

        with self.store.session() as session:
            rows = session.execute(stmt).all()
        return [_to_result(row) for row in rows]

    def compare_risk_factors(self, symbol: str, limit: int | None = None) -> list[SearchResult]:
        """Risk Factors chunks for one issuer across its filings, newest first."""
        return self.search_section(
            RISK_FACTORS_SECTION,
            symbol=symbol,
            limit=limit if limit is not None else self.settings.risk_factor_limit,
        )

    # ------------------------------------------------------------------
    # Listings and statistics
    # ------------------------------------------------------------------

    def get_filing_chunks(self, filing_id: int) -> list[SearchResult]:
        """All chunks of one filing in document order."""
        stmt = (
            select(*_chunk_columns())
            .select_from(ChunkRecord)
            .join(FilingRecord, FilingRecord.id == ChunkRecord.filing_id)
            .where(ChunkRecord.filing_id == filing_id)
            .order_by(ChunkRecord.id)
        )
        with self.store.session() as session:
            rows = session.execute(stmt).all()
        return [_to_result(row) for row in rows]

    def get_processed_filings(self, symbol: str) -> list[ProcessedFiling]:
        """Indexed filings for an issuer, newest first, with chunk counts."""
        stmt = (
            select(
                FilingRecord.id,
                FilingRecord.accession_number,
                FilingRecord.form,
                FilingRecord.filing_date,
                func.count(ChunkRecord.id).label("chunk_count"),
            )
            .select_from(FilingRecord)
            .outerjoin(ChunkRecord, ChunkRecord.filing_id == FilingRecord.id)
            .where(
                FilingRecord.symbol == symbol.upper(),
                FilingRecord.processed_at.is_not(None),
            )
            .group_by(FilingRecord.id)
            .order_by(FilingRecord.filing_date.desc())
        )
        with self.store.session() as session:
            rows = session.execute(stmt).all()
        return [
            ProcessedFiling(
                id=row.id,
                accession_number=row.accession_number,
                form=row.form,
                filing_date=row.filing_date,
                chunk_count=row.chunk_count,
            )
            for row in rows
        ]

    def get_stats(self) -> SearchStats:
        processed = FilingRecord.processed_at.is_not(None)
        with self.store.session() as session:
            filing_count = session.scalar(
                select(func.count(FilingRecord.id)).where(processed)
            )
            chunk_count = session.scalar(select(func.count(ChunkRecord.id)))
            symbol_count = session.scalar(
                select(func.count(func.distinct(FilingRecord.symbol))).where(processed)
            )
        return SearchStats(
            filing_count=filing_count or 0,
            chunk_count=chunk_count or 0,
            symbol_count=symbol_count or 0,
        )
