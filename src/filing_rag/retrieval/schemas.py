"""Data models for search operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

# Score reported for results that were not ranked (section lookups, listings)
UNRANKED_SCORE = 1.0


@dataclass
class SearchOptions:
    """Filters and paging for a full-text search.

    All specified filters must match (AND logic). ``symbol`` and ``form``
    match exactly; ``section`` matches any section name containing it. A
    ``limit`` of ``None`` uses the engine's configured default.
    """

    symbol: str | None = None
    form: str | None = None
    section: str | None = None
    limit: int | None = None
    offset: int = 0


@dataclass(frozen=True)
class SearchResult:
    """A chunk returned by a search, with its filing context.

    ``score`` is non-negative; higher means more relevant.
    """

    chunk_id: int
    filing_id: int
    symbol: str
    form: str
    filing_date: date
    section_name: str
    chunk_index: int
    content: str
    token_count: int
    score: float = UNRANKED_SCORE


@dataclass(frozen=True)
class ProcessedFiling:
    """An indexed filing with its chunk count."""

    id: int
    accession_number: str
    form: str
    filing_date: date
    chunk_count: int


@dataclass(frozen=True)
class SearchStats:
    """Corpus-wide counts; filings and symbols only count once indexed."""

    filing_count: int = 0
    chunk_count: int = 0
    symbol_count: int = 0
