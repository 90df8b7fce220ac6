"""Retrieval — ranked full-text search and section lookups."""

from filing_rag.retrieval.schemas import (
    ProcessedFiling,
    SearchOptions,
    SearchResult,
    SearchStats,
)
from filing_rag.retrieval.search import SearchEngine, build_match_query

__all__ = [
    "ProcessedFiling",
    "SearchEngine",
    "SearchOptions",
    "SearchResult",
    "SearchStats",
    "build_match_query",
]
