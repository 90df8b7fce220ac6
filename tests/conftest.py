"""Shared fixtures for tests — synthetic filings, in-memory store, no network calls."""

from __future__ import annotations

from datetime import date

import pytest

from filing_rag.chunking.filing_chunker import FilingChunker
from filing_rag.documents.schemas import FilingMetadata
from filing_rag.pipeline.ingest import IngestPipeline
from filing_rag.retrieval.search import SearchEngine
from filing_rag.store.filing_store import FilingStore

# ---------------------------------------------------------------------------
# Synthetic filing content
# ---------------------------------------------------------------------------


@pytest.fixture
def sec_filing_text() -> str:
    """10-K style text with four ITEM headings."""
    return (
        "PART I\n\n"
        "Item 1. Business\n\n"
        + "Apple Inc. designs smartphones and computers. "
        "The company operates globally with significant presence "
        "in North America, Europe, and Greater China. " * 20 + "\n\n"
        "Item 1A. Risk Factors\n\n"
        + "Global economic conditions affect demand for consumer electronics. "
        "Foreign exchange fluctuations impact international revenue. "
        "Supply chain disruptions can affect product availability. " * 15 + "\n\n"
        "Item 7. Management's Discussion and Analysis\n\n"
        + "Revenue for fiscal 2024 was $395.8 billion, an increase of 3.3% "
        "from $383.3 billion in fiscal 2023. Services revenue grew 14% "
        "year-over-year to $85.2 billion. " * 25 + "\n\n"
        "Item 8. Financial Statements\n\n"
        + "Consolidated Balance Sheet as of September 28, 2024. "
        "Total assets: $352.6 billion. Total liabilities: $290.4 billion. " * 10
    )


@pytest.fixture
def plain_text() -> str:
    """Filing text without any recognizable ITEM heading (about 14k chars)."""
    paragraphs = [
        f"Paragraph {i} discusses liquidity and capital resources. "
        f"Cash balances at period {i} remained adequate for operations. "
        f"Management reviewed covenant headroom for quarter {i}. " * 4
        for i in range(20)
    ]
    return "\n\n".join(paragraphs)


def make_metadata(
    accession: str = "0000320193-24-000123",
    symbol: str = "AAPL",
    form: str = "10-K",
    filing_date: date = date(2024, 11, 1),
) -> FilingMetadata:
    return FilingMetadata(
        symbol=symbol,
        form=form,
        filing_date=filing_date,
        accession_number=accession,
        file_url=f"https://www.sec.gov/Archives/edgar/data/320193/{accession.replace('-', '')}/doc.htm",
    )


@pytest.fixture
def filing_metadata() -> FilingMetadata:
    return make_metadata()


@pytest.fixture
def metadata_factory():
    """Build FilingMetadata with overridable accession, symbol, form and date."""
    return make_metadata


# ---------------------------------------------------------------------------
# Store / pipeline / search
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> FilingStore:
    return FilingStore.in_memory()


@pytest.fixture
def pipeline(store: FilingStore) -> IngestPipeline:
    return IngestPipeline(store, FilingChunker())


@pytest.fixture
def small_pipeline(store: FilingStore) -> IngestPipeline:
    """Pipeline with small chunk sizes so short texts produce several chunks."""
    chunker = FilingChunker(target_tokens=60, max_tokens=90, min_tokens=10, overlap_tokens=10)
    return IngestPipeline(store, chunker)


@pytest.fixture
def engine(store: FilingStore) -> SearchEngine:
    return SearchEngine(store)
