"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class IngestResult:
    """Result of indexing one filing."""

    filing_id: int
    chunk_count: int
    sections: list[str] = field(default_factory=list)


@dataclass
class FailedFiling:
    """A filing the batch could not index."""

    accession_number: str
    error: str


@dataclass
class BatchIngestResult:
    """Result of indexing several filings for one issuer."""

    symbol: str
    ingested: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[FailedFiling] = field(default_factory=list)
    chunk_count: int = 0

    @property
    def attempted(self) -> int:
        return len(self.ingested) + len(self.skipped) + len(self.failed)
