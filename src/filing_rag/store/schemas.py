"""Read models returned by the filing store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class StoredFiling:
    """A filing row as persisted."""

    id: int
    symbol: str
    form: str
    filing_date: date
    accession_number: str
    file_url: str | None
    processed_at: datetime | None
    raw_text: str | None = None

    @property
    def is_processed(self) -> bool:
        return self.processed_at is not None


@dataclass
class FilingStats:
    """Chunk statistics for one filing."""

    chunk_count: int = 0
    total_tokens: int = 0
    sections: list[str] = field(default_factory=list)
