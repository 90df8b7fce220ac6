"""Abstract base class for filing sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from filing_rag.documents.schemas import DEFAULT_FORM_TYPES, FilingMetadata


class FilingSource(ABC):
    """Interface for anything that can list filings and supply their text."""

    @abstractmethod
    def list_filings(
        self,
        symbol: str,
        form_types: Sequence[str] = DEFAULT_FORM_TYPES,
        limit: int = 10,
    ) -> list[FilingMetadata]:
        """List recent filings for an issuer, newest first.

        Args:
            symbol: Issuer ticker.
            form_types: Forms to include.
            limit: Maximum number of filings returned.
        """

    @abstractmethod
    def fetch_filing_text(self, filing: FilingMetadata) -> str | None:
        """Return cleaned text for a filing, or ``None`` if it cannot be fetched."""

    @classmethod
    def source_name(cls) -> str:
        """Return human-readable source name."""
        return cls.__name__
