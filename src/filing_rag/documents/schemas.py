"""Data models for filing documents."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class FormType(StrEnum):
    """Common SEC form types.

    Forms are stored as plain strings, so anything EDGAR returns is accepted;
    these are just the names the rest of the code refers to.
    """

    ANNUAL_REPORT = "10-K"
    ANNUAL_REPORT_AMENDED = "10-K/A"
    QUARTERLY_REPORT = "10-Q"
    QUARTERLY_REPORT_AMENDED = "10-Q/A"
    CURRENT_REPORT = "8-K"
    CURRENT_REPORT_AMENDED = "8-K/A"


DEFAULT_FORM_TYPES: tuple[str, ...] = (
    FormType.ANNUAL_REPORT,
    FormType.QUARTERLY_REPORT,
    FormType.CURRENT_REPORT,
)


@dataclass(frozen=True)
class FilingMetadata:
    """Identifying metadata for one filing submission.

    Attributes:
        symbol: Issuer ticker.
        form: Filing type, e.g. "10-K".
        filing_date: Date the filing was submitted.
        accession_number: Globally unique EDGAR accession number.
        file_url: Location of the primary document.
        report_date: Period the filing reports on, when known.
        description: EDGAR's primary document description.
        primary_document: Primary document filename.
    """

    symbol: str
    form: str
    filing_date: date
    accession_number: str
    file_url: str
    report_date: date | None = None
    description: str | None = None
    primary_document: str | None = None
