"""Filing sources — the EDGAR client and its CIK cache."""

from filing_rag.edgar.base import FilingSource
from filing_rag.edgar.cache import CikCache
from filing_rag.edgar.client import (
    EdgarBlockedError,
    EdgarClient,
    EdgarError,
    EdgarRateLimitError,
)

__all__ = [
    "CikCache",
    "EdgarBlockedError",
    "EdgarClient",
    "EdgarError",
    "EdgarRateLimitError",
    "FilingSource",
]
