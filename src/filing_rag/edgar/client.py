"""SEC EDGAR client — filing listings and document text.

SEC requirements:
- User-Agent must name the application and an admin contact
- At most 10 requests per second
- Back off on 429 responses
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Sequence
from datetime import date

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from filing_rag.config import EdgarSettings
from filing_rag.documents.sanitize import clean_filing_text
from filing_rag.documents.schemas import DEFAULT_FORM_TYPES, FilingMetadata
from filing_rag.edgar.base import FilingSource
from filing_rag.edgar.cache import CikCache

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(r"\.[^./]+$")


class EdgarError(Exception):
    """Base class for EDGAR request failures."""


class EdgarRateLimitError(EdgarError):
    """Raised when SEC answers 429."""


class EdgarBlockedError(EdgarError):
    """Raised when SEC answers 403, usually a non-compliant User-Agent."""


def _txt_url(file_url: str) -> str:
    """Swap the primary document's extension for the plain-text rendition."""
    return _EXTENSION_RE.sub(".txt", file_url)


def _parse_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class EdgarClient(FilingSource):
    """Filing source backed by the public EDGAR endpoints.

    The CIK cache is passed in by the caller so several clients (or
    several runs in one process) can share lookups under one expiry policy.
    """

    def __init__(
        self,
        user_agent: str,
        cik_cache: CikCache | None = None,
        http_client: httpx.Client | None = None,
        submissions_url: str = "https://data.sec.gov/submissions",
        archives_url: str = "https://www.sec.gov/Archives/edgar/data",
        tickers_url: str = "https://www.sec.gov/files/company_tickers.json",
        timeout: float = 30.0,
        max_chars: int = 50_000,
        rate_limit_requests: int = 10,
        rate_limit_window: float = 1.0,
    ):
        if not user_agent:
            raise ValueError("EDGAR requires a User-Agent with a contact address")
        self.user_agent = user_agent
        self.cik_cache = cik_cache if cik_cache is not None else CikCache()
        self.submissions_url = submissions_url.rstrip("/")
        self.archives_url = archives_url.rstrip("/")
        self.tickers_url = tickers_url
        self.max_chars = max_chars
        self.rate_limit_requests = rate_limit_requests
        self.rate_limit_window = rate_limit_window

        self._request_times: list[float] = []
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            headers={"Accept-Encoding": "gzip, deflate"},
            follow_redirects=True,
            timeout=timeout,
        )

    @classmethod
    def from_settings(
        cls, settings: EdgarSettings, cik_cache: CikCache | None = None
    ) -> EdgarClient:
        if cik_cache is None:
            cik_cache = CikCache(ttl_seconds=settings.cik_cache_ttl_seconds)
        return cls(
            user_agent=settings.user_agent,
            cik_cache=cik_cache,
            submissions_url=settings.submissions_url,
            archives_url=settings.archives_url,
            tickers_url=settings.tickers_url,
            timeout=settings.timeout,
            max_chars=settings.max_chars,
            rate_limit_requests=settings.rate_limit_requests,
            rate_limit_window=settings.rate_limit_window,
        )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _wait_for_rate_limit(self) -> None:
        now = time.monotonic()
        self._request_times = [
            t for t in self._request_times if now - t < self.rate_limit_window
        ]
        if len(self._request_times) >= self.rate_limit_requests:
            sleep_time = self.rate_limit_window - (now - self._request_times[0])
            if sleep_time > 0:
                time.sleep(sleep_time)
        self._request_times.append(time.monotonic())

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((EdgarRateLimitError, httpx.TimeoutException)),
        reraise=True,
    )
    def _get(self, url: str) -> httpx.Response:
        self._wait_for_rate_limit()
        response = self._client.get(url, headers={"User-Agent": self.user_agent})

        if response.status_code == 429:
            raise EdgarRateLimitError(f"Rate limited by SEC: {url}")
        if response.status_code == 403:
            raise EdgarBlockedError(
                f"Blocked by SEC (403). Check User-Agent compliance: {self.user_agent}"
            )
        response.raise_for_status()
        return response

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> EdgarClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_cik(self, ticker: str) -> str | None:
        """Resolve a ticker to its 10-digit CIK, refreshing the ticker map on a miss."""
        cached = self.cik_cache.get(ticker)
        if cached is not None:
            return cached

        data = self._get(self.tickers_url).json()
        mapping = {
            entry["ticker"].upper(): str(entry["cik_str"]).zfill(10)
            for entry in data.values()
        }
        self.cik_cache.update(mapping)
        logger.debug("Loaded %d ticker → CIK mappings", len(mapping))
        return mapping.get(ticker.upper())

    def list_filings(
        self,
        symbol: str,
        form_types: Sequence[str] = DEFAULT_FORM_TYPES,
        limit: int = 10,
    ) -> list[FilingMetadata]:
        cik = self.lookup_cik(symbol)
        if cik is None:
            logger.warning("No CIK found for ticker %s", symbol)
            return []

        data = self._get(f"{self.submissions_url}/CIK{cik}.json").json()
        recent = data.get("filings", {}).get("recent", {})
        accessions = recent.get("accessionNumber", [])
        wanted = set(form_types)

        filings: list[FilingMetadata] = []
        for i, accession in enumerate(accessions):
            if len(filings) >= limit:
                break
            form = recent["form"][i]
            if form not in wanted:
                continue

            primary_document = recent["primaryDocument"][i]
            descriptions = recent.get("primaryDocDescription", [])
            report_dates = recent.get("reportDate", [])
            filings.append(FilingMetadata(
                symbol=symbol.upper(),
                form=form,
                filing_date=date.fromisoformat(recent["filingDate"][i]),
                accession_number=accession,
                file_url=(
                    f"{self.archives_url}/{int(cik)}/"
                    f"{accession.replace('-', '')}/{primary_document}"
                ),
                report_date=_parse_date(report_dates[i] if i < len(report_dates) else None),
                description=(descriptions[i] if i < len(descriptions) else None) or form,
                primary_document=primary_document,
            ))

        logger.info("Found %d %s filings for %s", len(filings), "/".join(form_types), symbol)
        return filings

    def fetch_filing_text(self, filing: FilingMetadata) -> str | None:
        """Fetch the plain-text rendition, falling back to the primary document.

        Failures are logged and reported as ``None``.
        """
        candidates = [_txt_url(filing.file_url)]
        if filing.file_url not in candidates:
            candidates.append(filing.file_url)

        for url in candidates:
            try:
                body = self._get(url).text
            except (EdgarError, httpx.HTTPError) as exc:
                logger.warning("Could not fetch %s: %s", url, exc)
                continue

            text = clean_filing_text(body)[: self.max_chars]
            return text or None

        return None
