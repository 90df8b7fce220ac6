"""Ticker → CIK cache owned by whoever owns the EDGAR client."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping


class CikCache:
    """Expiring map of upper-cased tickers to zero-padded CIKs.

    Entries older than ``ttl_seconds`` are treated as missing, which makes
    the client refresh the ticker map on the next lookup.
    """

    def __init__(
        self,
        ttl_seconds: float = 86_400.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def get(self, ticker: str) -> str | None:
        key = ticker.upper()
        entry = self._entries.get(key)
        if entry is None:
            return None
        cik, stored_at = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return cik

    def set(self, ticker: str, cik: str) -> None:
        self._entries[ticker.upper()] = (cik, self._clock())

    def update(self, mapping: Mapping[str, str]) -> None:
        """Store many entries at once, all stamped with the current time."""
        now = self._clock()
        for ticker, cik in mapping.items():
            self._entries[ticker.upper()] = (cik, now)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ticker: object) -> bool:
        return isinstance(ticker, str) and self.get(ticker) is not None
