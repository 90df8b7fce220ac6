"""Application settings loaded from YAML with environment variable overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class ChunkingSettings(BaseModel):
    target_tokens: int = 1000
    max_tokens: int = 1500
    min_tokens: int = 100
    overlap_tokens: int = 100

    @model_validator(mode="after")
    def _check_bounds(self) -> ChunkingSettings:
        if not 0 <= self.min_tokens <= self.target_tokens <= self.max_tokens:
            raise ValueError(
                "chunking bounds must satisfy min_tokens <= target_tokens <= max_tokens "
                f"(got {self.min_tokens}, {self.target_tokens}, {self.max_tokens})"
            )
        return self


class StoreSettings(BaseModel):
    path: str = "local_data/filings.db"
    echo: bool = False


class SearchSettings(BaseModel):
    default_limit: int = 20
    section_limit: int = 10
    risk_factor_limit: int = 3


class EdgarSettings(BaseModel):
    user_agent: str = "filing-rag/0.1 (admin@example.com)"
    submissions_url: str = "https://data.sec.gov/submissions"
    archives_url: str = "https://www.sec.gov/Archives/edgar/data"
    tickers_url: str = "https://www.sec.gov/files/company_tickers.json"
    form_types: list[str] = Field(default_factory=lambda: ["10-K", "10-Q", "8-K"])
    timeout: float = 30.0
    max_chars: int = 50_000
    rate_limit_requests: int = 10
    rate_limit_window: float = 1.0
    cik_cache_ttl_seconds: float = 86_400.0


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    edgar: EdgarSettings = Field(default_factory=EdgarSettings)


def _find_settings_file() -> Path | None:
    """Walk up from cwd looking for settings.yaml."""
    profile = os.getenv("FILING_RAG_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def load_settings() -> Settings:
    """Load settings from YAML file, falling back to defaults.

    ``SEC_USER_AGENT`` overrides ``edgar.user_agent`` so the contact
    address does not have to live in a checked-in file.
    """
    path = _find_settings_file()
    raw: dict = {}
    if path is not None:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    settings = Settings(**raw)

    user_agent = os.getenv("SEC_USER_AGENT")
    if user_agent:
        settings.edgar.user_agent = user_agent

    return settings
