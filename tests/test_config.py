"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from filing_rag.config import ChunkingSettings, Settings, load_settings


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FILING_RAG_PROFILE", raising=False)
    monkeypatch.delenv("SEC_USER_AGENT", raising=False)
    return tmp_path


class TestDefaults:
    def test_chunking_defaults(self):
        settings = Settings()
        assert settings.chunking.target_tokens == 1000
        assert settings.chunking.max_tokens == 1500
        assert settings.chunking.min_tokens == 100
        assert settings.chunking.overlap_tokens == 100

    def test_search_defaults(self):
        settings = Settings()
        assert settings.search.default_limit == 20
        assert settings.search.section_limit == 10
        assert settings.search.risk_factor_limit == 3

    def test_edgar_defaults(self):
        settings = Settings()
        assert settings.edgar.max_chars == 50_000
        assert settings.edgar.rate_limit_requests == 10
        assert settings.edgar.form_types == ["10-K", "10-Q", "8-K"]

    def test_chunk_bounds_validated(self):
        with pytest.raises(ValidationError):
            ChunkingSettings(target_tokens=2000, max_tokens=1500)
        with pytest.raises(ValidationError):
            ChunkingSettings(min_tokens=500, target_tokens=400)


class TestLoadSettings:
    def test_no_file_uses_defaults(self, in_tmp: Path):
        assert load_settings() == Settings()

    def test_yaml_overrides(self, in_tmp: Path):
        (in_tmp / "settings.yaml").write_text(
            "chunking:\n  target_tokens: 500\n  max_tokens: 800\n"
            "store:\n  path: data/test.db\n",
            encoding="utf-8",
        )
        settings = load_settings()
        assert settings.chunking.target_tokens == 500
        assert settings.chunking.max_tokens == 800
        assert settings.chunking.min_tokens == 100
        assert settings.store.path == "data/test.db"

    def test_found_in_parent_directory(self, in_tmp: Path, monkeypatch: pytest.MonkeyPatch):
        (in_tmp / "settings.yaml").write_text("search:\n  default_limit: 5\n", encoding="utf-8")
        child = in_tmp / "sub" / "dir"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        assert load_settings().search.default_limit == 5

    def test_empty_file(self, in_tmp: Path):
        (in_tmp / "settings.yaml").write_text("", encoding="utf-8")
        assert load_settings() == Settings()

    def test_profile_file_preferred(self, in_tmp: Path, monkeypatch: pytest.MonkeyPatch):
        (in_tmp / "settings.yaml").write_text("search:\n  default_limit: 5\n", encoding="utf-8")
        (in_tmp / "settings-ci.yaml").write_text("search:\n  default_limit: 7\n", encoding="utf-8")
        monkeypatch.setenv("FILING_RAG_PROFILE", "ci")
        assert load_settings().search.default_limit == 7

    def test_profile_falls_back_to_default_file(self, in_tmp: Path, monkeypatch: pytest.MonkeyPatch):
        (in_tmp / "settings.yaml").write_text("search:\n  default_limit: 5\n", encoding="utf-8")
        monkeypatch.setenv("FILING_RAG_PROFILE", "missing")
        assert load_settings().search.default_limit == 5

    def test_user_agent_env_override(self, in_tmp: Path, monkeypatch: pytest.MonkeyPatch):
        (in_tmp / "settings.yaml").write_text(
            "edgar:\n  user_agent: from-file admin@example.com\n", encoding="utf-8",
        )
        monkeypatch.setenv("SEC_USER_AGENT", "from-env ops@example.com")
        assert load_settings().edgar.user_agent == "from-env ops@example.com"

    def test_invalid_yaml_values(self, in_tmp: Path):
        (in_tmp / "settings.yaml").write_text(
            "chunking:\n  target_tokens: 5000\n", encoding="utf-8",
        )
        with pytest.raises(ValidationError):
            load_settings()
