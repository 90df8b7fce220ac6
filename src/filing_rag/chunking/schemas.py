"""Data models for chunks."""

from __future__ import annotations

from dataclasses import dataclass

GENERAL_SECTION = "General"


@dataclass(frozen=True)
class Chunk:
    """A single retrievable piece of a filing.

    ``chunk_index`` counts from zero within one section, so a chunk is
    identified by ``(filing, section_name, chunk_index)``.
    """

    section_name: str
    chunk_index: int
    content: str
    token_count: int
