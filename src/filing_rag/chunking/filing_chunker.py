"""Overlapping, token-bounded chunker for filing sections.

Paragraphs are packed into a buffer until it reaches the target size. Each
new chunk starts with the tail of the previous one, trimmed to a sentence
start where possible, so text near a boundary is retrievable from both
sides.
"""

from __future__ import annotations

import logging
import re

from filing_rag.chunking.base import BaseChunker
from filing_rag.chunking.schemas import GENERAL_SECTION, Chunk
from filing_rag.chunking.tokens import CHARS_PER_TOKEN, TokenCounter, estimate_tokens
from filing_rag.config import ChunkingSettings

logger = logging.getLogger(__name__)

TARGET_TOKENS = 1000
MAX_TOKENS = 1500
MIN_TOKENS = 100
OVERLAP_TOKENS = 100

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+[A-Z]")


def overlap_text(text: str, overlap_tokens: int = OVERLAP_TOKENS) -> str:
    """Return the tail of ``text`` that seeds the next chunk.

    Takes the last ``overlap_tokens * 4`` characters and drops the partial
    sentence at its start when a sentence boundary is found. Text no longer
    than the window yields an empty string.
    """
    window_chars = overlap_tokens * CHARS_PER_TOKEN
    if window_chars <= 0 or len(text) <= window_chars:
        return ""

    window = text[-window_chars:]
    m = _SENTENCE_BOUNDARY.search(window)
    if m is not None:
        window = window[m.end() - 1:]
    return window.lstrip()


def _join(head: str, tail: str) -> str:
    return f"{head}\n\n{tail}" if head else tail


class FilingChunker(BaseChunker):
    """Chunker for filing text with paragraph packing and sentence-aligned overlap."""

    def __init__(
        self,
        target_tokens: int = TARGET_TOKENS,
        max_tokens: int = MAX_TOKENS,
        min_tokens: int = MIN_TOKENS,
        overlap_tokens: int = OVERLAP_TOKENS,
        token_counter: TokenCounter = estimate_tokens,
    ):
        self.target_tokens = target_tokens
        self.max_tokens = max_tokens
        self.min_tokens = min_tokens
        self.overlap_tokens = overlap_tokens
        self.count_tokens = token_counter

    @classmethod
    def from_settings(cls, settings: ChunkingSettings) -> FilingChunker:
        return cls(
            target_tokens=settings.target_tokens,
            max_tokens=settings.max_tokens,
            min_tokens=settings.min_tokens,
            overlap_tokens=settings.overlap_tokens,
        )

    def chunk(self, text: str, section_name: str = GENERAL_SECTION) -> list[Chunk]:
        chunks: list[Chunk] = []
        buffer = ""
        # False while the buffer holds only overlap carried from the last chunk
        fresh = False

        for para in _PARAGRAPH_BREAK.split(text):
            para = para.strip()
            if not para:
                continue

            if not fresh:
                buffer = self._seed(buffer, para)
            elif self.count_tokens(_join(buffer, para)) > self.max_tokens:
                carry = overlap_text(buffer, self.overlap_tokens)
                # A buffer under the minimum (usually a lone heading) is dropped
                if self.count_tokens(buffer) >= self.min_tokens:
                    chunks.append(self._make_chunk(buffer, section_name, len(chunks)))
                buffer = self._seed(carry, para)
            else:
                buffer = _join(buffer, para)
            fresh = True

            if self.count_tokens(buffer) >= self.target_tokens:
                carry = overlap_text(buffer, self.overlap_tokens)
                chunks.append(self._make_chunk(buffer, section_name, len(chunks)))
                buffer = carry
                fresh = False

        # Remainders under the minimum are dropped, and so is a buffer holding
        # only carried overlap, whatever its size
        if fresh and self.count_tokens(buffer) >= self.min_tokens:
            chunks.append(self._make_chunk(buffer, section_name, len(chunks)))

        logger.debug(
            "FilingChunker produced %d chunks for section %r from %d chars",
            len(chunks), section_name, len(text),
        )
        return chunks

    def _seed(self, carry: str, para: str) -> str:
        """Start a buffer with the carried overlap unless that breaks the maximum."""
        seeded = _join(carry, para)
        if carry and self.count_tokens(seeded) > self.max_tokens:
            return para
        return seeded

    def _make_chunk(self, content: str, section_name: str, index: int) -> Chunk:
        return Chunk(
            section_name=section_name,
            chunk_index=index,
            content=content,
            token_count=self.count_tokens(content),
        )
