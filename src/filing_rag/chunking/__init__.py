"""Section-aware filing chunking."""

from filing_rag.chunking.base import BaseChunker
from filing_rag.chunking.filing_chunker import FilingChunker, overlap_text
from filing_rag.chunking.schemas import GENERAL_SECTION, Chunk
from filing_rag.chunking.tokens import estimate_tokens

__all__ = [
    "GENERAL_SECTION",
    "BaseChunker",
    "Chunk",
    "FilingChunker",
    "estimate_tokens",
    "overlap_text",
]
