"""Abstract base class for all chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from filing_rag.chunking.schemas import GENERAL_SECTION, Chunk


class BaseChunker(ABC):
    """Interface for chunking strategies."""

    @abstractmethod
    def chunk(self, text: str, section_name: str = GENERAL_SECTION) -> list[Chunk]:
        """Split text into chunks.

        Args:
            text: Text of one section (or a whole document).
            section_name: Label attached to every chunk.

        Returns:
            List of ``Chunk`` objects numbered from zero.
        """

    @classmethod
    def strategy_name(cls) -> str:
        """Return human-readable strategy name."""
        return cls.__name__
