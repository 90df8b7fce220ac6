"""Ingestion pipeline — filing text → sections → chunks → store.

This is the main entry point for adding filings to the search corpus.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from filing_rag.chunking.base import BaseChunker
from filing_rag.chunking.filing_chunker import FilingChunker
from filing_rag.chunking.schemas import GENERAL_SECTION, Chunk
from filing_rag.documents.schemas import DEFAULT_FORM_TYPES, FilingMetadata
from filing_rag.documents.sec_parser import detect_sections
from filing_rag.edgar.base import FilingSource
from filing_rag.pipeline.schemas import BatchIngestResult, FailedFiling, IngestResult
from filing_rag.store.filing_store import FilingStore

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Orchestrates filing indexing: detect sections → chunk → replace chunk set."""

    def __init__(self, store: FilingStore, chunker: BaseChunker | None = None):
        self.store = store
        self.chunker = chunker or FilingChunker()

    def chunk_filing(self, raw_text: str) -> list[Chunk]:
        """Chunk a filing section by section, or as one ``General`` section."""
        sections = detect_sections(raw_text)
        if not sections:
            return self.chunker.chunk(raw_text, GENERAL_SECTION)

        chunks: list[Chunk] = []
        for section in sections:
            chunks.extend(self.chunker.chunk(section.content, section.name))
        return chunks

    def ingest(self, metadata: FilingMetadata, raw_text: str) -> IngestResult:
        """Store a filing and replace its chunk set in one transaction.

        Re-ingesting the same accession number overwrites the stored text
        and regenerates every chunk. Storage errors propagate; the
        transaction is rolled back and the previous chunk set is kept.

        Args:
            metadata: Filing identity; ``accession_number`` is the upsert key.
            raw_text: Cleaned filing text.

        Returns:
            An ``IngestResult`` with the filing id and chunk count.
        """
        chunks = self.chunk_filing(raw_text)

        with self.store.session() as session:
            filing_id = self.store.upsert_filing(session, metadata, raw_text)
            chunk_count = self.store.replace_chunks(session, filing_id, chunks)

        sections = list(dict.fromkeys(c.section_name for c in chunks))
        logger.info(
            "Indexed %s %s (%s): %d chunks across %d sections",
            metadata.symbol.upper(),
            metadata.form,
            metadata.accession_number,
            chunk_count,
            len(sections),
        )
        return IngestResult(filing_id=filing_id, chunk_count=chunk_count, sections=sections)

    def ingest_recent(
        self,
        symbol: str,
        source: FilingSource,
        form_types: Sequence[str] = DEFAULT_FORM_TYPES,
        limit: int = 5,
        skip_processed: bool = True,
    ) -> BatchIngestResult:
        """Fetch and index an issuer's recent filings one at a time.

        A filing that cannot be fetched or indexed is recorded and the batch
        moves on to the next one.
        """
        result = BatchIngestResult(symbol=symbol.upper())
        filings = source.list_filings(symbol, form_types=form_types, limit=limit)

        for filing in filings:
            accession = filing.accession_number
            try:
                self.store.register_filing(filing)
                if skip_processed and self.store.is_filing_processed(accession):
                    logger.info("Skipping %s: already indexed", accession)
                    result.skipped.append(accession)
                    continue

                raw_text = source.fetch_filing_text(filing)
                if raw_text is None:
                    logger.warning("Skipping %s: no text available", accession)
                    result.skipped.append(accession)
                    continue
                ingest_result = self.ingest(filing, raw_text)
            except Exception as exc:
                logger.exception("Failed to index %s", accession)
                result.failed.append(FailedFiling(accession_number=accession, error=str(exc)))
                continue

            result.ingested.append(accession)
            result.chunk_count += ingest_result.chunk_count

        logger.info(
            "Batch for %s: %d indexed, %d skipped, %d failed (%d chunks)",
            result.symbol,
            len(result.ingested),
            len(result.skipped),
            len(result.failed),
            result.chunk_count,
        )
        return result
