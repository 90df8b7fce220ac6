"""Filing ingestion — section detection, chunking, atomic chunk replacement."""

from filing_rag.pipeline.ingest import IngestPipeline
from filing_rag.pipeline.schemas import BatchIngestResult, FailedFiling, IngestResult

__all__ = [
    "BatchIngestResult",
    "FailedFiling",
    "IngestPipeline",
    "IngestResult",
]
