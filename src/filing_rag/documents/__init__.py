"""Filing documents — cleaning, metadata, and section detection."""

from filing_rag.documents.sanitize import clean_filing_text
from filing_rag.documents.schemas import DEFAULT_FORM_TYPES, FilingMetadata, FormType
from filing_rag.documents.sec_parser import SECTIONS, DetectedSection, detect_sections

__all__ = [
    "DEFAULT_FORM_TYPES",
    "SECTIONS",
    "DetectedSection",
    "FilingMetadata",
    "FormType",
    "clean_filing_text",
    "detect_sections",
]
