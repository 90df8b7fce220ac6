"""Turn raw EDGAR documents (HTML, SGML .txt submissions) into plain text.

Paragraph structure is kept: block-level tags become blank lines so the
chunker can still split on paragraph boundaries.
"""

from __future__ import annotations

import html
import re

_PRIVACY_ENVELOPE_RE = re.compile(
    r"-----BEGIN PRIVACY-ENHANCED MESSAGE-----.*?-----END PRIVACY-ENHANCED MESSAGE-----",
    re.DOTALL,
)
_SCRIPT_STYLE_RE = re.compile(r"(?is)<(script|style)\b.*?</\1\s*>")
_BLOCK_TAG_RE = re.compile(r"(?i)<br\s*/?>|</(?:p|div|tr|li|table|h[1-6])\s*>")
_TAG_RE = re.compile(r"<[^>]*>")
_INLINE_SPACE_RE = re.compile(r"[ \t\f\v\xa0]+")
_BLANK_RUN_RE = re.compile(r"\n\s*\n")


def clean_filing_text(text: str) -> str:
    """Strip markup and normalize whitespace in a filing document.

    Args:
        text: Raw document body as served by EDGAR.

    Returns:
        Plain text with single spaces inside lines and at most one blank
        line between paragraphs.
    """
    clean = text.replace("\r\n", "\n")
    clean = _PRIVACY_ENVELOPE_RE.sub("", clean)
    clean = _SCRIPT_STYLE_RE.sub(" ", clean)
    clean = _BLOCK_TAG_RE.sub("\n\n", clean)
    # Also removes inline XBRL tags such as <ix:nonFraction ...>
    clean = _TAG_RE.sub(" ", clean)
    clean = html.unescape(clean)
    clean = _INLINE_SPACE_RE.sub(" ", clean)
    clean = "\n".join(line.strip() for line in clean.split("\n"))
    clean = _BLANK_RUN_RE.sub("\n\n", clean)
    return clean.strip()
