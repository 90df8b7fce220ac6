"""SEC filing section detection for 10-K and 10-Q documents.

Each known ITEM heading has one pattern. The first match of every pattern
becomes a section boundary; a section runs from its heading to the next
detected heading (or end of text).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Section patterns
# ---------------------------------------------------------------------------

# Punctuation allowed between the item number and its title:
# "Item 1A. Risk Factors", "ITEM 1A: RISK FACTORS", "Item 1A — Risk Factors".
_ITEM_SEP = r"\s*[.:\-–—]?\s*"


@dataclass(frozen=True)
class SectionPattern:
    """One entry of the heading table."""

    item: str
    name: str
    pattern: re.Pattern[str]


def _item(item: str, name: str, title: str) -> SectionPattern:
    return SectionPattern(
        item=item,
        name=name,
        pattern=re.compile(rf"Item\s*{item}(?!\d){_ITEM_SEP}{title}", re.IGNORECASE),
    )


SECTIONS: tuple[SectionPattern, ...] = (
    _item("1", "Business", r"Business"),
    _item("1A", "Risk Factors", r"Risk\s*Factors"),
    _item("1B", "Unresolved Staff Comments", r"Unresolved"),
    _item("2", "Properties", r"Properties"),
    _item("3", "Legal Proceedings", r"Legal"),
    _item("4", "Mine Safety", r"Mine\s*Safety"),
    _item("5", "Market for Common Equity", r"Market"),
    _item("6", "Selected Financial Data", r"Selected"),
    _item("7", "MD&A", r"Management[’']?s?\s*Discussion"),
    _item("7A", "Quantitative Risk", r"Quantitative"),
    _item("8", "Financial Statements", r"Financial\s*Statements"),
    _item("9", "Disagreements with Accountants", r"Changes.*Disagreements"),
    _item("9A", "Controls and Procedures", r"Controls"),
    _item("10", "Directors and Officers", r"Directors"),
    _item("11", "Executive Compensation", r"Executive\s*Compensation"),
    _item("12", "Security Ownership", r"Security\s*Ownership"),
    _item("13", "Related Transactions", r"Certain\s*Relationships"),
    _item("14", "Principal Accountant Fees", r"Principal\s*Accountant"),
    _item("15", "Exhibits", r"Exhibits"),
)


@dataclass(frozen=True)
class DetectedSection:
    """A labeled span of filing text following a recognized heading.

    Offsets refer to the text after ``\\r\\n`` normalization.
    """

    name: str
    item: str
    start_char: int
    end_char: int
    content: str


def detect_sections(text: str) -> list[DetectedSection]:
    """Split filing text into labeled sections.

    Only the first occurrence of each heading is used, so a table of
    contents near the top of a filing can claim a heading before the real
    section does.

    Args:
        text: Full filing text.

    Returns:
        Sections ordered by position. Empty when no heading is found.
    """
    normalized = text.replace("\r\n", "\n")

    matches: list[tuple[int, SectionPattern]] = []
    for section in SECTIONS:
        m = section.pattern.search(normalized)
        if m is not None:
            matches.append((m.start(), section))

    matches.sort(key=lambda match: match[0])

    detected: list[DetectedSection] = []
    for i, (start_char, section) in enumerate(matches):
        end_char = matches[i + 1][0] if i + 1 < len(matches) else len(normalized)
        content = normalized[start_char:end_char].strip()
        if not content:
            continue
        detected.append(DetectedSection(
            name=section.name,
            item=section.item,
            start_char=start_char,
            end_char=end_char,
            content=content,
        ))

    logger.info("Detected %d sections in %d chars of filing text", len(detected), len(normalized))
    return detected


def section_names() -> list[str]:
    """Return the labels the detector can assign, in table order."""
    return [s.name for s in SECTIONS]
