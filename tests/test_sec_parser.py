"""Tests for SEC filing section detection."""

from __future__ import annotations

import pytest

from filing_rag.documents.sec_parser import SECTIONS, detect_sections, section_names


class TestDetectSections:
    def test_empty_input(self):
        assert detect_sections("") == []

    def test_no_items_found(self):
        text = "This is a generic document with no SEC items.\n\nPage two of generic content."
        assert detect_sections(text) == []

    def test_single_item_spans_whole_text(self):
        text = "Item 1A. Risk Factors\n\nSupply chain disruption may reduce margins."
        sections = detect_sections(text)

        assert len(sections) == 1
        assert sections[0].name == "Risk Factors"
        assert sections[0].item == "1A"
        assert sections[0].start_char == 0
        assert sections[0].end_char == len(text)
        assert sections[0].content == text

    def test_sections_in_document_order(self, sec_filing_text: str):
        sections = detect_sections(sec_filing_text)
        names = [s.name for s in sections]
        assert names == ["Business", "Risk Factors", "MD&A", "Financial Statements"]

    def test_sections_are_contiguous(self, sec_filing_text: str):
        sections = detect_sections(sec_filing_text)
        for current, following in zip(sections, sections[1:]):
            assert current.end_char == following.start_char
        assert sections[-1].end_char == len(sec_filing_text)

    def test_content_starts_with_heading(self, sec_filing_text: str):
        sections = detect_sections(sec_filing_text)
        assert sections[0].content.startswith("Item 1. Business")
        assert sections[1].content.startswith("Item 1A. Risk Factors")

    def test_text_before_first_heading_is_excluded(self, sec_filing_text: str):
        sections = detect_sections(sec_filing_text)
        assert all("PART I" not in s.content for s in sections)

    def test_positions_sorted_regardless_of_table_order(self):
        text = (
            "Item 7. Management's Discussion and Analysis\n\nRevenue grew.\n\n"
            "Item 1. Business\n\nWe sell phones."
        )
        names = [s.name for s in detect_sections(text)]
        assert names == ["MD&A", "Business"]

    def test_first_occurrence_wins(self):
        text = (
            "Table of contents\n"
            "Item 1A. Risk Factors ..... 12\n"
            "Item 7. Management's Discussion ..... 30\n\n"
            "Item 1A. Risk Factors\n\nThe actual risk discussion."
        )
        sections = detect_sections(text)
        risk = next(s for s in sections if s.name == "Risk Factors")
        assert risk.start_char == text.index("Item 1A")
        assert "actual risk discussion" not in risk.content

    @pytest.mark.parametrize(
        "heading,expected",
        [
            ("ITEM 1A. RISK FACTORS", "Risk Factors"),
            ("Item 1A: Risk Factors", "Risk Factors"),
            ("Item 1A - Risk Factors", "Risk Factors"),
            ("Item 1A—Risk Factors", "Risk Factors"),
            ("item 7. management's discussion and analysis", "MD&A"),
            ("Item 7. Management’s Discussion and Analysis", "MD&A"),
            ("Item 7A. Quantitative and Qualitative Disclosures", "Quantitative Risk"),
            ("Item 9. Changes in and Disagreements with Accountants", "Disagreements with Accountants"),
            ("Item 9A. Controls and Procedures", "Controls and Procedures"),
            ("Item 13. Certain Relationships and Related Transactions", "Related Transactions"),
            ("Item 15. Exhibits and Financial Statement Schedules", "Exhibits"),
        ],
    )
    def test_heading_variants(self, heading: str, expected: str):
        sections = detect_sections(f"{heading}\n\nBody text for the section.")
        assert [s.name for s in sections] == [expected]

    def test_item_number_not_confused_with_longer_number(self):
        # "Item 10" must not be read as Item 1 ("Business") even when followed by it
        sections = detect_sections("Item 10. Directors, Executive Officers and Governance")
        assert [s.name for s in sections] == ["Directors and Officers"]

    def test_crlf_normalized(self):
        text = "Item 1. Business\r\n\r\nWe sell phones.\r\nItem 2. Properties\r\n\r\nOffices."
        sections = detect_sections(text)
        assert [s.name for s in sections] == ["Business", "Properties"]
        assert all("\r" not in s.content for s in sections)


class TestSectionTable:
    def test_nineteen_known_sections(self):
        assert len(SECTIONS) == 19

    def test_section_names_in_table_order(self):
        names = section_names()
        assert names[0] == "Business"
        assert names[1] == "Risk Factors"
        assert "MD&A" in names
        assert names[-1] == "Exhibits"

    def test_item_numbers_unique(self):
        items = [s.item for s in SECTIONS]
        assert len(items) == len(set(items))
