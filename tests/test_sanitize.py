"""Tests for filing document cleaning."""

from __future__ import annotations

from filing_rag.documents.sanitize import clean_filing_text


class TestCleanFilingText:
    def test_plain_text_unchanged(self):
        text = "Apple reported revenue of $94.9 billion in Q4 2024."
        assert clean_filing_text(text) == text

    def test_empty(self):
        assert clean_filing_text("") == ""
        assert clean_filing_text("   \n\n  ") == ""

    def test_strips_tags(self):
        assert clean_filing_text("<b>Net sales</b> increased <i>8%</i>") == "Net sales increased 8%"

    def test_block_tags_become_paragraph_breaks(self):
        html = "<p>Item 1. Business</p><p>We design phones.</p><div>We sell services.</div>"
        assert clean_filing_text(html) == (
            "Item 1. Business\n\nWe design phones.\n\nWe sell services."
        )

    def test_br_and_table_rows(self):
        html = "Line one<br/>Line two<table><tr><td>A</td></tr><tr><td>B</td></tr></table>"
        assert clean_filing_text(html) == "Line one\n\nLine two A\n\nB"

    def test_removes_script_and_style(self):
        html = (
            "<style>p { color: red; }</style><script>var x = 1;</script>"
            "<p>Revenue grew.</p>"
        )
        assert clean_filing_text(html) == "Revenue grew."

    def test_unescapes_entities(self):
        assert clean_filing_text("AT&amp;T&#8217;s net income&nbsp;rose") == "AT&T’s net income rose"

    def test_removes_inline_xbrl_tags(self):
        html = '<ix:nonFraction name="us-gaap:Revenues" scale="6">391,035</ix:nonFraction> million'
        assert clean_filing_text(html) == "391,035 million"

    def test_removes_privacy_envelope(self):
        text = (
            "-----BEGIN PRIVACY-ENHANCED MESSAGE-----\n"
            "Proc-Type: 2001,MIC-CLEAR\n"
            "-----END PRIVACY-ENHANCED MESSAGE-----\n"
            "Item 1. Business"
        )
        assert clean_filing_text(text) == "Item 1. Business"

    def test_collapses_blank_runs(self):
        text = "First paragraph.\r\n\r\n\r\n   \n\nSecond paragraph."
        assert clean_filing_text(text) == "First paragraph.\n\nSecond paragraph."

    def test_collapses_inline_whitespace(self):
        assert clean_filing_text("Total \t  assets:\xa0\xa0$352.6   billion") == (
            "Total assets: $352.6 billion"
        )

    def test_single_newlines_kept(self):
        assert clean_filing_text("Line one\nLine two") == "Line one\nLine two"
