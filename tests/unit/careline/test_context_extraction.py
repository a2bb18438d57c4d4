"""
Tests for text normalization and context extraction.

Covers:
- Duration templates, number interpolation and the regex fallback
- Severity priority order
- Child / pregnancy flags and comorbidity extraction
- Critical red flag scan
"""

import sys

import pytest

from careline.domain.models import ExtractedContext
from careline.services.symptom_engine import (
    extract_context,
    extract_duration,
    extract_severity,
    find_first_number,
    format_context,
    has_critical_red_flags,
    normalize,
)


class TestDuration:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("pain for 3 days", "for 3 days"),
            ("since yesterday", "since yesterday"),
            ("cough since last night", "since last night"),
            ("itchy for a few days now", "for a few days"),
            ("tired for several days", "for several days"),
            ("back pain for months", "for months"),
            ("dizzy for 1 week", "for 1 week"),
            ("dizzy for 2 weeks", "for 2 weeks"),
            ("fever for 12 hours", "for 12 hours"),
            ("fever for 1 hour", "for 1 hour"),
        ],
    )
    def test_extracts_known_phrases(self, text: str, expected: str) -> None:
        assert extract_duration(normalize(text)) == expected

    @pytest.mark.parametrize("text", ["i have a cough", "", "took 2 pills", "for the kids"])
    def test_no_duration_phrase(self, text: str) -> None:
        assert extract_duration(text) is None

    def test_placeholder_template_takes_first_number_in_text(self) -> None:
        # "for days" matches the placeholder template; the first integer anywhere is used
        assert extract_duration("age 7, fever for days") == "for 7 days"

    def test_placeholder_template_without_number_returns_plain_phrase(self) -> None:
        assert extract_duration("fever for days") == "for days"

    def test_declared_order_wins_over_position_in_text(self) -> None:
        assert extract_duration("for a while, really since yesterday") == "since yesterday"

    def test_fallback_keeps_original_spacing(self) -> None:
        assert extract_duration("for 3  days") == "for 3  days"


class TestSeverity:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("mild headache", "mild"),
            ("severe chest pain", "severe"),
            ("sharp and throbbing", "sharp"),
            ("it is worsening", "worse"),
            ("moderate but sometimes severe", "moderate"),
        ],
    )
    def test_first_term_in_priority_order(self, text: str, expected: str) -> None:
        assert extract_severity(text) == expected

    def test_no_severity(self) -> None:
        assert extract_severity("a cough") is None


class TestContextFlags:
    def test_child_and_pregnancy_flags(self) -> None:
        context = extract_context("my daughter is fine but i am pregnant")

        assert context.is_child
        assert context.is_pregnant

    def test_comorbidities_in_list_order(self) -> None:
        context = extract_context("cancer survivor with copd and diabetes")

        assert context.comorbidities == ("diabetes", "copd", "cancer")

    def test_overlapping_comorbidities_both_reported(self) -> None:
        context = extract_context("high blood pressure and heart disease")

        assert context.comorbidities == ("high blood pressure", "heart disease")

    def test_empty_input(self) -> None:
        assert extract_context("") == ExtractedContext()


class TestFormatting:
    def test_empty_context_has_no_line(self) -> None:
        assert format_context(ExtractedContext()) is None

    def test_single_part(self) -> None:
        assert format_context(ExtractedContext(is_child=True)) == "Context: child involved"


class TestHelpers:
    def test_normalize_lowercases_only(self) -> None:
        assert normalize("  Severe CHEST Pain ") == "  severe chest pain "

    def test_find_first_number(self) -> None:
        assert find_first_number("took 2 pills at 10") == 2
        assert find_first_number("no digits") is None

    @pytest.mark.parametrize("text", ["slurred speech", "black stool", "the worst headache ever"])
    def test_critical_red_flags(self, text: str) -> None:
        assert has_critical_red_flags(text)

    def test_no_critical_red_flags(self) -> None:
        assert not has_critical_red_flags("mild cough")

    @pytest.mark.skipif(sys.get_int_max_str_digits() == 0, reason="int conversion limit disabled")
    def test_digit_run_past_conversion_limit_counts_as_no_number(self) -> None:
        digits = "9" * (sys.get_int_max_str_digits() + 1)

        assert find_first_number(f"code {digits}") is None
        assert extract_duration(f"cough for days, code {digits}") == "for days"
