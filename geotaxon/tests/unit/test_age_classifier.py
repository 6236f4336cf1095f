"""
tests/unit/test_age_classifier.py
──────────────────────────────────────────────────────────────────────────────
Unit tests for AgeBracketClassifier and the AGE_TABLES it walks.

Verifies:
  • every organisation's table partitions [0, ∞) with no gaps or overlaps
  • boundary ages belong to the bracket whose lower bound they equal
  • input coercion (strings, Decimals, junk → 0.0) and out-of-range ages
"""
from __future__ import annotations

import math
from decimal import Decimal

import pytest

from geotaxon.domain.models import AgeBracket, Organization
from geotaxon.services.age_classifier import AGE_TABLES, bracket_for, coerce_age


class TestTables:
    @pytest.mark.parametrize("org", list(Organization))
    def test_contiguous_from_zero(self, org):
        rows = AGE_TABLES[org]
        assert rows[0][0] == 0
        assert math.isinf(rows[-1][1])
        for (_, high, _), (low, _, _) in zip(rows, rows[1:]):
            assert high == low

    @pytest.mark.parametrize("org", list(Organization))
    def test_brackets_belong_to_organisation(self, org):
        assert all(b.organization == org for _, _, b in AGE_TABLES[org])

    @pytest.mark.parametrize("org", list(Organization))
    def test_exactly_one_bracket_per_age(self, org):
        for tenth in range(0, 1200):
            age = tenth / 10
            hits = [b for low, high, b in AGE_TABLES[org] if low <= age < high]
            assert len(hits) == 1
            assert bracket_for(age, org) == hits[0]

    def test_every_bracket_used_once(self):
        used = [b for rows in AGE_TABLES.values() for _, _, b in rows]
        assert sorted(used) == sorted(AgeBracket)


class TestCDC:
    @pytest.mark.parametrize("age, bracket", [
        (0, AgeBracket.INFANT_CDC),
        (0.99, AgeBracket.INFANT_CDC),
        (1, AgeBracket.TODDLER_CDC),
        (3, AgeBracket.PRESCHOOLER_CDC),
        (5.9, AgeBracket.PRESCHOOLER_CDC),
        (6, AgeBracket.CHILD_CDC),
        (12, AgeBracket.TEENAGER_CDC),
        (17.99, AgeBracket.TEENAGER_CDC),
        (18, AgeBracket.YOUNG_ADULT_CDC),
        (24.9, AgeBracket.YOUNG_ADULT_CDC),
        (25, AgeBracket.ADULT_CDC),
        (45, AgeBracket.MIDDLE_AGED_CDC),
        (64.999, AgeBracket.MIDDLE_AGED_CDC),
        (65, AgeBracket.SENIOR_CDC),
        (120, AgeBracket.SENIOR_CDC),
    ])
    def test_boundaries(self, age_classifier, age, bracket):
        assert age_classifier.classify(age, Organization.CDC) == bracket

    def test_cdc_is_default(self, age_classifier):
        assert age_classifier.classify(30) == AgeBracket.ADULT_CDC


class TestWHO:
    @pytest.mark.parametrize("age, bracket", [
        (0.5, AgeBracket.INFANT_WHO),
        (1, AgeBracket.EARLY_CHILDHOOD_WHO),
        (4.99, AgeBracket.EARLY_CHILDHOOD_WHO),
        (5, AgeBracket.CHILDHOOD_WHO),
        (10, AgeBracket.ADOLESCENT_WHO),
        (19.5, AgeBracket.ADOLESCENT_WHO),
        (20, AgeBracket.YOUNG_ADULT_WHO),
        (40, AgeBracket.MIDDLE_AGED_WHO),
        (65, AgeBracket.SENIOR_WHO),
    ])
    def test_boundaries(self, age_classifier, age, bracket):
        assert age_classifier.classify(age, Organization.WHO) == bracket


class TestCensus:
    @pytest.mark.parametrize("age, bracket", [
        (4, AgeBracket.INFANT_CENSUS),
        (5, AgeBracket.CHILD_CENSUS),
        (15, AgeBracket.YOUTH_CENSUS),
        (25, AgeBracket.YOUNG_ADULT_CENSUS),
        (35, AgeBracket.MIDDLE_AGED_CENSUS),
        (65, AgeBracket.SENIOR_CENSUS),
        (74.9, AgeBracket.SENIOR_CENSUS),
        (75, AgeBracket.SENIOR_MIDDLE_OLD_CENSUS),
        (85, AgeBracket.SENIOR_OLDEST_OLD_CENSUS),
        (110, AgeBracket.SENIOR_OLDEST_OLD_CENSUS),
    ])
    def test_boundaries(self, age_classifier, age, bracket):
        assert age_classifier.classify(age, Organization.CENSUS) == bracket


class TestCoercion:
    @pytest.mark.parametrize("raw, expected", [
        (42, 42.0),
        (37.5, 37.5),
        ("42", 42.0),
        ("37.5", 37.5),
        (Decimal("18"), 18.0),
        (True, 1.0),
    ])
    def test_numeric_inputs(self, raw, expected):
        assert coerce_age(raw) == expected

    @pytest.mark.parametrize("raw", [None, "abc", "", [], {}, object()])
    def test_unparseable_is_zero(self, raw):
        assert coerce_age(raw) == 0.0

    def test_huge_int_is_infinite(self):
        assert coerce_age(10 ** 400) == math.inf

    def test_unparseable_classified_as_first_bracket(self, age_classifier):
        assert age_classifier.classify("not an age", "census") == AgeBracket.INFANT_CENSUS

    def test_string_organisation(self, age_classifier):
        assert age_classifier.classify("70", "who") == AgeBracket.SENIOR_WHO

    def test_unknown_organisation_raises(self, age_classifier):
        with pytest.raises(ValueError):
            age_classifier.classify(30, "unicef")


class TestOutOfRange:
    def test_negative_is_first_bracket(self, age_classifier):
        assert age_classifier.classify(-3) == AgeBracket.INFANT_CDC

    def test_infinity_is_last_bracket(self, age_classifier):
        assert age_classifier.classify(math.inf, "who") == AgeBracket.SENIOR_WHO

    def test_nan_is_last_bracket(self, age_classifier):
        assert age_classifier.classify(math.nan, "census") == AgeBracket.SENIOR_OLDEST_OLD_CENSUS


class TestDescribe:
    def test_result_fields(self, age_classifier):
        result = age_classifier.describe("24.9", "cdc")
        assert result.age == 24.9
        assert result.organization == Organization.CDC
        assert result.bracket == AgeBracket.YOUNG_ADULT_CDC
        assert result.display_name == "Young Adult"
        assert result.age_range == "18-24 years"
        assert result.is_adult is True

    def test_to_dict(self, age_classifier):
        d = age_classifier.describe(8, Organization.WHO).to_dict()
        assert d["bracket"] == "childhood_who"
        assert d["organization"] == "who"
        assert d["is_adult"] is False

    def test_brackets_for(self, age_classifier):
        rows = age_classifier.brackets_for("census")
        assert [b for _, _, b in rows][-1] == AgeBracket.SENIOR_OLDEST_OLD_CENSUS
        assert len(rows) == 8
