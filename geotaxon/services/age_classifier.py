"""
services/age_classifier.py
──────────────────────────────────────────────────────────────────────────────
Age Bracket Classifier: numeric age + standards body → AgeBracket.

Each organisation's table is an ordered run of half-open intervals
[low, high) in years, the last one unbounded above.  Together they cover
[0, ∞) with no gaps or overlaps, so a boundary age belongs to the bracket
whose lower bound it equals (CDC: 1 → Toddler, 25 → Adult).

Input coercion:
  • anything float() accepts (int, float, Decimal, "42", "37.5") is used as is
  • anything else → 0.0  (not an error)
Ages below zero land in the first bracket and NaN in the last one.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Union

from geotaxon.domain.models import AgeBracket, AgeBracketResult, Organization

logger = logging.getLogger(__name__)

_INF = math.inf

AgeRow = tuple[float, float, AgeBracket]

AGE_TABLES: dict[Organization, tuple[AgeRow, ...]] = {
    Organization.CDC: (
        (0,  1,    AgeBracket.INFANT_CDC),
        (1,  3,    AgeBracket.TODDLER_CDC),
        (3,  6,    AgeBracket.PRESCHOOLER_CDC),
        (6,  12,   AgeBracket.CHILD_CDC),
        (12, 18,   AgeBracket.TEENAGER_CDC),
        (18, 25,   AgeBracket.YOUNG_ADULT_CDC),
        (25, 45,   AgeBracket.ADULT_CDC),
        (45, 65,   AgeBracket.MIDDLE_AGED_CDC),
        (65, _INF, AgeBracket.SENIOR_CDC),
    ),
    Organization.WHO: (
        (0,  1,    AgeBracket.INFANT_WHO),
        (1,  5,    AgeBracket.EARLY_CHILDHOOD_WHO),
        (5,  10,   AgeBracket.CHILDHOOD_WHO),
        (10, 20,   AgeBracket.ADOLESCENT_WHO),
        (20, 40,   AgeBracket.YOUNG_ADULT_WHO),
        (40, 65,   AgeBracket.MIDDLE_AGED_WHO),
        (65, _INF, AgeBracket.SENIOR_WHO),
    ),
    Organization.CENSUS: (
        (0,  5,    AgeBracket.INFANT_CENSUS),
        (5,  15,   AgeBracket.CHILD_CENSUS),
        (15, 25,   AgeBracket.YOUTH_CENSUS),
        (25, 35,   AgeBracket.YOUNG_ADULT_CENSUS),
        (35, 65,   AgeBracket.MIDDLE_AGED_CENSUS),
        (65, 75,   AgeBracket.SENIOR_CENSUS),
        (75, 85,   AgeBracket.SENIOR_MIDDLE_OLD_CENSUS),
        (85, _INF, AgeBracket.SENIOR_OLDEST_OLD_CENSUS),
    ),
}


class AgeBracketClassifier:
    """Stateless age-bracket lookup over AGE_TABLES."""

    def classify(
        self,
        age: Any,
        organization: Union[Organization, str] = Organization.CDC,
    ) -> AgeBracket:
        """Return the bracket containing ``age`` under ``organization``.

        Raises:
            ValueError: If ``organization`` is not a known Organization value.
        """
        return bracket_for(coerce_age(age), Organization(organization))

    def describe(
        self,
        age: Any,
        organization: Union[Organization, str] = Organization.CDC,
    ) -> AgeBracketResult:
        """classify() plus the bracket's display metadata."""
        org = Organization(organization)
        value = coerce_age(age)
        bracket = bracket_for(value, org)
        return AgeBracketResult(
            age=value,
            organization=org,
            bracket=bracket,
            display_name=bracket.display_name,
            age_range=bracket.age_range,
            is_adult=bracket.is_adult,
        )

    def brackets_for(self, organization: Union[Organization, str]) -> list[AgeRow]:
        """Ordered (low, high, bracket) rows for an organisation."""
        return list(AGE_TABLES[Organization(organization)])


# ── Pure functions ─────────────────────────────────────────────────────────

def coerce_age(age: Any) -> float:
    """Convert an arbitrary age input to float; unparseable input → 0.0."""
    try:
        return float(age)
    except OverflowError:
        return _INF if age > 0 else -_INF
    except (TypeError, ValueError):
        logger.debug("Unparseable age %r — treating as 0.0", age)
        return 0.0


def bracket_for(age: float, organization: Organization) -> AgeBracket:
    """First bracket whose upper bound exceeds ``age``.

    Rows are ordered and contiguous, so testing the upper bound alone is the
    same as testing [low, high).  Values below the first lower bound fall
    into the first bracket; NaN compares false everywhere and falls through
    to the last.
    """
    table = AGE_TABLES[organization]
    for _low, high, bracket in table:
        if age < high:
            return bracket
    return table[-1][2]
