"""
domain/models.py
──────────────────────────────────────────────────────────────────────────────
Pure domain objects — Pydantic models and enums with no imports from adapters
or ports.

These models are the lingua franca of the entire system:
  • adapters produce and consume them (Placemark, Coordinate)
  • services classify into them (AdministrativeZone, AgeBracket)
  • interfaces (CLI, Streamlit) serialise them
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Mean Earth radius (IUGG), metres
_EARTH_RADIUS_M = 6_371_008.8


# ── Country ────────────────────────────────────────────────────────────────────

class Country(BaseModel):
    """An ISO 3166-1 alpha-2 country.

    Identity is the code alone: two Country values with the same code are
    equal even if their display names were resolved under different locales.
    Build instances through services.country_catalog.CountryCatalog so the
    code is guaranteed to be recognised and the name localised.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=2, max_length=2,
                      description="Canonical uppercase ISO 3166-1 alpha-2 code")
    name: str = Field("", validate_default=True,
                      description="Locale-resolved display name; falls back to the code")

    @field_validator("code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()

    @field_validator("name")
    @classmethod
    def name_or_code(cls, v: str, info: ValidationInfo) -> str:
        return v or info.data.get("code", "")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Country):
            return self.code == other.code
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.code


# ── Administrative zones ───────────────────────────────────────────────────────

class ZoneKind(str, Enum):
    """Variant tag of an AdministrativeZone."""
    STATE        = "state"
    TERRITORY    = "territory"
    PROVINCE     = "province"
    REGION       = "region"
    DEPARTMENT   = "department"
    COUNTY       = "county"
    MUNICIPALITY = "municipality"
    UNKNOWN      = "unknown"


class AdministrativeZone(BaseModel):
    """A named administrative subdivision of a country.

    A tagged union expressed as a single frozen model: ``kind`` selects the
    variant, ``name`` and ``country`` are shared by every variant.  Instances
    are never updated in place; reclassification produces a new zone.
    """

    model_config = ConfigDict(frozen=True)

    kind: ZoneKind
    name: str
    country: Country

    # Variant constructors, e.g. AdministrativeZone.state("California", us)

    @classmethod
    def state(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.STATE, name=name, country=country)

    @classmethod
    def territory(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.TERRITORY, name=name, country=country)

    @classmethod
    def province(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.PROVINCE, name=name, country=country)

    @classmethod
    def region(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.REGION, name=name, country=country)

    @classmethod
    def department(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.DEPARTMENT, name=name, country=country)

    @classmethod
    def county(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.COUNTY, name=name, country=country)

    @classmethod
    def municipality(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.MUNICIPALITY, name=name, country=country)

    @classmethod
    def unknown(cls, name: str, country: Country) -> AdministrativeZone:
        return cls(kind=ZoneKind.UNKNOWN, name=name, country=country)

    def to_dict(self) -> dict:
        """Serialise to a plain JSON-safe dict."""
        return self.model_dump(mode="json")


# ── Geocoding ──────────────────────────────────────────────────────────────────

class Coordinate(BaseModel):
    """A WGS-84 latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def distance_to(self, other: Coordinate) -> float:
        """Great-circle distance to another coordinate, in metres (haversine)."""
        lat1, lon1 = math.radians(self.latitude), math.radians(self.longitude)
        lat2, lon2 = math.radians(other.latitude), math.radians(other.longitude)
        dlat = lat2 - lat1
        dlon = lon2 - lon1
        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        return 2 * _EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


class Placemark(BaseModel):
    """Provider-neutral reverse-geocoding record.

    Adapters fill what the provider returned; ZoneResolver requires both
    ``iso_country_code`` and ``administrative_area`` and treats a placemark
    missing either as no result.
    """

    iso_country_code:    Optional[str] = None
    administrative_area: Optional[str] = None
    country_name:        Optional[str] = None
    locality:            Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.iso_country_code) and bool(self.administrative_area)


# ── Age brackets ───────────────────────────────────────────────────────────────

class Organization(str, Enum):
    """Standards body whose age thresholds are applied."""
    CDC    = "cdc"      # Centers for Disease Control
    WHO    = "who"      # World Health Organization
    CENSUS = "census"   # U.S. Census Bureau


class AgeBracket(str, Enum):
    """Age bracket labels, one family per Organization."""

    # CDC
    INFANT_CDC       = "infant_cdc"
    TODDLER_CDC      = "toddler_cdc"
    PRESCHOOLER_CDC  = "preschooler_cdc"
    CHILD_CDC        = "child_cdc"
    TEENAGER_CDC     = "teenager_cdc"
    YOUNG_ADULT_CDC  = "young_adult_cdc"
    ADULT_CDC        = "adult_cdc"
    MIDDLE_AGED_CDC  = "middle_aged_cdc"
    SENIOR_CDC       = "senior_cdc"

    # WHO
    INFANT_WHO          = "infant_who"
    EARLY_CHILDHOOD_WHO = "early_childhood_who"
    CHILDHOOD_WHO       = "childhood_who"
    ADOLESCENT_WHO      = "adolescent_who"
    YOUNG_ADULT_WHO     = "young_adult_who"
    MIDDLE_AGED_WHO     = "middle_aged_who"
    SENIOR_WHO          = "senior_who"

    # U.S. Census
    INFANT_CENSUS             = "infant_census"
    CHILD_CENSUS              = "child_census"
    YOUTH_CENSUS              = "youth_census"
    YOUNG_ADULT_CENSUS        = "young_adult_census"
    MIDDLE_AGED_CENSUS        = "middle_aged_census"
    SENIOR_CENSUS             = "senior_census"
    SENIOR_MIDDLE_OLD_CENSUS  = "senior_middle_old_census"
    SENIOR_OLDEST_OLD_CENSUS  = "senior_oldest_old_census"

    @property
    def display_name(self) -> str:
        """Human-friendly name, e.g. "Young Adult"."""
        return _BRACKET_META[self][0]

    @property
    def age_range(self) -> str:
        """Official age range text, e.g. "18-24 years"."""
        return _BRACKET_META[self][1]

    @property
    def is_adult(self) -> bool:
        return _BRACKET_META[self][2]

    @property
    def organization(self) -> Organization:
        return _BRACKET_META[self][3]


# bracket → (display_name, age_range, is_adult, organization)
_BRACKET_META: dict[AgeBracket, tuple[str, str, bool, Organization]] = {
    AgeBracket.INFANT_CDC:      ("Infant",                "0-1 years",   False, Organization.CDC),
    AgeBracket.TODDLER_CDC:     ("Toddler",               "1-3 years",   False, Organization.CDC),
    AgeBracket.PRESCHOOLER_CDC: ("Preschooler",           "3-5 years",   False, Organization.CDC),
    AgeBracket.CHILD_CDC:       ("Child",                 "6-11 years",  False, Organization.CDC),
    AgeBracket.TEENAGER_CDC:    ("Teenager / Adolescent", "12-17 years", False, Organization.CDC),
    AgeBracket.YOUNG_ADULT_CDC: ("Young Adult",           "18-24 years", True,  Organization.CDC),
    AgeBracket.ADULT_CDC:       ("Adult",                 "25-44 years", True,  Organization.CDC),
    AgeBracket.MIDDLE_AGED_CDC: ("Middle Aged",           "45-64 years", True,  Organization.CDC),
    AgeBracket.SENIOR_CDC:      ("Senior",                "65+ years",   True,  Organization.CDC),

    AgeBracket.INFANT_WHO:          ("Infant",                "0-1 years",   False, Organization.WHO),
    AgeBracket.EARLY_CHILDHOOD_WHO: ("Early Childhood",       "1-4 years",   False, Organization.WHO),
    AgeBracket.CHILDHOOD_WHO:       ("Child",                 "5-9 years",   False, Organization.WHO),
    AgeBracket.ADOLESCENT_WHO:      ("Teenager / Adolescent", "10-19 years", False, Organization.WHO),
    AgeBracket.YOUNG_ADULT_WHO:     ("Young Adult",           "20-39 years", True,  Organization.WHO),
    AgeBracket.MIDDLE_AGED_WHO:     ("Middle Aged",           "40-64 years", True,  Organization.WHO),
    AgeBracket.SENIOR_WHO:          ("Senior",                "65+ years",   True,  Organization.WHO),

    AgeBracket.INFANT_CENSUS:            ("Infant",              "0-4 years",   False, Organization.CENSUS),
    AgeBracket.CHILD_CENSUS:             ("Child",               "5-14 years",  False, Organization.CENSUS),
    AgeBracket.YOUTH_CENSUS:             ("Youth",               "15-24 years", False, Organization.CENSUS),
    AgeBracket.YOUNG_ADULT_CENSUS:       ("Young Adult",         "25-34 years", True,  Organization.CENSUS),
    AgeBracket.MIDDLE_AGED_CENSUS:       ("Middle Aged",         "35-64 years", True,  Organization.CENSUS),
    AgeBracket.SENIOR_CENSUS:            ("Senior",              "65-74 years", True,  Organization.CENSUS),
    AgeBracket.SENIOR_MIDDLE_OLD_CENSUS: ("Middle Old (Senior)", "75-84 years", True,  Organization.CENSUS),
    AgeBracket.SENIOR_OLDEST_OLD_CENSUS: ("Oldest Old (Senior)", "85+ years",   True,  Organization.CENSUS),
}


class AgeBracketResult(BaseModel):
    """A classified age, as returned by AgeBracketClassifier.describe()."""

    age:          float
    organization: Organization
    bracket:      AgeBracket
    display_name: str
    age_range:    str
    is_adult:     bool

    def to_dict(self) -> dict:
        """Serialise to a plain JSON-safe dict."""
        return self.model_dump(mode="json")
