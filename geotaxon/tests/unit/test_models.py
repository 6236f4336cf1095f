"""
tests/unit/test_models.py
──────────────────────────────────────────────────────────────────────────────
Unit tests for domain model validation (Pydantic).
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from geotaxon.domain.models import (
    AdministrativeZone,
    AgeBracket,
    Coordinate,
    Country,
    Organization,
    Placemark,
    ZoneKind,
)


class TestCountry:
    def test_code_is_uppercased(self):
        assert Country(code="fr", name="France").code == "FR"

    def test_name_falls_back_to_code(self):
        assert Country(code="US").name == "US"

    def test_empty_name_falls_back_to_code(self):
        assert Country(code="JP", name="").name == "JP"

    def test_equality_ignores_name(self):
        assert Country(code="GB", name="United Kingdom") == Country(code="GB", name="Royaume-Uni")

    def test_hash_matches_equality(self):
        a = Country(code="DE", name="Germany")
        b = Country(code="de", name="Allemagne")
        assert len({a, b}) == 1

    def test_str_is_code(self):
        assert str(Country(code="CA", name="Canada")) == "CA"

    def test_code_length_enforced(self):
        with pytest.raises(ValidationError):
            Country(code="USA")

    def test_frozen(self):
        c = Country(code="US", name="United States")
        with pytest.raises(ValidationError):
            c.code = "FR"


class TestAdministrativeZone:
    @pytest.fixture
    def us(self):
        return Country(code="US", name="United States")

    @pytest.mark.parametrize("ctor, kind", [
        (AdministrativeZone.state, ZoneKind.STATE),
        (AdministrativeZone.territory, ZoneKind.TERRITORY),
        (AdministrativeZone.province, ZoneKind.PROVINCE),
        (AdministrativeZone.region, ZoneKind.REGION),
        (AdministrativeZone.department, ZoneKind.DEPARTMENT),
        (AdministrativeZone.county, ZoneKind.COUNTY),
        (AdministrativeZone.municipality, ZoneKind.MUNICIPALITY),
        (AdministrativeZone.unknown, ZoneKind.UNKNOWN),
    ])
    def test_variant_constructors(self, us, ctor, kind):
        zone = ctor("Somewhere", us)
        assert zone.kind == kind
        assert zone.name == "Somewhere"
        assert zone.country == us

    def test_to_dict_is_json_safe(self, us):
        d = AdministrativeZone.territory("Guam", us).to_dict()
        assert d == {
            "kind": "territory",
            "name": "Guam",
            "country": {"code": "US", "name": "United States"},
        }

    def test_frozen(self, us):
        zone = AdministrativeZone.state("Ohio", us)
        with pytest.raises(ValidationError):
            zone.name = "Iowa"

    def test_equal_zones(self, us):
        assert AdministrativeZone.state("Ohio", us) == AdministrativeZone.state("Ohio", us)
        assert AdministrativeZone.state("Ohio", us) != AdministrativeZone.unknown("Ohio", us)


class TestCoordinate:
    def test_valid(self):
        c = Coordinate(latitude=-33.8688, longitude=151.2093)
        assert c.latitude == -33.8688

    @pytest.mark.parametrize("lat, lon", [(90.1, 0), (-90.1, 0), (0, 180.1), (0, -180.1)])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValidationError):
            Coordinate(latitude=lat, longitude=lon)

    def test_distance_to_self_is_zero(self):
        c = Coordinate(latitude=48.8566, longitude=2.3522)
        assert c.distance_to(c) == 0.0

    def test_distance_paris_london(self):
        paris = Coordinate(latitude=48.8566, longitude=2.3522)
        london = Coordinate(latitude=51.5074, longitude=-0.1278)
        # ~343.5 km great-circle
        assert paris.distance_to(london) == pytest.approx(343_500, rel=0.01)

    def test_distance_is_symmetric(self):
        a = Coordinate(latitude=10, longitude=20)
        b = Coordinate(latitude=-30, longitude=-60)
        assert a.distance_to(b) == pytest.approx(b.distance_to(a))


class TestPlacemark:
    def test_complete(self):
        assert Placemark(iso_country_code="US", administrative_area="Ohio").is_complete

    @pytest.mark.parametrize("kwargs", [
        {},
        {"iso_country_code": "US"},
        {"administrative_area": "Ohio"},
        {"iso_country_code": "", "administrative_area": "Ohio"},
    ])
    def test_incomplete(self, kwargs):
        assert not Placemark(**kwargs).is_complete


class TestAgeBracket:
    def test_every_bracket_has_metadata(self):
        for bracket in AgeBracket:
            assert bracket.display_name
            assert bracket.age_range.endswith("years")
            assert isinstance(bracket.is_adult, bool)
            assert isinstance(bracket.organization, Organization)

    def test_family_sizes(self):
        counts = {org: 0 for org in Organization}
        for bracket in AgeBracket:
            counts[bracket.organization] += 1
        assert counts == {Organization.CDC: 9, Organization.WHO: 7, Organization.CENSUS: 8}

    def test_shared_display_names(self):
        assert AgeBracket.TEENAGER_CDC.display_name == "Teenager / Adolescent"
        assert AgeBracket.ADOLESCENT_WHO.display_name == "Teenager / Adolescent"
        assert AgeBracket.CHILDHOOD_WHO.display_name == "Child"

    def test_census_senior_names(self):
        assert AgeBracket.SENIOR_MIDDLE_OLD_CENSUS.display_name == "Middle Old (Senior)"
        assert AgeBracket.SENIOR_OLDEST_OLD_CENSUS.age_range == "85+ years"

    def test_adulthood(self):
        assert not AgeBracket.TEENAGER_CDC.is_adult
        assert AgeBracket.YOUNG_ADULT_CDC.is_adult
        assert not AgeBracket.YOUTH_CENSUS.is_adult
        assert AgeBracket.YOUNG_ADULT_WHO.is_adult
