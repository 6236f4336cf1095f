"""
tests/unit/test_country_catalog.py
──────────────────────────────────────────────────────────────────────────────
Unit tests for CountryCatalog.

Verifies:
  • lookup() is case-insensitive and returns None for unknown codes
  • from_code() substitutes the default country instead of failing
  • preferred_country() resolution order: store → locale region → default
  • save_as_preferred() writes the uppercase code under "preferredCountry"
"""
from __future__ import annotations

from dataclasses import replace

import pytest

from geotaxon.adapters.memory_store import InMemoryStore
from geotaxon.domain.countries import COUNTRY_CODES
from geotaxon.domain.exceptions import ConfigurationError
from geotaxon.domain.models import Country
from geotaxon.services.country_catalog import PREFERRED_COUNTRY_KEY, CountryCatalog


class TestLookup:
    @pytest.mark.parametrize("code", ["US", "us", "Us", "uS"])
    def test_case_insensitive(self, catalog, code):
        assert catalog.lookup(code).code == "US"

    def test_english_name(self, catalog):
        assert catalog.lookup("gb").name == "United Kingdom"

    @pytest.mark.parametrize("code", ["", "U", "USA", "XX", "ZZ", "1A", "ß"])
    def test_unrecognised_returns_none(self, catalog, code):
        assert catalog.lookup(code) is None

    @pytest.mark.parametrize("code", ["IR", "MT", "MY"])
    def test_unlisted_iso_codes_return_none(self, catalog, code):
        assert catalog.lookup(code) is None

    def test_short_english_name_preferred(self, catalog):
        assert catalog.lookup("BO").name == "Bolivia"

    def test_lookup_of_code_round_trips(self, catalog):
        for code in catalog.codes:
            assert catalog.lookup(code).code == code


class TestFromCode:
    def test_known_code(self, catalog):
        assert catalog.from_code("fr") == Country(code="FR")

    @pytest.mark.parametrize("code", ["", "XX", "united states"])
    def test_unknown_becomes_default(self, catalog, code):
        assert catalog.from_code(code).code == "US"

    def test_default_country_is_configurable(self, fixed_names, store, settings):
        cat = CountryCatalog(
            store=store,
            names=fixed_names(),
            settings=replace(settings, default_country="gb"),
        )
        assert cat.from_code("??").code == "GB"

    def test_invalid_default_rejected(self, fixed_names, store, settings):
        with pytest.raises(ConfigurationError, match="DEFAULT_COUNTRY"):
            CountryCatalog(
                store=store,
                names=fixed_names(),
                settings=replace(settings, default_country="XX"),
            )


class TestEnumeration:
    def test_codes_sorted_and_complete(self, catalog):
        assert catalog.codes == sorted(COUNTRY_CODES)
        assert len(catalog.codes) == 246

    def test_all_countries_named(self, catalog):
        countries = catalog.all_countries()
        assert len(countries) == len(catalog.codes)
        assert all(c.name for c in countries)


class TestNameFallback:
    def test_name_falls_back_to_code_when_locale_has_none(self, fixed_names, store, settings):
        cat = CountryCatalog(store=store, names=fixed_names(), settings=settings)
        assert cat.lookup("FR").name == "FR"


class TestPreferredCountry:
    def test_saved_value_wins(self, fixed_names, settings):
        store = InMemoryStore({PREFERRED_COUNTRY_KEY: "JP"})
        cat = CountryCatalog(store=store, names=fixed_names("CA"), settings=settings)
        assert cat.preferred_country().code == "JP"

    def test_locale_region_used_when_nothing_saved(self, fixed_names, store, settings):
        cat = CountryCatalog(store=store, names=fixed_names("CA"), settings=settings)
        assert cat.preferred_country().code == "CA"

    def test_default_when_no_region(self, fixed_names, store, settings):
        cat = CountryCatalog(store=store, names=fixed_names(None), settings=settings)
        assert cat.preferred_country().code == "US"

    def test_unrecognised_saved_value_ignored(self, fixed_names, settings):
        store = InMemoryStore({PREFERRED_COUNTRY_KEY: "XX"})
        cat = CountryCatalog(store=store, names=fixed_names("DE"), settings=settings)
        assert cat.preferred_country().code == "DE"

    def test_unrecognised_region_ignored(self, fixed_names, store, settings):
        cat = CountryCatalog(store=store, names=fixed_names("XX"), settings=settings)
        assert cat.preferred_country().code == "US"

    def test_save_then_read(self, catalog, store):
        catalog.save_as_preferred(catalog.lookup("fr"))
        assert store.get(PREFERRED_COUNTRY_KEY) == "FR"
        assert catalog.preferred_country().code == "FR"

    def test_save_overwrites(self, catalog, store):
        catalog.save_as_preferred(catalog.lookup("FR"))
        catalog.save_as_preferred(catalog.lookup("IT"))
        assert store.get(PREFERRED_COUNTRY_KEY) == "IT"
