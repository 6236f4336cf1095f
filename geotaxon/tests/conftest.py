"""
tests/conftest.py
──────────────────────────────────────────────────────────────────────────────
Shared pytest fixtures and mock adapter implementations.

Mock adapters implement the Port Protocols via structural subtyping — they do
NOT inherit from any base class.  pytest uses them to test service logic
without any network or database connections.

Fixture hierarchy:
  settings        → Settings with in-memory store, en_US locale, US default
  store           → InMemoryStore (fresh per test)
  catalog         → CountryCatalog over store + BuiltinLocaleNames
  zone_cache      → ZoneCache over store
  mock_geocoder   → implements GeocoderPort (returns a canned Placemark)
  resolver        → ZoneResolver wired with mock_geocoder + real services
"""
from __future__ import annotations

import pytest

from geotaxon.adapters.locale_names import BuiltinLocaleNames
from geotaxon.adapters.memory_store import InMemoryStore
from geotaxon.config.settings import Settings
from geotaxon.domain.exceptions import GeocodingError
from geotaxon.domain.models import Coordinate, Placemark
from geotaxon.services.age_classifier import AgeBracketClassifier
from geotaxon.services.country_catalog import CountryCatalog
from geotaxon.services.zone_cache import ZoneCache
from geotaxon.services.zone_classifier import ZoneClassifier
from geotaxon.services.zone_resolver import ZoneResolver


# ── Settings fixture ───────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def settings() -> Settings:
    """Return a Settings instance with sane test defaults."""
    return Settings(
        store_backend="memory",
        db_dsn="dbname=geotaxon_test",
        db_table="geotaxon_kv_test",
        geocoder_provider="nominatim",
        nominatim_url="https://nominatim.test/reverse",
        nominatim_user_agent="geotaxon-tests",
        google_maps_api_key="",
        https_proxy="",
        geocode_timeout=1,
        geocode_retries=2,
        locale="en_US.UTF-8",
        default_country="US",
    )


# ── Mock adapters ──────────────────────────────────────────────────────────

class MockGeocoderAdapter:
    """Returns a fixed Placemark (or None) and records every call."""

    provider_name = "mock"

    def __init__(self, placemark: Placemark | None) -> None:
        self.placemark = placemark
        self.calls: list[Coordinate] = []

    async def reverse_geocode(self, coordinate: Coordinate) -> Placemark | None:
        self.calls.append(coordinate)
        return self.placemark


class FailingGeocoderAdapter:
    """Simulates a provider outage."""

    provider_name = "mock-failing"

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or GeocodingError("provider unavailable")
        self.calls = 0

    async def reverse_geocode(self, coordinate: Coordinate) -> Placemark | None:
        self.calls += 1
        raise self.exc


class FixedLocaleNames:
    """LocaleNamePort stub with a configurable region and no names."""

    def __init__(self, region: str | None = None) -> None:
        self._region = region

    def display_name(self, code: str) -> str | None:
        return None

    def region(self) -> str | None:
        return self._region


CALIFORNIA = Placemark(
    iso_country_code="US",
    administrative_area="California",
    country_name="United States",
    locality="San Francisco",
)


# ── pytest fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def locale_names(settings):
    return BuiltinLocaleNames(settings)


@pytest.fixture
def fixed_names():
    """Factory: LocaleNamePort stub reporting the given region."""
    return FixedLocaleNames


@pytest.fixture
def catalog(store, locale_names, settings):
    return CountryCatalog(store=store, names=locale_names, settings=settings)


@pytest.fixture
def us(catalog):
    return catalog.lookup("US")


@pytest.fixture
def zone_classifier():
    return ZoneClassifier()


@pytest.fixture
def zone_cache(store):
    return ZoneCache(store=store)


@pytest.fixture
def age_classifier():
    return AgeBracketClassifier()


@pytest.fixture
def mock_geocoder():
    return MockGeocoderAdapter(CALIFORNIA)


@pytest.fixture
def failing_geocoder():
    """Factory: geocoder that raises the given exception (GeocodingError by default)."""
    return FailingGeocoderAdapter


@pytest.fixture
def make_resolver(catalog, zone_classifier, zone_cache):
    """Factory: ZoneResolver around any geocoder, sharing the test store."""
    def _make(geocoder) -> ZoneResolver:
        return ZoneResolver(
            geocoder=geocoder,
            catalog=catalog,
            classifier=zone_classifier,
            cache=zone_cache,
        )
    return _make


@pytest.fixture
def resolver(make_resolver, mock_geocoder):
    return make_resolver(mock_geocoder)
