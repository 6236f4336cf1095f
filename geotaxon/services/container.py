"""
services/container.py
──────────────────────────────────────────────────────────────────────────────
Dependency Injection container.

THIS IS THE ONLY FILE THAT NAMES CONCRETE ADAPTER CLASSES.

Provider selection is driven entirely by environment variables — no code
changes are needed to switch between providers:

  STORE_BACKEND=json      (default) → JsonFileStore
  STORE_BACKEND=memory              → InMemoryStore
  STORE_BACKEND=postgres            → PostgresKeyValueStore

  GEOCODER_PROVIDER=nominatim (default) → NominatimGeocoderAdapter
  GEOCODER_PROVIDER=google              → GoogleGeocoderAdapter

The store is built once per process and shared by CountryCatalog and
ZoneCache, so the preferred country and the zone cache always live in the
same place.  The geocoder is only built when get_resolver() is first called;
age classification and manual zone classification never need credentials.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from geotaxon.adapters.locale_names import BuiltinLocaleNames
from geotaxon.config.settings import Settings, get_settings
from geotaxon.domain.exceptions import ConfigurationError
from geotaxon.ports.geocoder_port import GeocoderPort
from geotaxon.ports.store_port import KeyValueStorePort
from geotaxon.services.age_classifier import AgeBracketClassifier
from geotaxon.services.country_catalog import CountryCatalog
from geotaxon.services.zone_cache import ZoneCache
from geotaxon.services.zone_classifier import ZoneClassifier
from geotaxon.services.zone_resolver import ZoneResolver

logger = logging.getLogger(__name__)


def _build_store(settings: Settings) -> KeyValueStorePort:
    """Instantiate the correct KeyValueStorePort adapter based on STORE_BACKEND."""
    backend = settings.store_backend.lower()
    if backend == "json":
        from geotaxon.adapters.json_file_store import JsonFileStore
        logger.info("Store backend: JSON file (%s)", settings.store_path)
        return JsonFileStore(settings)
    if backend == "memory":
        from geotaxon.adapters.memory_store import InMemoryStore
        logger.info("Store backend: in-memory")
        return InMemoryStore()
    if backend == "postgres":
        from geotaxon.adapters.postgres_store import PostgresKeyValueStore
        logger.info("Store backend: PostgreSQL (table=%s)", settings.db_table)
        return PostgresKeyValueStore(settings)
    raise ConfigurationError(
        f"Unknown STORE_BACKEND '{settings.store_backend}'. "
        "Valid values: 'json', 'memory', 'postgres'."
    )


def _build_geocoder(settings: Settings) -> GeocoderPort:
    """Instantiate the correct GeocoderPort adapter based on GEOCODER_PROVIDER."""
    provider = settings.geocoder_provider.lower()
    if provider == "nominatim":
        from geotaxon.adapters.nominatim_geocoder import NominatimGeocoderAdapter
        logger.info("Geocoder provider: Nominatim (%s)", settings.nominatim_url)
        return NominatimGeocoderAdapter(settings)
    if provider == "google":
        from geotaxon.adapters.google_geocoder import GoogleGeocoderAdapter
        logger.info("Geocoder provider: Google Maps")
        return GoogleGeocoderAdapter(settings)
    raise ConfigurationError(
        f"Unknown GEOCODER_PROVIDER '{settings.geocoder_provider}'. "
        "Valid values: 'nominatim', 'google'."
    )


@lru_cache(maxsize=1)
def get_store() -> KeyValueStorePort:
    """The process-wide key/value store."""
    return _build_store(get_settings())


@lru_cache(maxsize=1)
def get_catalog() -> CountryCatalog:
    settings = get_settings()
    return CountryCatalog(
        store=get_store(),
        names=BuiltinLocaleNames(settings),
        settings=settings,
    )


@lru_cache(maxsize=1)
def get_zone_classifier() -> ZoneClassifier:
    return ZoneClassifier()


@lru_cache(maxsize=1)
def get_zone_cache() -> ZoneCache:
    return ZoneCache(store=get_store())


@lru_cache(maxsize=1)
def get_age_classifier() -> AgeBracketClassifier:
    return AgeBracketClassifier()


@lru_cache(maxsize=1)
def get_resolver() -> ZoneResolver:
    """Build and return the fully wired ZoneResolver singleton.

    Raises:
        ConfigurationError:  If an unknown provider or backend is configured.
        AuthenticationError: If the selected geocoder lacks credentials.
    """
    settings = get_settings()
    logger.info(
        "Building ZoneResolver | store_backend=%s geocoder_provider=%s",
        settings.store_backend,
        settings.geocoder_provider,
    )
    resolver = ZoneResolver(
        geocoder=_build_geocoder(settings),
        catalog=get_catalog(),
        classifier=get_zone_classifier(),
        cache=get_zone_cache(),
    )
    logger.info("ZoneResolver ready | provider=%s", resolver.provider_name)
    return resolver
