"""
services/zone_resolver.py
──────────────────────────────────────────────────────────────────────────────
Zone Resolver: coordinate → AdministrativeZone via reverse geocoding.

Workflow of resolve():
  1. await GeocoderPort.reverse_geocode(coordinate)
  2. provider error / no placemark / no country code / no admin area → None
  3. ISO code → Country           (CountryCatalog.from_code, default on miss)
  4. admin area → zone            (ZoneClassifier, same rules as manual input)
  5. ZoneCache.save(zone)
  6. return zone

resolve() is a coroutine, so every call completes exactly once: with a zone
or with None.  Provider failures are logged and folded into None; they never
reach the caller.  There is no retry, timeout or cancellation handling at
this layer; the geocoding adapters own their HTTP timeouts and retries.
"""
from __future__ import annotations

import logging

from geotaxon.domain.exceptions import StoreError
from geotaxon.domain.models import AdministrativeZone, Coordinate, Country
from geotaxon.ports.geocoder_port import GeocoderPort
from geotaxon.services.country_catalog import CountryCatalog
from geotaxon.services.zone_cache import ZoneCache
from geotaxon.services.zone_classifier import ZoneClassifier

logger = logging.getLogger(__name__)


class ZoneResolver:
    """Resolves coordinates to classified, cached administrative zones.

    Inject via services/container.py — do not instantiate directly in
    application code.

    Args:
        geocoder:   Any object satisfying GeocoderPort.
        catalog:    CountryCatalog used to turn ISO codes into Countries.
        classifier: ZoneClassifier applied to the geocoded region name.
        cache:      ZoneCache that receives every successful resolution.
    """

    def __init__(
        self,
        geocoder: GeocoderPort,
        catalog: CountryCatalog,
        classifier: ZoneClassifier,
        cache: ZoneCache,
    ) -> None:
        self._geocoder = geocoder
        self._catalog = catalog
        self._classifier = classifier
        self._cache = cache

    @property
    def provider_name(self) -> str:
        return self._geocoder.provider_name

    # ── Public API ─────────────────────────────────────────────────────────

    async def resolve(self, coordinate: Coordinate) -> AdministrativeZone | None:
        """Reverse-geocode, classify and cache the zone containing a point.

        Returns:
            The classified AdministrativeZone, or None if the provider failed
            or returned an incomplete placemark.
        """
        logger.info(
            "resolve | lat=%.5f lon=%.5f provider=%s",
            coordinate.latitude, coordinate.longitude, self.provider_name,
        )
        try:
            placemark = await self._geocoder.reverse_geocode(coordinate)
        except Exception as exc:
            logger.warning("Reverse geocode failed (%s): %s", self.provider_name, exc)
            return None

        if placemark is None:
            logger.info("resolve | no placemark returned")
            return None
        if not placemark.iso_country_code or not placemark.administrative_area:
            logger.info(
                "resolve | incomplete placemark country=%r admin_area=%r",
                placemark.iso_country_code, placemark.administrative_area,
            )
            return None

        country = self._catalog.from_code(placemark.iso_country_code)
        zone = self._classifier.classify(placemark.administrative_area, country)

        try:
            self._cache.save(zone)
        except StoreError as exc:
            logger.warning("Could not cache resolved zone %r: %s", zone.name, exc)

        logger.info("resolve complete | country=%s kind=%s name=%r",
                    country.code, zone.kind.value, zone.name)
        return zone

    async def resolve_cached(
        self,
        coordinate: Coordinate,
        country: Country,
    ) -> AdministrativeZone | None:
        """Return the cached zone for ``country``, resolving on a miss."""
        cached = self._cache.load(country)
        if cached is not None:
            logger.debug("resolve_cached | hit country=%s", country.code)
            return cached
        return await self.resolve(coordinate)
