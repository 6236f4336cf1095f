"""
adapters/google_geocoder.py
──────────────────────────────────────────────────────────────────────────────
Implements GeocoderPort using the Google Maps Geocoding API (latlng lookup).

Key behaviour:
  - Reads country / administrative_area_level_1 / locality from the
    address_components of the first result
  - status ZERO_RESULTS → None; REQUEST_DENIED → AuthenticationError
  - Retries on OVER_QUERY_LIMIT and HTTP 429 / 5xx with exponential back-off
  - The blocking requests call runs in a worker thread (asyncio.to_thread)

Required env vars:
  GOOGLE_MAPS_API_KEY   — API key with the Geocoding API enabled

To enable:
  Set GEOCODER_PROVIDER=google in your .env file.
"""
from __future__ import annotations

import asyncio
import logging
import time

import requests

from geotaxon.config.settings import Settings
from geotaxon.domain.exceptions import AuthenticationError, GeocodingError
from geotaxon.domain.models import Coordinate, Placemark

logger = logging.getLogger(__name__)

_GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocoderAdapter:
    """Google Maps reverse-geocoding adapter.

    Injected into ZoneResolver via services/container.py when
    ``GEOCODER_PROVIDER=google`` is set in the environment.
    """

    def __init__(self, settings: Settings) -> None:
        if not settings.google_maps_api_key:
            raise AuthenticationError(
                "GOOGLE_MAPS_API_KEY is not set. "
                "Add it to your .env file or environment."
            )
        self._settings = settings
        self._proxies = (
            {"https": f"http://{settings.https_proxy}"}
            if settings.https_proxy
            else {}
        )
        logger.debug("GoogleGeocoderAdapter ready")

    # ── GeocoderPort implementation ────────────────────────────────────────

    @property
    def provider_name(self) -> str:
        return "google"

    async def reverse_geocode(self, coordinate: Coordinate) -> Placemark | None:
        return await asyncio.to_thread(self.reverse_geocode_sync, coordinate)

    def reverse_geocode_sync(self, coordinate: Coordinate) -> Placemark | None:
        params = {
            "latlng": f"{coordinate.latitude:.7f},{coordinate.longitude:.7f}",
            "key": self._settings.google_maps_api_key,
        }
        data = self._get_with_retry(params, retries=self._settings.geocode_retries)
        results = data.get("results") or []
        if not results:
            return None
        return _parse_placemark(results[0])

    # ── Private helpers ────────────────────────────────────────────────────

    def _get_with_retry(self, params: dict, retries: int = 3) -> dict:
        """GET the geocode endpoint; returns the JSON body for OK / ZERO_RESULTS."""
        delay = 1.0
        last_exc: Exception | None = None

        for attempt in range(1, retries + 1):
            try:
                resp = requests.get(
                    _GOOGLE_GEOCODE_URL,
                    params=params,
                    proxies=self._proxies,
                    timeout=self._settings.geocode_timeout,
                )
            except requests.RequestException as exc:
                last_exc = exc
                logger.warning("Google geocode HTTP error (attempt %d/%d): %s",
                               attempt, retries, exc)
                if attempt < retries:
                    time.sleep(delay)
                    delay *= 2
                continue

            if resp.status_code == 429 or resp.status_code >= 500:
                logger.warning("Google geocode %d (attempt %d/%d) — back-off %.1fs",
                               resp.status_code, attempt, retries, delay)
                if attempt < retries:
                    time.sleep(delay)
                    delay *= 2
                continue

            if not resp.ok:
                raise GeocodingError(
                    f"Google geocode HTTP {resp.status_code}: {resp.text[:200]}"
                )

            try:
                data = resp.json()
            except ValueError as exc:
                raise GeocodingError("Google geocode returned a non-JSON body") from exc

            status = data.get("status")
            if status in ("OK", "ZERO_RESULTS"):
                return data
            if status == "REQUEST_DENIED":
                raise AuthenticationError(
                    f"Google geocode denied the request: {data.get('error_message', '')}"
                )
            if status == "OVER_QUERY_LIMIT":
                logger.warning("Google geocode OVER_QUERY_LIMIT (attempt %d/%d) — back-off %.1fs",
                               attempt, retries, delay)
                if attempt < retries:
                    time.sleep(delay)
                    delay *= 2
                continue
            raise GeocodingError(
                f"Google geocode status {status}: {data.get('error_message', '')}"
            )

        raise GeocodingError(
            f"Google geocode failed after {retries} attempts"
        ) from last_exc


def _parse_placemark(result: dict) -> Placemark:
    """Build a Placemark from one Google geocoding result."""
    fields: dict[str, str] = {}
    for component in result.get("address_components", []):
        types = component.get("types", [])
        if "country" in types:
            fields["iso_country_code"] = component.get("short_name", "").upper()
            fields["country_name"] = component.get("long_name", "")
        elif "administrative_area_level_1" in types:
            fields["administrative_area"] = component.get("long_name", "")
        elif "locality" in types:
            fields["locality"] = component.get("long_name", "")
    return Placemark(**{k: v or None for k, v in fields.items()})
