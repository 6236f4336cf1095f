"""
adapters/nominatim_geocoder.py
──────────────────────────────────────────────────────────────────────────────
Implements GeocoderPort using the OpenStreetMap Nominatim /reverse endpoint.

Key behaviour:
  - zoom=5 asks for state-level detail; addressdetails=1 returns the
    structured address the placemark is built from
  - The blocking requests call runs in a worker thread (asyncio.to_thread)
    so reverse_geocode() never blocks the event loop
  - Retries on transient HTTP errors (429, 502, 503) with exponential back-off
  - {"error": "Unable to geocode"} is a valid "no result" answer, not an error
  - Corporate proxy support via settings.https_proxy

Required env vars:
  NOMINATIM_USER_AGENT  — identifying agent (Nominatim usage policy)
  NOMINATIM_URL         — default: https://nominatim.openstreetmap.org/reverse
"""
from __future__ import annotations

import asyncio
import logging
import time

import requests

from geotaxon.config.settings import Settings
from geotaxon.domain.exceptions import GeocodingError
from geotaxon.domain.models import Coordinate, Placemark

logger = logging.getLogger(__name__)

# Address keys that name the first-level subdivision, most specific first.
_ADMIN_AREA_KEYS = ("state", "province", "region", "state_district", "county")


class NominatimGeocoderAdapter:
    """OpenStreetMap Nominatim reverse-geocoding adapter.

    Injected into ZoneResolver via services/container.py.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._headers = {"User-Agent": settings.nominatim_user_agent}
        self._proxies = (
            {"https": f"http://{settings.https_proxy}"}
            if settings.https_proxy
            else {}
        )
        logger.debug("NominatimGeocoderAdapter ready | url=%s", settings.nominatim_url)

    # ── GeocoderPort implementation ────────────────────────────────────────

    @property
    def provider_name(self) -> str:
        return "nominatim"

    async def reverse_geocode(self, coordinate: Coordinate) -> Placemark | None:
        """Resolve a coordinate in a worker thread."""
        return await asyncio.to_thread(self.reverse_geocode_sync, coordinate)

    def reverse_geocode_sync(self, coordinate: Coordinate) -> Placemark | None:
        """Blocking variant of reverse_geocode()."""
        params = {
            "lat": f"{coordinate.latitude:.7f}",
            "lon": f"{coordinate.longitude:.7f}",
            "format": "jsonv2",
            "zoom": 5,
            "addressdetails": 1,
        }
        data = self._get_with_retry(params, retries=self._settings.geocode_retries)
        if "error" in data:
            logger.info(
                "Nominatim: no result | lat=%.5f lon=%.5f error=%s",
                coordinate.latitude, coordinate.longitude, data["error"],
            )
            return None
        return _parse_placemark(data)

    # ── Private helpers ────────────────────────────────────────────────────

    def _get_with_retry(self, params: dict, retries: int = 3) -> dict:
        """GET the reverse endpoint with retry on 429 / 502 / 503."""
        delay = 1.0
        last_exc: Exception | None = None

        for attempt in range(1, retries + 1):
            try:
                resp = requests.get(
                    self._settings.nominatim_url,
                    params=params,
                    headers=self._headers,
                    proxies=self._proxies,
                    timeout=self._settings.geocode_timeout,
                )
            except requests.RequestException as exc:
                last_exc = exc
                logger.warning("Nominatim HTTP error (attempt %d/%d): %s", attempt, retries, exc)
                if attempt < retries:
                    time.sleep(delay)
                    delay *= 2
                continue

            if resp.status_code in (429, 502, 503):
                logger.warning("Nominatim %d (attempt %d/%d) — back-off %.1fs",
                               resp.status_code, attempt, retries, delay)
                if attempt < retries:
                    time.sleep(delay)
                    delay *= 2
                continue

            if not resp.ok:
                raise GeocodingError(
                    f"Nominatim returned HTTP {resp.status_code}: {resp.text[:200]}"
                )

            try:
                data = resp.json()
            except ValueError as exc:
                raise GeocodingError("Nominatim returned a non-JSON body") from exc
            if not isinstance(data, dict):
                raise GeocodingError(
                    f"Unexpected Nominatim response type: {type(data).__name__}"
                )
            return data

        raise GeocodingError(
            f"Nominatim reverse geocode failed after {retries} attempts"
        ) from last_exc


def _parse_placemark(data: dict) -> Placemark:
    """Build a Placemark from a Nominatim jsonv2 reverse response."""
    address = data.get("address") or {}
    admin_area = next(
        (address[k] for k in _ADMIN_AREA_KEYS if address.get(k)),
        None,
    )
    country_code = address.get("country_code")
    return Placemark(
        iso_country_code=country_code.upper() if country_code else None,
        administrative_area=admin_area,
        country_name=address.get("country"),
        locality=address.get("city") or address.get("town") or address.get("village"),
    )
