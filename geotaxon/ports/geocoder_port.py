"""
ports/geocoder_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for reverse-geocoding providers.

The call is a coroutine: the provider round trip is the only suspension
point in the package.  Adapters backed by blocking HTTP clients must move
the request off the event loop (see adapters/nominatim_geocoder.py).

Current implementations: NominatimGeocoderAdapter, GoogleGeocoderAdapter
To swap: write a new adapter implementing this Protocol and change container.py
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from geotaxon.domain.models import Coordinate, Placemark


@runtime_checkable
class GeocoderPort(Protocol):
    """Contract for a reverse-geocoding provider."""

    @property
    def provider_name(self) -> str:
        """Identifier of the underlying geocoding service."""
        ...

    async def reverse_geocode(self, coordinate: Coordinate) -> Placemark | None:
        """Look up the place containing a coordinate.

        Args:
            coordinate: WGS-84 point to resolve.

        Returns:
            The best-matching Placemark, or None when the provider has no
            result for the point (open ocean, unmapped territory…).
            Fields the provider did not return are left as None.

        Raises:
            GeocodingError:      On transport failure or malformed response.
            AuthenticationError: If the provider rejects the credentials.
        """
        ...
