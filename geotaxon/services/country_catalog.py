"""
services/country_catalog.py
──────────────────────────────────────────────────────────────────────────────
Country Catalog: the closed registry of recognised ISO 3166-1 alpha-2 codes.

Two construction paths, deliberately different:
  lookup(code)     → Country | None   explicit not-found signal
  from_code(code)  → Country          unrecognised codes become the default
                                      country (US unless DEFAULT_COUNTRY says
                                      otherwise); never raises

Preferred-country resolution (preferred_country):
  1. store["preferredCountry"] if it holds a recognised code
  2. region of the active locale, if recognised
  3. the default country
"""
from __future__ import annotations

import logging

from geotaxon.config.settings import Settings
from geotaxon.domain.countries import COUNTRY_CODES
from geotaxon.domain.exceptions import ConfigurationError
from geotaxon.domain.models import Country
from geotaxon.ports.locale_port import LocaleNamePort
from geotaxon.ports.store_port import KeyValueStorePort

logger = logging.getLogger(__name__)

PREFERRED_COUNTRY_KEY = "preferredCountry"


class CountryCatalog:
    """Builds Country values and manages the preferred-country setting.

    Args:
        store:    Any object satisfying KeyValueStorePort.
        names:    Any object satisfying LocaleNamePort.
        settings: Shared application settings (default country).
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        names: LocaleNamePort,
        settings: Settings,
    ) -> None:
        self._store = store
        self._names = names
        default_code = settings.default_country.upper()
        if default_code not in COUNTRY_CODES:
            raise ConfigurationError(
                f"DEFAULT_COUNTRY '{settings.default_country}' is not an ISO 3166-1 alpha-2 code."
            )
        self._default_code = default_code

    # ── Lookup ─────────────────────────────────────────────────────────────

    def lookup(self, code: str) -> Country | None:
        """Case-insensitive exact lookup; None for anything unrecognised."""
        canonical = _canonical(code)
        if canonical is None:
            return None
        return self._build(canonical)

    def from_code(self, code: str) -> Country:
        """Like lookup(), but substitutes the default country on a miss."""
        country = self.lookup(code)
        if country is None:
            logger.debug("Unrecognised country code %r — using default %s",
                         code, self._default_code)
            return self.default_country
        return country

    @property
    def default_country(self) -> Country:
        return self._build(self._default_code)

    @property
    def codes(self) -> list[str]:
        """All recognised codes, sorted."""
        return sorted(COUNTRY_CODES)

    def all_countries(self) -> list[Country]:
        return [self._build(code) for code in self.codes]

    # ── Preference ─────────────────────────────────────────────────────────

    def preferred_country(self) -> Country:
        saved = self._store.get(PREFERRED_COUNTRY_KEY)
        if saved:
            country = self.lookup(saved)
            if country is not None:
                return country
            logger.warning("Ignoring unrecognised saved preferredCountry=%r", saved)

        region = self._names.region()
        if region:
            country = self.lookup(region)
            if country is not None:
                return country

        return self.default_country

    def save_as_preferred(self, country: Country) -> None:
        logger.info("Saving preferred country | code=%s", country.code)
        self._store.set(PREFERRED_COUNTRY_KEY, country.code)

    # ── Helpers ────────────────────────────────────────────────────────────

    def _build(self, code: str) -> Country:
        name = self._names.display_name(code) or code
        return Country(code=code, name=name)


def _canonical(code: str) -> str | None:
    """Uppercase ``code`` if it names a recognised country."""
    # isascii() keeps e.g. "ß" (which upper-cases to "SS") from matching.
    if len(code) != 2 or not code.isascii():
        return None
    canonical = code.upper()
    return canonical if canonical in COUNTRY_CODES else None
