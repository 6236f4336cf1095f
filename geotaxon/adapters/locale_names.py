"""
adapters/locale_names.py
──────────────────────────────────────────────────────────────────────────────
Implements LocaleNamePort with pycountry's ISO 3166-1 names and its bundled
gettext translations ("iso3166-1" domain under pycountry.LOCALES_DIR).

Locale resolution order:
  1. settings.locale        (GEOTAXON_LOCALE, e.g. "fr_FR.UTF-8")
  2. LC_ALL / LC_MESSAGES / LANG environment variables
  3. none → treated as English with no region

Languages without a catalogue fall back to the English name.
"""
from __future__ import annotations

import gettext
import logging
import os

import pycountry

from geotaxon.config.settings import Settings
from geotaxon.domain.countries import english_name, iso_record

logger = logging.getLogger(__name__)

_POSIX_LOCALES = {"", "C", "POSIX"}
_ISO3166_DOMAIN = "iso3166-1"


def parse_locale(identifier: str) -> tuple[str | None, str | None]:
    """Split a POSIX/BCP-47 locale into (language, REGION).

    >>> parse_locale("en_GB.UTF-8")
    ('en', 'GB')
    >>> parse_locale("fr-CA")
    ('fr', 'CA')
    >>> parse_locale("C")
    (None, None)
    """
    base = identifier.split(".", 1)[0].split("@", 1)[0]
    if base in _POSIX_LOCALES:
        return None, None
    parts = base.replace("-", "_").split("_")
    language = parts[0].lower() or None
    region = parts[1].upper() if len(parts) > 1 and parts[1] else None
    return language, region


class BuiltinLocaleNames:
    """pycountry-backed implementation of LocaleNamePort."""

    def __init__(self, settings: Settings) -> None:
        identifier = settings.locale or _env_locale()
        self._language, self._region = parse_locale(identifier)
        self._translator = _load_translations(self.language, self._region)
        logger.debug(
            "BuiltinLocaleNames ready | locale=%r language=%s region=%s",
            identifier, self._language, self._region,
        )

    @property
    def language(self) -> str:
        return self._language or "en"

    def display_name(self, code: str) -> str | None:
        record = iso_record(code.upper())
        if record is None:
            return None
        name = english_name(record.alpha_2)
        translated = self._translator.gettext(name)
        if translated == name and name != record.name:
            # catalogues translate the official short name, not every common name
            translated = self._translator.gettext(record.name)
            if translated == record.name:
                return name
        return translated

    def region(self) -> str | None:
        return self._region


def _load_translations(language: str, region: str | None) -> gettext.NullTranslations:
    if language == "en":
        return gettext.NullTranslations()
    languages = [f"{language}_{region}", language] if region else [language]
    translator = gettext.translation(
        _ISO3166_DOMAIN,
        pycountry.LOCALES_DIR,
        languages=languages,
        fallback=True,
    )
    if type(translator) is gettext.NullTranslations:
        logger.info("No %s catalogue for language=%s — using English names",
                    _ISO3166_DOMAIN, language)
    return translator


def _env_locale() -> str:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value:
            return value
    return ""
