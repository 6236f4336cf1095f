"""
domain/countries.py
──────────────────────────────────────────────────────────────────────────────
The closed set of recognised ISO 3166-1 alpha-2 country codes.

Codes and English names come from pycountry's ISO 3166-1 database.  Three
entries (IR, MT, MY) are not part of the recognised set; codes outside
COUNTRY_CODES are unrecognised everywhere in the package.

Localised names are resolved by adapters/locale_names.py through pycountry's
bundled gettext catalogues.
"""
from __future__ import annotations

import pycountry

UNLISTED_CODES: frozenset[str] = frozenset({"IR", "MT", "MY"})

COUNTRY_CODES: frozenset[str] = (
    frozenset(c.alpha_2 for c in pycountry.countries) - UNLISTED_CODES
)


def iso_record(code: str):
    """pycountry record for a recognised uppercase code, else None."""
    if code not in COUNTRY_CODES:
        return None
    return pycountry.countries.get(alpha_2=code)


def english_name(code: str) -> str | None:
    """Short English name, e.g. "Bolivia" rather than the official long form."""
    record = iso_record(code)
    if record is None:
        return None
    return getattr(record, "common_name", None) or record.name
