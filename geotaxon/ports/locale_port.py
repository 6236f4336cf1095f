"""
ports/locale_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for the locale name provider.

Resolves country codes to display names for the active locale and reports
the locale's own region, used as the fallback preferred country.

Current implementation: BuiltinLocaleNames (adapters/locale_names.py)
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LocaleNamePort(Protocol):
    """Contract for locale-aware country naming."""

    def display_name(self, code: str) -> str | None:
        """Localised name for an uppercase ISO code, or None if unmapped."""
        ...

    def region(self) -> str | None:
        """Region code of the active locale (e.g. "GB" for en_GB), if any."""
        ...
