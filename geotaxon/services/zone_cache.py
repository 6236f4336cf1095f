"""
services/zone_cache.py
──────────────────────────────────────────────────────────────────────────────
Zone Cache: last resolved zone per country, persisted in the key/value store.

Key   : "zone_" + country.code          (one entry per country, last write wins)
Value : {"name": ..., "country": ..., "kind": ...} as JSON

The kind is stored so a reload returns the same variant that was saved.
Entries written by older clients hold the bare zone name; those load as
ZoneKind.UNKNOWN.

No expiry, no size bound, no eviction.  Deleting entries is an administrative
action outside this package.
"""
from __future__ import annotations

import json
import logging

from geotaxon.domain.models import AdministrativeZone, Country, ZoneKind
from geotaxon.ports.store_port import KeyValueStorePort

logger = logging.getLogger(__name__)

ZONE_KEY_PREFIX = "zone_"


def cache_key(country: Country) -> str:
    """Store key for a country's cached zone, e.g. "zone_US"."""
    return f"{ZONE_KEY_PREFIX}{country.code}"


class ZoneCache:
    """Per-country zone cache over a KeyValueStorePort.

    Args:
        store: Any object satisfying KeyValueStorePort.
    """

    def __init__(self, store: KeyValueStorePort) -> None:
        self._store = store

    def save(self, zone: AdministrativeZone) -> None:
        """Persist ``zone``, overwriting any previous entry for its country."""
        payload = json.dumps(
            {"name": zone.name, "country": zone.country.code, "kind": zone.kind.value},
            ensure_ascii=False,
        )
        self._store.set(cache_key(zone.country), payload)
        logger.info("Zone cached | key=%s kind=%s name=%r",
                    cache_key(zone.country), zone.kind.value, zone.name)

    def load(self, country: Country) -> AdministrativeZone | None:
        """Return the cached zone for ``country``, or None on a miss."""
        raw = self._store.get(cache_key(country))
        if raw is None:
            logger.debug("Zone cache miss | key=%s", cache_key(country))
            return None
        name, kind = _decode(raw)
        return AdministrativeZone(kind=kind, name=name, country=country)


def _decode(raw: str) -> tuple[str, ZoneKind]:
    """Split a stored value into (name, kind), accepting legacy bare names."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        return raw, ZoneKind.UNKNOWN
    if not isinstance(payload, dict) or not isinstance(payload.get("name"), str):
        return raw, ZoneKind.UNKNOWN
    try:
        kind = ZoneKind(payload.get("kind", ZoneKind.UNKNOWN.value))
    except ValueError:
        logger.warning("Unknown cached zone kind %r — loading as unknown", payload.get("kind"))
        kind = ZoneKind.UNKNOWN
    return payload["name"], kind
