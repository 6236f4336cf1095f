"""
ports/store_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for the process-wide string key/value store.

Two callers use it, each with its own keys:
  • CountryCatalog → "preferredCountry"
  • ZoneCache      → "zone_<CODE>"

Implementations must make a single get/set atomic; nothing here needs
cross-key transactions.

Current implementations: InMemoryStore, JsonFileStore, PostgresKeyValueStore
To swap: write a new adapter implementing this Protocol and change container.py
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorePort(Protocol):
    """Contract for a string key/value persistence store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent.

        Raises:
            StoreError: On I/O or connection failure (never on a miss).
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value.

        Raises:
            StoreError: On I/O or connection failure.
        """
        ...
