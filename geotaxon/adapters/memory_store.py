"""
adapters/memory_store.py
──────────────────────────────────────────────────────────────────────────────
Implements KeyValueStorePort with a plain dict.

Nothing survives the process.  Selected with STORE_BACKEND=memory; also the
store used throughout the test suite.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Process-local dict-backed key/value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        logger.debug("InMemoryStore set | key=%s", key)
        self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)
