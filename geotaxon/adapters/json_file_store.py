"""
adapters/json_file_store.py
──────────────────────────────────────────────────────────────────────────────
Implements KeyValueStorePort on top of a single JSON document on disk.

File layout:
  { "preferredCountry": "FR", "zone_US": "{\"name\": ...}", ... }

Behaviour:
  - The file is read lazily on first access and kept in memory.
  - Every set() rewrites the whole document through a temporary file in the
    same directory followed by os.replace(), so readers never observe a
    half-written file.
  - A missing file is an empty store; an unreadable or non-object file
    raises StoreError.

Default location: ~/.geotaxon/store.json  (override with STORE_PATH)
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from geotaxon.config.settings import Settings
from geotaxon.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """JSON-file implementation of KeyValueStorePort.

    Injected into CountryCatalog and ZoneCache via services/container.py.
    """

    def __init__(self, settings: Settings) -> None:
        self._path = Path(settings.store_path)
        self._data: dict[str, str] | None = None
        logger.debug("JsonFileStore ready | path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    # ── KeyValueStorePort implementation ───────────────────────────────────

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = {**self._load(), key: value}
        self._flush(data)
        # memory only changes once the file on disk has
        self._data = data
        logger.debug("JsonFileStore set | key=%s", key)

    # ── File helpers ───────────────────────────────────────────────────────

    def _load(self) -> dict[str, str]:
        if self._data is not None:
            return self._data
        if not self._path.exists():
            self._data = {}
            return self._data
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store file {self._path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StoreError(
                f"Store file {self._path} must contain a JSON object, "
                f"found {type(raw).__name__}"
            )
        self._data = {str(k): str(v) for k, v in raw.items()}
        return self._data

    def _flush(self, data: dict[str, str]) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Cannot write store file {self._path}: {exc}") from exc
