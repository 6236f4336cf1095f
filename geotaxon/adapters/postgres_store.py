"""
adapters/postgres_store.py
──────────────────────────────────────────────────────────────────────────────
Implements KeyValueStorePort using psycopg2.

Database layout (created on first use):
  Table : geotaxon_kv   (override with DB_TABLE)
  Cols  : key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at TIMESTAMPTZ

Two atomic methods match KeyValueStorePort:
  get → single-row SELECT by primary key
  set → INSERT … ON CONFLICT (key) DO UPDATE   (last write wins)

Connection management:
  - A single connection is opened lazily and reused (autocommit).
  - On OperationalError the connection is reset and one retry is attempted.
"""
from __future__ import annotations

import logging
import re
from typing import Any

import psycopg2
import psycopg2.extras

from geotaxon.config.settings import Settings
from geotaxon.domain.exceptions import ConfigurationError, StoreError

logger = logging.getLogger(__name__)

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class PostgresKeyValueStore:
    """psycopg2 implementation of KeyValueStorePort.

    Injected into CountryCatalog and ZoneCache via services/container.py
    when ``STORE_BACKEND=postgres``.
    """

    def __init__(self, settings: Settings) -> None:
        if not _TABLE_NAME_RE.match(settings.db_table):
            raise ConfigurationError(f"Invalid DB_TABLE name: {settings.db_table!r}")
        self._dsn = settings.db_dsn
        self._table = settings.db_table
        self._conn: Any = None
        self._schema_ready = False
        logger.debug("PostgresKeyValueStore ready | dsn=%s table=%s", self._dsn, self._table)

    # ── KeyValueStorePort implementation ───────────────────────────────────

    def get(self, key: str) -> str | None:
        sql = f"SELECT value FROM {self._table} WHERE key = %s"
        try:
            rows = self._execute(sql, (key,), fetch=True)
        except psycopg2.Error as exc:
            raise StoreError(f"get failed for {key!r}: {exc}") from exc
        return rows[0]["value"] if rows else None

    def set(self, key: str, value: str) -> None:
        sql = f"""
            INSERT INTO {self._table} (key, value, updated_at)
            VALUES (%s, %s, now())
            ON CONFLICT (key)
            DO UPDATE SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
        """
        try:
            self._execute(sql, (key, value), fetch=False)
        except psycopg2.Error as exc:
            raise StoreError(f"set failed for {key!r}: {exc}") from exc

    # ── Connection helpers ─────────────────────────────────────────────────

    def _get_conn(self) -> Any:
        """Return an open connection, creating or reusing one."""
        if self._conn is None or self._conn.closed:
            self._conn = self._new_conn()
        return self._conn

    def _new_conn(self) -> Any:
        """Open a fresh autocommit connection and make sure the table exists."""
        conn = None
        try:
            conn = psycopg2.connect(self._dsn)
            conn.autocommit = True
            if not self._schema_ready:
                with conn.cursor() as cur:
                    cur.execute(
                        f"""
                        CREATE TABLE IF NOT EXISTS {self._table} (
                            key        TEXT PRIMARY KEY,
                            value      TEXT NOT NULL,
                            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                        )
                        """
                    )
                self._schema_ready = True
            logger.debug("PostgresKeyValueStore: new connection opened")
            return conn
        except psycopg2.Error as exc:
            if conn is not None:
                conn.close()
            raise StoreError(f"Cannot connect to database: {exc}") from exc

    def _execute(self, sql: str, params: tuple, fetch: bool) -> list[dict]:
        """Execute a statement, with one auto-reconnect on OperationalError."""
        for attempt in (1, 2):
            conn = self._get_conn()
            try:
                with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    return list(cur.fetchall()) if fetch else []
            except psycopg2.OperationalError as exc:
                if attempt == 1:
                    logger.warning("DB OperationalError — reconnecting: %s", exc)
                    self.close()
                    self._conn = None
                else:
                    raise StoreError(f"DB query failed after reconnect: {exc}") from exc
        return []  # unreachable

    def close(self) -> None:
        """Explicitly close the connection (optional — GC handles it otherwise)."""
        if self._conn and not self._conn.closed:
            self._conn.close()
            logger.debug("PostgresKeyValueStore: connection closed")
