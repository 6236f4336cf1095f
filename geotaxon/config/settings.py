"""
config/settings.py
──────────────────────────────────────────────────────────────────────────────
Single source of truth for all tuneable parameters.

All values can be overridden via environment variables or a .env file placed
at the project root.  The frozen dataclass ensures settings are never mutated
at runtime.

To swap providers, change the relevant env var — no code edits required:
  STORE_BACKEND      → memory | json | postgres
  GEOCODER_PROVIDER  → nominatim | google
  GEOTAXON_LOCALE    → locale used for country display names
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (two levels up from this file)
load_dotenv(Path(__file__).parent.parent.parent / ".env")


def _env(key: str, default: str) -> str:
    return os.getenv(key, default)


def _env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _env_path(key: str, default: Path) -> Path:
    return Path(os.getenv(key, str(default)))


@dataclass(frozen=True)
class Settings:
    """Immutable application settings loaded from environment variables."""

    # ── Persistence store ──────────────────────────────────────────────────
    # Valid values: "memory" | "json" | "postgres"
    store_backend: str = field(
        default_factory=lambda: _env("STORE_BACKEND", "json")
    )
    store_path: Path = field(
        default_factory=lambda: _env_path(
            "STORE_PATH",
            Path.home() / ".geotaxon" / "store.json",
        )
    )
    db_dsn: str = field(
        default_factory=lambda: _env("DB_DSN", "dbname=geotaxon")
    )
    db_table: str = field(
        default_factory=lambda: _env("DB_TABLE", "geotaxon_kv")
    )

    # ── Reverse geocoding ──────────────────────────────────────────────────
    # Valid values: "nominatim" | "google"
    geocoder_provider: str = field(
        default_factory=lambda: _env("GEOCODER_PROVIDER", "nominatim")
    )
    nominatim_url: str = field(
        default_factory=lambda: _env(
            "NOMINATIM_URL", "https://nominatim.openstreetmap.org/reverse"
        )
    )
    # Nominatim's usage policy rejects requests without an identifying agent.
    nominatim_user_agent: str = field(
        default_factory=lambda: _env("NOMINATIM_USER_AGENT", "geotaxon/1.0")
    )
    google_maps_api_key: str = field(
        default_factory=lambda: _env("GOOGLE_MAPS_API_KEY", "")
    )

    # ── Network ────────────────────────────────────────────────────────────
    https_proxy: str = field(
        default_factory=lambda: _env("HTTPS_PROXY", "")
    )

    # ── HTTP timeouts (seconds) ────────────────────────────────────────────
    geocode_timeout: int = field(default_factory=lambda: _env_int("GEOCODE_TIMEOUT", 10))
    geocode_retries: int = field(default_factory=lambda: _env_int("GEOCODE_RETRIES", 3))

    # ── Locale & defaults ──────────────────────────────────────────────────
    # Empty means "use the process locale" (LC_ALL / LANG).
    locale: str = field(
        default_factory=lambda: _env("GEOTAXON_LOCALE", "")
    )
    default_country: str = field(
        default_factory=lambda: _env("DEFAULT_COUNTRY", "US")
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns a cached singleton Settings instance.

    Use this everywhere instead of instantiating Settings() directly —
    it guarantees a single object is shared across the entire process.
    """
    return Settings()
