"""
domain/exceptions.py
──────────────────────────────────────────────────────────────────────────────
Custom exception hierarchy.

All exceptions are rooted at GeotaxonError so callers can catch broadly
(except GeotaxonError) or narrowly (except GeocodingError).

Note what is NOT an exception here:
  • an unrecognised country code  → default country substituted
  • a cache miss                  → None
  • a failed reverse geocode      → ZoneResolver returns None
  • an unclassifiable country     → ZoneKind.UNKNOWN
"""
from __future__ import annotations


class GeotaxonError(Exception):
    """Base exception for all application errors."""


class ConfigurationError(GeotaxonError):
    """Raised when required configuration is missing or invalid."""


class AuthenticationError(GeotaxonError):
    """Raised when a geocoding provider rejects or lacks credentials."""


class GeocodingError(GeotaxonError):
    """Raised when a reverse-geocoding call fails or returns unusable output."""


class StoreError(GeotaxonError):
    """Raised when the key/value persistence store cannot be read or written."""
