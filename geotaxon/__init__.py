"""
geotaxon — Administrative Zone & Age Bracket Classifier
=======================================================
Hexagonal (Ports & Adapters) architecture.

Layer map
─────────────────────────────────────────────────────
  config/       All tuneable settings (env / .env driven)
  domain/       Pure value objects (countries, zones, age brackets) — no I/O
  ports/        Abstract interfaces (Python Protocols)
  adapters/     Concrete implementations of each Port (stores, geocoders…)
  services/     Classification logic; depends only on Ports, never Adapters
  interfaces/   Delivery layer: CLI, Streamlit UI
  tests/        Full test suite: unit / integration / e2e

Swapping any external dependency (store, geocoder, locale names):
  1. Write a new adapter in adapters/ implementing the relevant Port
  2. Change the single wiring line in services/container.py
  3. Done — zero other files touched
"""
__version__ = "1.0.0"
