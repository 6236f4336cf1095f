"""
interfaces/streamlit_app.py
──────────────────────────────────────────────────────────────────────────────
Streamlit UI for the zone and age-bracket classifiers.

Run:
  streamlit run geotaxon/interfaces/streamlit_app.py

Features:
  • Zone tab: region name + country → classified zone
  • Age tab: age + organisation → bracket, with the organisation's full table
  • Resolve tab: latitude/longitude → reverse-geocoded, cached zone
  • Sidebar: preferred country (persisted in the configured store)
"""
from __future__ import annotations

import asyncio
import logging
import math
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# ── Path setup ─────────────────────────────────────────────────────────────
# Allow running from the repo root with: streamlit run geotaxon/interfaces/streamlit_app.py
_REPO_ROOT = Path(__file__).parent.parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from geotaxon.domain.models import Coordinate, Organization
from geotaxon.services.container import (
    get_age_classifier,
    get_catalog,
    get_resolver,
    get_zone_cache,
    get_zone_classifier,
)

logger = logging.getLogger(__name__)

# ── Page configuration ─────────────────────────────────────────────────────
st.set_page_config(
    page_title="Geotaxon",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ── Sidebar ────────────────────────────────────────────────────────────────

def _render_sidebar():
    """Preferred-country picker; returns the selected Country."""
    catalog = get_catalog()
    countries = catalog.all_countries()
    preferred = catalog.preferred_country()
    labels = [f"{c.name} ({c.code})" for c in countries]

    with st.sidebar:
        st.markdown("## ⚙️ Options")
        st.markdown("---")
        index = next(i for i, c in enumerate(countries) if c == preferred)
        choice = st.selectbox("Preferred country", labels, index=index)
        selected = countries[labels.index(choice)]
        if selected != preferred and st.button("Save as preferred"):
            catalog.save_as_preferred(selected)
            st.success(f"Saved {selected.code}")
    return selected


# ── Tabs ───────────────────────────────────────────────────────────────────

def _render_zone_tab(country) -> None:
    name = st.text_input("Region name", placeholder="e.g. Puerto Rico, Ontario, Côte-d'Or")
    code = st.text_input("Country code", value=country.code, max_chars=2)
    if not name:
        return
    target = get_catalog().from_code(code)
    zone = get_zone_classifier().classify(name, target)
    c1, c2, c3 = st.columns(3)
    c1.metric("Kind", zone.kind.value.title())
    c2.metric("Name", zone.name)
    c3.metric("Country", f"{zone.country.name} ({zone.country.code})")


def _bracket_table(org: Organization) -> pd.DataFrame:
    rows = [
        {
            "From": low,
            "To (excl.)": "∞" if math.isinf(high) else high,
            "Bracket": bracket.display_name,
            "Range": bracket.age_range,
            "Adult": bracket.is_adult,
        }
        for low, high, bracket in get_age_classifier().brackets_for(org)
    ]
    return pd.DataFrame(rows)


def _render_age_tab() -> None:
    age = st.number_input("Age (years)", min_value=0.0, max_value=130.0, value=30.0, step=0.5)
    org = Organization(
        st.radio("Organisation", [o.value for o in Organization], horizontal=True)
    )
    result = get_age_classifier().describe(age, org)
    c1, c2, c3 = st.columns(3)
    c1.metric("Bracket", result.display_name)
    c2.metric("Range", result.age_range)
    c3.metric("Adult", "Yes" if result.is_adult else "No")
    st.dataframe(_bracket_table(org), use_container_width=True, hide_index=True)


def _render_resolve_tab(country) -> None:
    c1, c2 = st.columns(2)
    lat = c1.number_input("Latitude", min_value=-90.0, max_value=90.0, value=37.7749, format="%.5f")
    lon = c2.number_input("Longitude", min_value=-180.0, max_value=180.0, value=-122.4194, format="%.5f")
    if st.button("Resolve", type="primary"):
        try:
            resolver = get_resolver()
        except Exception as exc:
            logger.exception("Failed to initialise resolver")
            st.error(f"Resolver initialisation failed: {exc}")
            return
        with st.spinner(f"Reverse geocoding via {resolver.provider_name}…"):
            zone = asyncio.run(resolver.resolve(Coordinate(latitude=lat, longitude=lon)))
        if zone is None:
            st.warning("No administrative zone found for this coordinate.")
        else:
            st.success(f"{zone.name} — {zone.kind.value} of {zone.country.name}")
            st.json(zone.to_dict())

    cached = get_zone_cache().load(country)
    st.caption(
        f"Cached zone for {country.code}: "
        + (f"{cached.name} ({cached.kind.value})" if cached else "none")
    )


# ── Main ───────────────────────────────────────────────────────────────────

def main() -> None:
    st.title("🗺️ Geotaxon")
    country = _render_sidebar()
    zone_tab, age_tab, resolve_tab = st.tabs(["Zone", "Age bracket", "Resolve coordinate"])
    with zone_tab:
        _render_zone_tab(country)
    with age_tab:
        _render_age_tab()
    with resolve_tab:
        _render_resolve_tab(country)


main()
