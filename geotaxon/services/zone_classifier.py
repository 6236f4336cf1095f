"""
services/zone_classifier.py
──────────────────────────────────────────────────────────────────────────────
Zone Classifier: region name + country → AdministrativeZone.

Decision policy (evaluated per country code):
  US           → TERRITORY if the name is a US territory, else STATE
  FR           → DEPARTMENT if the name is a metropolitan department, else REGION
  AU, MX       → STATE
  CA, CN, DE   → PROVINCE
  IT, JP       → REGION
  GB           → COUNTY
  anything else→ UNKNOWN

Membership is exact, case-sensitive string equality.  Names are not
normalised: "Cote-d'Or" does not match "Côte-d'Or".

classify() is pure and total — no I/O, never raises — and is exposed both as
a method and as the module-level function classify_zone() for direct use in
tests.
"""
from __future__ import annotations

import logging

from geotaxon.domain.models import AdministrativeZone, Country, ZoneKind

logger = logging.getLogger(__name__)

US_TERRITORIES: frozenset[str] = frozenset({
    "American Samoa",
    "Guam",
    "Northern Mariana Islands",
    "Puerto Rico",
    "U.S. Virgin Islands",
})

FRENCH_DEPARTMENTS: frozenset[str] = frozenset({
    "Ain", "Aisne", "Allier", "Alpes-de-Haute-Provence", "Hautes-Alpes", "Alpes-Maritimes",
    "Ardèche", "Ardennes", "Ariège", "Aube", "Aude", "Aveyron",
    "Bouches-du-Rhône", "Calvados", "Cantal", "Charente", "Charente-Maritime",
    "Cher", "Corrèze", "Corse-du-Sud", "Haute-Corse", "Côte-d'Or", "Côtes-d'Armor",
    "Creuse", "Dordogne", "Doubs", "Drôme", "Eure", "Eure-et-Loir", "Finistère",
    "Gard", "Haute-Garonne", "Gers", "Gironde", "Hérault", "Ille-et-Vilaine", "Indre",
    "Indre-et-Loire", "Isère", "Jura", "Landes", "Loir-et-Cher", "Loire",
    "Haute-Loire", "Loire-Atlantique", "Loiret", "Lot", "Lot-et-Garonne", "Lozère",
    "Maine-et-Loire", "Manche", "Marne", "Haute-Marne", "Mayenne", "Meurthe-et-Moselle",
    "Meuse", "Morbihan", "Moselle", "Nièvre", "Nord", "Oise", "Orne", "Pas-de-Calais",
    "Puy-de-Dôme", "Pyrénées-Atlantiques", "Hautes-Pyrénées", "Pyrénées-Orientales",
    "Bas-Rhin", "Haut-Rhin", "Rhône", "Haute-Saône", "Saône-et-Loire", "Sarthe",
    "Savoie", "Haute-Savoie", "Paris", "Seine-Maritime", "Seine-et-Marne",
    "Yvelines", "Deux-Sèvres", "Somme", "Tarn", "Tarn-et-Garonne", "Var",
    "Vaucluse", "Vendée", "Vienne", "Haute-Vienne", "Vosges", "Yonne", "Territoire de Belfort",
    "Essonne", "Hauts-de-Seine", "Seine-Saint-Denis", "Val-de-Marne", "Val-d'Oise",
})

# Countries whose subdivisions all share one kind.
COUNTRY_GROUP_KINDS: dict[str, ZoneKind] = {
    "AU": ZoneKind.STATE,
    "MX": ZoneKind.STATE,
    "CA": ZoneKind.PROVINCE,
    "CN": ZoneKind.PROVINCE,
    "DE": ZoneKind.PROVINCE,
    "IT": ZoneKind.REGION,
    "JP": ZoneKind.REGION,
    "GB": ZoneKind.COUNTY,
}


class ZoneClassifier:
    """Table-driven administrative-zone classifier.  Stateless."""

    def classify(self, name: str, country: Country) -> AdministrativeZone:
        """Classify a region name within a country.

        Args:
            name:    Region name in canonical spelling (e.g. "Puerto Rico").
            country: Country the region belongs to.

        Returns:
            AdministrativeZone carrying ``name`` and ``country`` unchanged.
            Countries without a rule yield ZoneKind.UNKNOWN.
        """
        zone = classify_zone(name, country)
        logger.debug("classify | name=%r country=%s kind=%s",
                     name, country.code, zone.kind.value)
        return zone


def classify_zone(name: str, country: Country) -> AdministrativeZone:
    """Pure function behind ZoneClassifier.classify()."""
    return AdministrativeZone(kind=zone_kind_for(name, country.code), name=name, country=country)


def zone_kind_for(name: str, country_code: str) -> ZoneKind:
    """Select the ZoneKind for a name within the country identified by code."""
    if country_code == "US":
        return ZoneKind.TERRITORY if name in US_TERRITORIES else ZoneKind.STATE
    if country_code == "FR":
        return ZoneKind.DEPARTMENT if name in FRENCH_DEPARTMENTS else ZoneKind.REGION
    return COUNTRY_GROUP_KINDS.get(country_code, ZoneKind.UNKNOWN)
