"""
interfaces/cli.py
──────────────────────────────────────────────────────────────────────────────
Command-line interface for the zone and age-bracket classifiers.

Usage:
  # Classify a region name (country defaults to the preferred country)
  python -m geotaxon.interfaces.cli zone "Puerto Rico" --country us

  # Age bracket under a given organisation
  python -m geotaxon.interfaces.cli age 24.9 --org cdc

  # Reverse-geocode a coordinate, classify and cache the zone
  python -m geotaxon.interfaces.cli resolve 48.8566 2.3522

  # Show the cached zone for a country
  python -m geotaxon.interfaces.cli cached FR

  # Show or set the preferred country
  python -m geotaxon.interfaces.cli prefer GB

  # JSON output, debug logging
  python -m geotaxon.interfaces.cli -v zone Ontario --country CA --json

  # Via installed entry-point (pyproject.toml [project.scripts])
  geotaxon age 70 --org census

Exit codes:
  0 — success
  1 — runtime error, or no result (geocode failure, cache miss)
  2 — argument error
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from geotaxon.domain.models import AdministrativeZone, Coordinate, Country, Organization
from geotaxon.services.container import (
    get_age_classifier,
    get_catalog,
    get_resolver,
    get_zone_cache,
    get_zone_classifier,
)

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="geotaxon",
        description="Classify administrative zones and age brackets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    # --json is accepted after any sub-command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON.",
    )

    zone = sub.add_parser("zone", parents=[common], help="Classify a region name within a country.")
    zone.add_argument("name", help="Region name, canonical spelling (e.g. 'Côte-d'Or').")
    zone.add_argument(
        "--country", "-c",
        metavar="CODE",
        help="ISO 3166-1 alpha-2 code. (default: preferred country)",
    )

    age = sub.add_parser("age", parents=[common], help="Classify an age into a bracket.")
    age.add_argument("age", help="Age in years (integer or decimal).")
    age.add_argument(
        "--org", "-o",
        choices=[o.value for o in Organization],
        default=Organization.CDC.value,
        help="Standards organisation. (default: cdc)",
    )

    resolve = sub.add_parser("resolve", parents=[common], help="Reverse-geocode a coordinate to a zone.")
    resolve.add_argument("latitude", type=float)
    resolve.add_argument("longitude", type=float)

    cached = sub.add_parser("cached", parents=[common], help="Show the cached zone for a country.")
    cached.add_argument("country", nargs="?", metavar="CODE",
                        help="(default: preferred country)")

    prefer = sub.add_parser("prefer", parents=[common], help="Show or set the preferred country.")
    prefer.add_argument("country", nargs="?", metavar="CODE",
                        help="Code to save; omit to show the current preference.")
    return p


# ── Formatting helpers ─────────────────────────────────────────────────────

def _print_zone(zone: AdministrativeZone, json_output: bool) -> None:
    if json_output:
        print(json.dumps(zone.to_dict(), indent=2, ensure_ascii=False))
        return
    print(f"{zone.name}  [{zone.kind.value}]  {zone.country.name} ({zone.country.code})")


def _print_country(country: Country, json_output: bool) -> None:
    if json_output:
        print(json.dumps(country.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return
    print(f"{country.code}  {country.name}")


def _resolve_country(code: str | None) -> Country:
    catalog = get_catalog()
    if code is None:
        return catalog.preferred_country()
    return catalog.from_code(code)


# ── Commands ───────────────────────────────────────────────────────────────

def _cmd_zone(args: argparse.Namespace) -> int:
    country = _resolve_country(args.country)
    _print_zone(get_zone_classifier().classify(args.name, country), args.json_output)
    return 0


def _cmd_age(args: argparse.Namespace) -> int:
    result = get_age_classifier().describe(args.age, args.org)
    if args.json_output:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        adult = "adult" if result.is_adult else "minor"
        print(f"{result.display_name}  ({result.age_range}, {result.organization.value.upper()}, {adult})")
    return 0


def _cmd_resolve(args: argparse.Namespace) -> int:
    try:
        coordinate = Coordinate(latitude=args.latitude, longitude=args.longitude)
    except ValueError as exc:
        print(f"ERROR: invalid coordinate: {exc}", file=sys.stderr)
        return 2
    zone = asyncio.run(get_resolver().resolve(coordinate))
    if zone is None:
        print("No administrative zone found for this coordinate.", file=sys.stderr)
        return 1
    _print_zone(zone, args.json_output)
    return 0


def _cmd_cached(args: argparse.Namespace) -> int:
    country = _resolve_country(args.country)
    zone = get_zone_cache().load(country)
    if zone is None:
        print(f"No cached zone for {country.code}.", file=sys.stderr)
        return 1
    _print_zone(zone, args.json_output)
    return 0


def _cmd_prefer(args: argparse.Namespace) -> int:
    catalog = get_catalog()
    if args.country is None:
        _print_country(catalog.preferred_country(), args.json_output)
        return 0
    country = catalog.lookup(args.country)
    if country is None:
        print(f"ERROR: unrecognised country code: {args.country!r}", file=sys.stderr)
        return 2
    catalog.save_as_preferred(country)
    _print_country(country, args.json_output)
    return 0


_COMMANDS = {
    "zone": _cmd_zone,
    "age": _cmd_age,
    "resolve": _cmd_resolve,
    "cached": _cmd_cached,
    "prefer": _cmd_prefer,
}


def run(args: argparse.Namespace) -> int:
    """Execute the selected sub-command.

    Returns:
        Exit code (0 = success, 1 = error / no result, 2 = bad arguments).
    """
    try:
        return _COMMANDS[args.command](args)
    except Exception as exc:
        logger.exception("Command %r failed", args.command)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> None:
    """Entry point for the geotaxon console script."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(2)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
