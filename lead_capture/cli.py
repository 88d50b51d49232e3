"""Command line interface for nearby-call lookup and business card scanning."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from .card_text import scan_card_text
from .config import MatcherSettings, load_configuration, matcher_settings_from_config
from .ingestion import export_card_results, export_nearby_matches, load_card_texts, load_lead_records
from .models import Coordinate
from .proximity import find_nearby, last_call_summary
from .search import DEFAULT_SEARCH_LIMIT, search_leads


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Find previously logged leads nearby and parse business card text",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command")

    nearby = subparsers.add_parser("nearby", help="List stored leads close to a location")
    nearby.add_argument("input", help="Path to the lead export (CSV or XLSX)")
    nearby.add_argument("--lat", type=float, required=True, help="Observer latitude in decimal degrees")
    nearby.add_argument("--lng", type=float, required=True, help="Observer longitude in decimal degrees")
    nearby.add_argument("--config", help="Optional configuration file (YAML or JSON)")
    radius = nearby.add_mutually_exclusive_group()
    radius.add_argument("--radius-meters", type=float, default=None, help="Geofence radius in meters")
    radius.add_argument("--radius-feet", type=float, default=None, help="Geofence radius in feet")
    nearby.add_argument("--max-results", type=int, default=None, help="Maximum number of matches to return")
    nearby.add_argument("--output", help="Write matches to this CSV/XLSX file instead of printing")

    search = subparsers.add_parser("search", help="Find stored leads by name, email, or phone")
    search.add_argument("input", help="Path to the lead export (CSV or XLSX)")
    search.add_argument("term", help="Text to look for in company, contact name, email, or phone")
    search.add_argument("--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Maximum number of leads to list")

    scan = subparsers.add_parser("scan", help="Extract contact fields from OCR text files")
    scan.add_argument("files", nargs="+", help="Text files holding raw OCR output, one card per file")
    scan.add_argument("--output", help="Write results to this CSV/XLSX file instead of printing")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _run_nearby(args: argparse.Namespace) -> int:
    settings = MatcherSettings()
    if args.config:
        settings = matcher_settings_from_config(load_configuration(args.config))
    settings = settings.with_overrides(
        radius_meters=args.radius_meters,
        radius_feet=args.radius_feet,
        max_results=args.max_results,
    )

    records = load_lead_records(args.input)
    if not records:
        logging.warning("No leads found in %s - nothing to match", args.input)

    observer = Coordinate(latitude=args.lat, longitude=args.lng)
    matches = find_nearby(observer, records, settings.radius_meters, settings.max_results)
    logging.info(
        "Found %s of %s leads within %.1f m", len(matches), len(records), settings.radius_meters
    )

    if args.output:
        destination = export_nearby_matches(matches, args.output)
        logging.info("Nearby matches written to %s", Path(destination).resolve())
        return 0

    for match in matches:
        summary = last_call_summary(match.record.call_history)
        contact = match.record.contact_name or ""
        line = f"{match.distance_meters:8.1f} m  {match.record.display_name()}"
        if contact:
            line += f"  ({contact})"
        if summary:
            line += f"  last call: {summary}"
        print(line)
    return 0


def _run_search(args: argparse.Namespace) -> int:
    records = load_lead_records(args.input)
    results = search_leads(records, args.term, limit=args.limit)
    logging.info("Found %s lead(s) matching %r", len(results), args.term)

    for record in results:
        details = ", ".join(
            value
            for value in (record.contact_name, record.display_fields.get("contact_email"), record.display_fields.get("contact_phone"))
            if value
        )
        line = f"{record.id}  {record.display_name()}"
        if details:
            line += f"  ({details})"
        summary = last_call_summary(record.call_history)
        if summary:
            line += f"  last call: {summary}"
        print(line)
    return 0


def _run_scan(args: argparse.Namespace) -> int:
    texts = load_card_texts(args.files)
    results = [scan_card_text(text, source=source) for source, text in texts.items()]
    logging.info("Scanned %s card(s)", len(results))

    if args.output:
        destination = export_card_results(results, args.output)
        logging.info("Card results written to %s", Path(destination).resolve())
        return 0

    for result in results:
        print(json.dumps({"source": result.source, **asdict(result.fields)}, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    if args.command == "nearby":
        return _run_nearby(args)
    if args.command == "search":
        return _run_search(args)
    if args.command == "scan":
        return _run_scan(args)

    parser.print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
