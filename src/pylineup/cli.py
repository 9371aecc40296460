"""Command-line interface for generating a game lineup card from a roster."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pylineup.config import TeamSettings
from pylineup.config_loader import TeamProfile
from pylineup.export import export_lineup_card
from pylineup.ingest import load_players_from_csv
from pylineup.lineup import build_lineup, validate_lineup


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a batting order and fielding chart")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument("--team-profile", type=Path, default=None, help="Team profile JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save the resolved team profile JSON")
    parser.add_argument("--innings", type=int, default=None, help="Number of innings to chart")
    parser.add_argument(
        "--max-males",
        type=int,
        default=None,
        help="Maximum consecutive male batters",
    )
    parser.add_argument("--catalog", default=None, help="Position catalog (softball, baseball)")
    parser.add_argument("--ideal-lineup", default=None, help="Ideal lineup JSON")
    parser.add_argument("--ideal-positioning", default=None, help="Ideal positioning JSON")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., gender=Sex)",
    )
    parser.add_argument("--output", type=Path, default=Path("lineup.csv"), help="Output CSV path")
    parser.add_argument("--initials", action="store_true", help="Write position initials instead of names")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write validation summary JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log builder diagnostics")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_settings(args: argparse.Namespace) -> tuple[TeamSettings, TeamProfile]:
    profile = TeamProfile.load(args.team_profile) if args.team_profile else TeamProfile()
    if args.ideal_lineup is not None:
        profile.ideal_lineup = args.ideal_lineup
    if args.ideal_positioning is not None:
        profile.ideal_positioning = args.ideal_positioning
    settings = profile.to_settings(
        innings=args.innings,
        max_consecutive_males=args.max_males,
        catalog=args.catalog,
    )
    return settings, profile


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings, profile = _resolve_settings(args)
    players = load_players_from_csv(
        args.roster,
        mapping=_parse_mapping(args.column) or None,
        catalog=settings.catalog,
    )
    print(f"Loaded {len(players)} players from {args.roster}")

    lineup = build_lineup(players, settings)
    report = validate_lineup(
        list(lineup.fielding_chart.players),
        max_consecutive_males=settings.max_consecutive_males,
        innings=settings.innings,
        catalog=settings.catalog,
    )

    args.output.write_text(
        export_lineup_card(
            lineup.batting_order,
            lineup.fielding_chart,
            catalog=settings.catalog,
            initials=args.initials,
        ),
        encoding="utf-8",
    )
    print(f"Wrote lineup card to {args.output}")

    if args.save_profile:
        profile.innings = settings.innings
        profile.max_male_batters = settings.max_consecutive_males
        profile.catalog = settings.catalog
        profile.save(args.save_profile)
        print(f"Saved team profile to {args.save_profile}")

    if args.report:
        report_payload = {
            "ok": report.ok,
            "summary": list(report.summary),
            "unfilled": [list(open_positions) for open_positions in lineup.fielding_chart.unfilled],
        }
        args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
        print(f"Wrote validation report to {args.report}")

    for line in report.summary:
        print(line)


if __name__ == "__main__":
    main()
