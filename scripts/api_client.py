"""Lightweight REST client for the pylineup API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_json(path: Path | None, label: str):
    if path is None:
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid {label} JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pylineup REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("players", type=Path, nargs="?", help="Players JSON (list of roster records)")
    parser.add_argument("--settings", type=Path, default=None, help="Team settings JSON")
    parser.add_argument("--check", type=Path, default=None, help="Proposed lineup JSON to accept or reject")
    parser.add_argument("--innings", type=int, default=7, help="Innings for --check")
    parser.add_argument("--positions", action="store_true", help="Print the position catalog and exit")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.positions:
            resp = client.get("/positions")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.check:
            proposal = load_json(args.check, "lineup")
            resp = client.post("/lineups/check", json={"lineup": proposal, "innings": args.innings})
            resp.raise_for_status()
            payload = resp.json()
            print("Accepted" if payload["accepted"] else "Rejected")
            for reason in payload["reasons"]:
                print(f"  - {reason}")
            return

        if args.players is None:
            raise SystemExit("players file is required unless using --positions/--check")

        request = {"players": load_json(args.players, "players")}
        settings = load_json(args.settings, "settings")
        if settings is not None:
            request["settings"] = settings

        resp = client.post("/lineups", json=request)
        resp.raise_for_status()
        payload = resp.json()
        for order, player in enumerate(payload["batting_order"], start=1):
            print(f"{order:>2}. {player['firstName']} {player['lastName']} ({player['gender']})")
        for line in payload["validation"]["summary"]:
            print(line)


if __name__ == "__main__":
    main()
