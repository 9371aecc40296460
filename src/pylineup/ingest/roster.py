"""Helpers to load roster CSVs and emit canonical player records."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from pylineup.config.positions import PositionCatalog, resolve_catalog
from pylineup.models import Player


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_id": "Id",
    "first_name": "First Name",
    "last_name": "Last Name",
    "gender": "Gender",
    "preferred_positions": "Preferred Positions",
    "disliked_positions": "Disliked Positions",
}

_POSITION_SPLIT = re.compile(r"[,;/|]")


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_first_name: str = ""
    raw_last_name: str = ""
    raw_gender: Optional[str] = None
    raw_preferred: Optional[str] = None
    raw_disliked: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            column = mapping.get(key)
            if column is None:
                return default
            value = row.get(column)
            return value.strip() if value is not None else default

        return cls(
            raw_id=extract("player_id"),
            raw_first_name=extract("first_name", default="") or "",
            raw_last_name=extract("last_name", default="") or "",
            raw_gender=extract("gender"),
            raw_preferred=extract("preferred_positions"),
            raw_disliked=extract("disliked_positions"),
        )


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    return rows


def parse_positions(raw: Optional[str], catalog: PositionCatalog) -> List[str]:
    """Split a position cell and map initials (``SS``, ``LC``...) to catalog codes."""

    if not raw:
        return []
    by_initials = {initials.upper(): position for position, initials in catalog.initials.items()}
    by_name = {position.upper(): position for position in catalog.positions}
    positions: List[str] = []
    for token in _POSITION_SPLIT.split(raw):
        key = token.strip().upper()
        if not key:
            continue
        position = by_name.get(key) or by_initials.get(key)
        if position is None:
            logger.warning("Ignoring unknown position %r", token.strip())
            continue
        if position not in positions:
            positions.append(position)
    return positions


def rows_to_players(
    rows: Sequence[RosterRow],
    *,
    catalog: PositionCatalog | str | None = None,
) -> List[Player]:
    """Convert roster rows into players, skipping rows without an id."""

    resolved_catalog = resolve_catalog(catalog)
    players: List[Player] = []
    for index, row in enumerate(rows, start=1):
        player_id = row.raw_id or ""
        if not player_id:
            logger.warning("Skipping roster row %d without a player id", index)
            continue
        try:
            players.append(
                Player(
                    player_id=player_id,
                    first_name=row.raw_first_name,
                    last_name=row.raw_last_name,
                    gender=row.raw_gender,
                    preferred_positions=parse_positions(row.raw_preferred, resolved_catalog),
                    disliked_positions=parse_positions(row.raw_disliked, resolved_catalog),
                )
            )
        except ValidationError as exc:
            logger.warning("Skipping roster row %d: %s", index, exc)
    return players


def load_players_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
    catalog: PositionCatalog | str | None = None,
) -> List[Player]:
    rows = load_roster_csv(path, mapping=mapping)
    return rows_to_players(rows, catalog=catalog)
