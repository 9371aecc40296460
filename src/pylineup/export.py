"""Lineup card CSV export."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from pylineup.config.positions import PositionCatalog, resolve_catalog
from pylineup.lineup import FieldingChart
from pylineup.models import OUT, Player


class LineupExportError(RuntimeError):
    """Raised when a batting order and fielding chart cannot be combined."""


def _card_headers(innings: int) -> tuple[str, ...]:
    return ("order", "player_id", "name", "gender", *(f"inning_{n}" for n in range(1, innings + 1)), "outs")


def export_lineup_card(
    batting_order: Sequence[Player],
    chart: FieldingChart,
    *,
    catalog: PositionCatalog | str | None = None,
    initials: bool = False,
) -> str:
    """Render one row per batter with that player's position in every inning."""

    resolved_catalog = resolve_catalog(catalog)
    fielded = chart.as_mapping()

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(_card_headers(chart.innings))

    for order, player in enumerate(batting_order, start=1):
        positions = fielded.get(player.player_id)
        if positions is None:
            raise LineupExportError(f"Player {player.player_id} is missing from the fielding chart")
        cells = [
            resolved_catalog.initials.get(position, position) if initials else position
            for position in positions
        ]
        writer.writerow([
            order,
            player.player_id,
            player.display_name,
            player.gender.value,
            *cells,
            sum(1 for position in positions if position == OUT),
        ])

    return buffer.getvalue()


__all__ = [
    "LineupExportError",
    "export_lineup_card",
]
