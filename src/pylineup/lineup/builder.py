"""Build the batting order and fielding chart together from team settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from pylineup.config import TeamSettings
from pylineup.models import Player

from .batting import build_batting_order
from .fielding import FieldingChart, build_fielding_chart


@dataclass(frozen=True)
class Lineup:
    batting_order: List[Player]
    fielding_chart: FieldingChart


def build_lineup(players: Sequence[Player], settings: TeamSettings | None = None) -> Lineup:
    """Generate a complete lineup; the chart follows batting order for roster order."""

    settings = settings or TeamSettings()
    batting_order = build_batting_order(
        players,
        ideal_lineup=settings.ideal_lineup,
        max_consecutive_males=settings.max_consecutive_males,
    )
    chart = build_fielding_chart(
        batting_order,
        innings=settings.innings,
        ideal_positioning=settings.ideal_positioning,
        catalog=settings.catalog,
    )
    return Lineup(batting_order=batting_order, fielding_chart=chart)
