"""Batting order construction with the consecutive-male batter rule."""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from pylineup.models import Player
from pylineup.priority import IdealLineup, parse_ideal_lineup


logger = logging.getLogger(__name__)

DEFAULT_MAX_CONSECUTIVE_MALES = 3


def _gender_balanced(players: Sequence[Player], max_consecutive_males: int) -> List[Player]:
    remaining = list(players)
    order: List[Player] = []
    consecutive_males = 0

    while remaining:
        if consecutive_males >= max_consecutive_males:
            index = next((i for i, p in enumerate(remaining) if not p.is_male), None)
            if index is None:
                # Only male batters are left, so the rule has to give.
                logger.debug("No non-male batter left to break a run of %d", consecutive_males)
                index = 0
        else:
            index = next((i for i, p in enumerate(remaining) if p.is_male), 0)

        player = remaining.pop(index)
        order.append(player)
        consecutive_males = consecutive_males + 1 if player.is_male else 0

    return order


def build_batting_order(
    players: Sequence[Player],
    *,
    ideal_lineup: IdealLineup | Any = None,
    max_consecutive_males: int = DEFAULT_MAX_CONSECUTIVE_MALES,
) -> List[Player]:
    """Order the available players for batting.

    Players named in the ideal lineup (primary, then reserves) bat first in
    that order; ids that are unavailable or repeated are skipped. Everyone
    else is appended by the gender-balance rule: males are taken first until
    ``max_consecutive_males`` in a row, then the next non-male batter is
    forced in. When no non-male batter remains the run simply continues.
    """

    if max_consecutive_males < 1:
        logger.warning(
            "max_consecutive_males=%s is below 1; using 1", max_consecutive_males
        )
        max_consecutive_males = 1

    ideal = parse_ideal_lineup(ideal_lineup)
    by_id = {player.player_id: player for player in players}

    order: List[Player] = []
    consumed: set[str] = set()
    for player_id in ideal.ordered_ids():
        player = by_id.get(player_id)
        if player is None or player_id in consumed:
            continue
        order.append(player)
        consumed.add(player_id)

    leftovers = [player for player in players if player.player_id not in consumed]
    order.extend(_gender_balanced(leftovers, max_consecutive_males))
    return order
