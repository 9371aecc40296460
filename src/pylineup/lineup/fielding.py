"""Multi-inning fielding chart construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from pylineup.config.positions import PositionCatalog, resolve_catalog
from pylineup.models import OUT, FieldedPlayer, Player
from pylineup.priority import (
    IdealPositioning,
    PriorityEntry,
    locked_assignments,
    parse_ideal_positioning,
)


logger = logging.getLogger(__name__)

DEFAULT_INNINGS = 7
LARGE_ROSTER_SIZE = 13


def max_outs_for(roster_size: int) -> int:
    """Sit-out cap per player for a roster of ``roster_size``."""

    return 3 if roster_size > LARGE_ROSTER_SIZE else 2


@dataclass(frozen=True)
class FieldingChart:
    innings: int
    players: Tuple[FieldedPlayer, ...]
    unfilled: Tuple[Tuple[str, ...], ...]
    max_outs: int

    def positions_for(self, player_id: str) -> Tuple[str, ...]:
        for player in self.players:
            if player.player_id == player_id:
                return player.positions
        raise KeyError(player_id)

    def as_mapping(self) -> Dict[str, Tuple[str, ...]]:
        return {player.player_id: player.positions for player in self.players}

    def inning(self, index: int) -> Dict[str, str]:
        """Position -> player id for one inning (sit-outs omitted)."""

        return {
            player.positions[index]: player.player_id
            for player in self.players
            if player.positions[index] != OUT
        }


@dataclass
class _Slot:
    """A player's running state across innings."""

    order: int
    player: Player
    locked_to: Optional[str] = None
    positions: List[str] = field(default_factory=list)
    outs: int = 0

    def record(self, position: str) -> None:
        self.positions.append(position)
        if position == OUT:
            self.outs += 1


class _Inning:
    """Assignment state owned by a single inning."""

    def __init__(self, positions: Iterable[str]):
        self.open: List[str] = list(positions)
        self.assigned: Dict[int, str] = {}

    def is_open(self, position: str) -> bool:
        return position in self.open

    def is_assigned(self, slot: _Slot) -> bool:
        return slot.order in self.assigned

    def take(self, slot: _Slot, position: str) -> None:
        self.open.remove(position)
        self.assigned[slot.order] = position

    def place(self, slot: _Slot) -> Optional[str]:
        """Give ``slot`` its first open preferred position, else the first open one."""

        position = next(
            (pos for pos in slot.player.preferred_positions if self.is_open(pos)),
            self.open[0] if self.open else None,
        )
        if position is not None:
            self.take(slot, position)
        return position


def _from_chain(
    chain: Sequence[PriorityEntry],
    by_id: Mapping[str, _Slot],
    inning: _Inning,
    sitting: AbstractSet[int] = frozenset(),
) -> Optional[_Slot]:
    for entry in chain:
        slot = by_id.get(entry.player_id)
        if slot is not None and slot.order not in sitting and not inning.is_assigned(slot):
            return slot
    return None


def _by_preference(position: str, slots: Sequence[_Slot], inning: _Inning) -> Optional[_Slot]:
    for slot in slots:
        if not inning.is_assigned(slot) and position in slot.player.preferred_positions:
            return slot
    return None


def _choose_sitters(
    number: int,
    free: Sequence[_Slot],
    count: int,
    listed: Set[str],
    max_outs: int,
) -> Set[int]:
    """Pick ``count`` players to sit this inning, fewest outs first.

    Players at the cap or who sat last inning only sit when nobody else can.
    Within an out count, players without a preferred or priority position sit
    ahead of those with one, then roster order breaks ties.
    """

    def owed(slot: _Slot) -> bool:
        return slot.outs >= max_outs or (number > 0 and slot.positions[-1] == OUT)

    ranked = sorted(
        free,
        key=lambda slot: (
            owed(slot),
            slot.outs,
            bool(slot.player.preferred_positions) or slot.player.player_id in listed,
            slot.order,
        ),
    )
    chosen = ranked[: max(count, 0)]
    for slot in chosen:
        if owed(slot):
            logger.warning(
                "Inning %d: %s sits again with %d outs already; no position left",
                number + 1,
                slot.player.player_id,
                slot.outs,
            )
    return {slot.order for slot in chosen}


def _fill_inning(
    number: int,
    slots: Sequence[_Slot],
    by_id: Mapping[str, _Slot],
    chains: IdealPositioning,
    catalog: PositionCatalog,
    max_outs: int,
) -> Tuple[str, ...]:
    inning = _Inning(catalog.positions)

    for slot in slots:
        if slot.locked_to is not None:
            inning.take(slot, slot.locked_to)

    if number > 0:
        for slot in slots:
            if inning.is_assigned(slot):
                continue
            if slot.positions[-1] == OUT or slot.outs >= max_outs:
                inning.place(slot)

    free = [slot for slot in slots if not inning.is_assigned(slot)]
    listed = {entry.player_id for chain in chains.values() for entry in chain}
    sitting = _choose_sitters(number, free, len(free) - len(inning.open), listed, max_outs)
    active = [slot for slot in free if slot.order not in sitting]

    pitcher = catalog.pitcher
    if pitcher and inning.is_open(pitcher):
        candidate = _from_chain(chains.get(pitcher, ()), by_id, inning, sitting) or _by_preference(
            pitcher, active, inning
        )
        if candidate is not None:
            inning.take(candidate, pitcher)

    # Team priority chains claim their players before personal preferences run.
    for position in list(inning.open):
        candidate = _from_chain(chains.get(position, ()), by_id, inning, sitting)
        if candidate is not None:
            inning.take(candidate, position)
    for position in list(inning.open):
        candidate = _by_preference(position, active, inning)
        if candidate is not None:
            inning.take(candidate, position)

    for slot in active:
        if not inning.is_assigned(slot):
            inning.place(slot)

    for slot in slots:
        slot.record(inning.assigned.get(slot.order, OUT))

    if inning.open and slots:
        logger.warning(
            "Inning %d: not enough players, left unfilled: %s",
            number + 1,
            ", ".join(inning.open),
        )
    return tuple(inning.open)


def build_fielding_chart(
    players: Sequence[Player],
    *,
    innings: int = DEFAULT_INNINGS,
    ideal_positioning: IdealPositioning | Any = None,
    catalog: PositionCatalog | str | None = None,
) -> FieldingChart:
    """Assign every player a position (or ``Out``) for each inning.

    Each inning runs over fresh per-inning state: locked players, then
    players owed a position (sat last inning or at the sit-out cap). When
    players still outnumber open positions, this inning's sitters are picked
    next, fewest outs first. The pitcher, every other open position and any
    leftover players are then filled from everyone not sitting. Priority
    chains from ``ideal_positioning`` are tried ahead of personal
    preferences. Malformed ``ideal_positioning`` is ignored.
    """

    resolved_catalog = resolve_catalog(catalog)
    chains = parse_ideal_positioning(ideal_positioning, catalog=resolved_catalog)
    locks = locked_assignments(chains)

    slots: List[_Slot] = []
    by_id: Dict[str, _Slot] = {}
    for order, player in enumerate(players):
        slot = _Slot(order=order, player=player)
        if player.player_id not in by_id:
            by_id[player.player_id] = slot
            slot.locked_to = locks.get(player.player_id)
        slots.append(slot)

    max_outs = max_outs_for(len(slots))
    unfilled = tuple(
        _fill_inning(number, slots, by_id, chains, resolved_catalog, max_outs)
        for number in range(max(innings, 0))
    )

    fielded = tuple(
        FieldedPlayer(
            player_id=slot.player.player_id,
            first_name=slot.player.first_name,
            last_name=slot.player.last_name,
            gender=slot.player.gender,
            positions=tuple(slot.positions),
        )
        for slot in slots
    )
    return FieldingChart(
        innings=max(innings, 0),
        players=fielded,
        unfilled=unfilled,
        max_outs=max_outs,
    )
