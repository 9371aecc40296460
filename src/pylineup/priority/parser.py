"""Lenient parsing of manager-declared batting and fielding priorities.

Team settings store the ideal lineup and the ideal positioning either as
structured data or as JSON text written by older clients. Everything here
degrades to an empty result with a logged warning; nothing raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

from pylineup.config.positions import PositionCatalog, resolve_catalog


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unlocked:
    """Priority candidate that still takes part in rotation."""

    player_id: str


@dataclass(frozen=True)
class Locked:
    """Player pinned to the position for every inning."""

    player_id: str


PriorityEntry = Union[Unlocked, Locked]
IdealPositioning = Dict[str, Tuple[PriorityEntry, ...]]


@dataclass(frozen=True)
class IdealLineup:
    primary: Tuple[str, ...] = ()
    reserves: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.reserves

    def ordered_ids(self) -> Tuple[str, ...]:
        return self.primary + self.reserves


EMPTY_LINEUP = IdealLineup()

_LOCK_KEYS = ("neverSub", "locked")


def _load(value: Any, label: str) -> Any:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring unparsable %s: %s", label, exc)
        return None


def _id_list(value: Any, label: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        logger.warning("Ignoring %s: expected a list, got %s", label, type(value).__name__)
        return ()
    ids = []
    for item in value:
        if isinstance(item, str) and item:
            ids.append(item)
        else:
            logger.warning("Dropping non-id entry %r from %s", item, label)
    return tuple(ids)


def parse_ideal_lineup(value: Any) -> IdealLineup:
    """Normalize a stored ideal lineup into primary and reserve id lists."""

    if isinstance(value, IdealLineup):
        return value
    data = _load(value, "idealLineup")
    if data is None:
        return EMPTY_LINEUP
    if isinstance(data, (list, tuple)):
        return IdealLineup(primary=_id_list(data, "idealLineup"))
    if not isinstance(data, Mapping):
        logger.warning("Ignoring idealLineup of type %s", type(data).__name__)
        return EMPTY_LINEUP

    primary_raw = data.get("primary", data.get("lineup"))
    return IdealLineup(
        primary=_id_list(primary_raw, "idealLineup.lineup"),
        reserves=_id_list(data.get("reserves"), "idealLineup.reserves"),
    )


def _entry(item: Any, position: str) -> PriorityEntry | None:
    if isinstance(item, (Unlocked, Locked)):
        return item
    if isinstance(item, str):
        return Unlocked(item) if item else None
    if isinstance(item, Mapping):
        player_id = item.get("id")
        if isinstance(player_id, str) and player_id:
            if any(item.get(key) is True for key in _LOCK_KEYS):
                return Locked(player_id)
            return Unlocked(player_id)
    logger.warning("Dropping malformed priority entry %r for %s", item, position)
    return None


def _chain(items: Any, position: str) -> Tuple[PriorityEntry, ...]:
    if not isinstance(items, (list, tuple)):
        logger.warning("Ignoring priority list for %s: expected a list", position)
        return ()
    chain: list[PriorityEntry] = []
    seen: set[str] = set()
    for item in items:
        entry = _entry(item, position)
        if entry is None or entry.player_id in seen:
            continue
        seen.add(entry.player_id)
        chain.append(entry)
    return tuple(chain)


def _resolve_lock_conflicts(
    positioning: IdealPositioning, catalog: PositionCatalog
) -> IdealPositioning:
    # one lock per position, one position per locked player; catalog order decides
    locked_players: Dict[str, str] = {}
    resolved: IdealPositioning = {}
    for position in sorted(positioning, key=catalog.index):
        chain = []
        position_locked = False
        for entry in positioning[position]:
            if isinstance(entry, Locked):
                holder = locked_players.get(entry.player_id)
                if holder is not None:
                    logger.warning(
                        "Player %s is already locked to %s; unlocking %s entry",
                        entry.player_id,
                        holder,
                        position,
                    )
                    entry = Unlocked(entry.player_id)
                elif position_locked:
                    logger.warning(
                        "%s already has a locked player; unlocking %s",
                        position,
                        entry.player_id,
                    )
                    entry = Unlocked(entry.player_id)
                else:
                    locked_players[entry.player_id] = position
                    position_locked = True
            chain.append(entry)
        resolved[position] = tuple(chain)
    return resolved


def parse_ideal_positioning(
    value: Any, *, catalog: PositionCatalog | str | None = None
) -> IdealPositioning:
    """Normalize stored ideal positioning into position -> priority chain.

    Bare id strings become :class:`Unlocked`; ``{"id": ..., "neverSub": true}``
    records become :class:`Locked`. Positions missing from the catalog and
    empty chains are dropped.
    """

    data = _load(value, "idealPositioning")
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        logger.warning("Ignoring idealPositioning of type %s", type(data).__name__)
        return {}

    resolved_catalog = resolve_catalog(catalog)
    positioning: IdealPositioning = {}
    for position, items in data.items():
        if position not in resolved_catalog:
            logger.warning("Ignoring priority list for unknown position %r", position)
            continue
        chain = _chain(items, position)
        if chain:
            positioning[position] = chain
    return _resolve_lock_conflicts(positioning, resolved_catalog)


def locked_assignments(positioning: Mapping[str, Iterable[PriorityEntry]]) -> Dict[str, str]:
    """Return ``player_id -> position`` for every locked entry."""

    locks: Dict[str, str] = {}
    for position, chain in positioning.items():
        for entry in chain:
            if isinstance(entry, Locked):
                locks.setdefault(entry.player_id, position)
    return locks
