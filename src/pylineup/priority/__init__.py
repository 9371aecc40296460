"""Parsing of manager-declared batting and fielding priorities."""

from .parser import (
    EMPTY_LINEUP,
    IdealLineup,
    IdealPositioning,
    Locked,
    PriorityEntry,
    Unlocked,
    locked_assignments,
    parse_ideal_lineup,
    parse_ideal_positioning,
)

__all__ = [
    "EMPTY_LINEUP",
    "IdealLineup",
    "IdealPositioning",
    "Locked",
    "PriorityEntry",
    "Unlocked",
    "locked_assignments",
    "parse_ideal_lineup",
    "parse_ideal_positioning",
]
