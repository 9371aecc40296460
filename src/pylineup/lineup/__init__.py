"""Lineup builders and validation."""

from .batting import DEFAULT_MAX_CONSECUTIVE_MALES, build_batting_order
from .builder import Lineup, build_lineup
from .fielding import DEFAULT_INNINGS, FieldingChart, build_fielding_chart, max_outs_for
from .validation import (
    CandidateCheck,
    InningReport,
    LineupIssue,
    LineupRejected,
    LineupReport,
    check_candidate_lineup,
    require_valid_candidate,
    validate_lineup,
)

__all__ = [
    "DEFAULT_INNINGS",
    "DEFAULT_MAX_CONSECUTIVE_MALES",
    "CandidateCheck",
    "FieldingChart",
    "InningReport",
    "Lineup",
    "LineupIssue",
    "LineupRejected",
    "LineupReport",
    "build_batting_order",
    "build_fielding_chart",
    "build_lineup",
    "check_candidate_lineup",
    "max_outs_for",
    "require_valid_candidate",
    "validate_lineup",
]
