"""Consistency checks for generated and externally proposed lineups.

``validate_lineup`` produces the report shown next to a lineup (gender-run
violations, duplicate or missing positions per inning). ``check_candidate_lineup``
is the accept-or-reject gate for lineups proposed by an outside generator:
they must pass the same structural rules as hand-built ones.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence, Tuple

from pylineup.config.positions import PositionCatalog, resolve_catalog
from pylineup.models import OUT, FieldedPlayer, Gender


Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class LineupIssue:
    code: str
    message: str
    severity: Severity = "error"
    inning: Optional[int] = None
    position: Optional[str] = None
    player_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class InningReport:
    inning: int
    duplicates: Tuple[LineupIssue, ...]
    missing: Tuple[str, ...]


@dataclass(frozen=True)
class LineupReport:
    batting_errors: Tuple[LineupIssue, ...]
    fielding_errors: Tuple[InningReport, ...]
    summary: Tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.batting_errors and all(
            not report.duplicates and not report.missing for report in self.fielding_errors
        )


@dataclass(frozen=True)
class CandidateCheck:
    accepted: bool
    issues: Tuple[LineupIssue, ...]

    @property
    def reasons(self) -> Tuple[str, ...]:
        return tuple(issue.message for issue in self.issues if issue.severity == "error")


class LineupRejected(ValueError):
    """Raised when a proposed lineup fails the structural checks."""

    def __init__(self, issues: Sequence[LineupIssue]):
        self.issues = tuple(issues)
        reasons = "; ".join(issue.message for issue in self.issues if issue.severity == "error")
        super().__init__(f"Lineup rejected: {reasons}")


def ordinal(value: int) -> str:
    if 10 <= value % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(value % 10, "th")
    return f"{value}{suffix}"


def _name(entry: FieldedPlayer) -> str:
    return f"{entry.first_name} {entry.last_name}".strip() or entry.player_id


def _inning_positions(entries: Iterable[FieldedPlayer], index: int) -> dict[str, list[FieldedPlayer]]:
    by_position: dict[str, list[FieldedPlayer]] = defaultdict(list)
    for entry in entries:
        if index < len(entry.positions) and entry.positions[index] not in ("", OUT):
            by_position[entry.positions[index]].append(entry)
    return by_position


def _duplicate_issue(position: str, holders: Sequence[FieldedPlayer], inning: int) -> LineupIssue:
    return LineupIssue(
        code="duplicate_position",
        message=f"{position} is assigned to multiple players",
        inning=inning,
        position=position,
        player_ids=tuple(entry.player_id for entry in holders),
    )


def validate_lineup(
    lineup: Sequence[FieldedPlayer],
    *,
    max_consecutive_males: int = 0,
    innings: Optional[int] = None,
    catalog: PositionCatalog | str | None = None,
) -> LineupReport:
    """Report rule violations for a lineup given in batting order.

    ``max_consecutive_males`` of 0 skips the batting check. ``innings``
    defaults to the longest positions array in the lineup.
    """

    if not lineup:
        return LineupReport(batting_errors=(), fielding_errors=(), summary=())

    resolved_catalog = resolve_catalog(catalog)
    summary: list[str] = []
    batting_errors: list[LineupIssue] = []

    if max_consecutive_males > 0:
        run = 0
        for entry in lineup:
            run = run + 1 if entry.gender is Gender.MALE else 0
            if run > max_consecutive_males:
                batting_errors.append(
                    LineupIssue(
                        code="consecutive_males",
                        message=(
                            f"More than {max_consecutive_males} consecutive male batters "
                            f"({run} in a row)"
                        ),
                        player_ids=(entry.player_id,),
                    )
                )
                summary.append(
                    f"Batting Order: {_name(entry)} is the {ordinal(run)} consecutive male batter."
                )

    if innings is None:
        innings = max(len(entry.positions) for entry in lineup)

    fielding_errors: list[InningReport] = []
    for index in range(innings):
        number = index + 1
        by_position = _inning_positions(lineup, index)

        duplicates = []
        for position, holders in by_position.items():
            if len(holders) > 1:
                duplicates.append(_duplicate_issue(position, holders, number))
                names = " and ".join(_name(entry) for entry in holders)
                summary.append(f"Inning {number}: {position} is assigned to {names}.")

        missing = [pos for pos in resolved_catalog.positions if pos not in by_position]
        reported: Tuple[str, ...] = ()
        if missing and len(missing) < len(resolved_catalog):
            summary.append(f"Inning {number}: Missing {', '.join(missing)}.")
            reported = tuple(missing)
        elif missing and any(index < len(entry.positions) and entry.positions[index] for entry in lineup):
            summary.append(f"Inning {number}: Missing all field positions.")
            reported = tuple(missing)

        fielding_errors.append(
            InningReport(inning=number, duplicates=tuple(duplicates), missing=reported)
        )

    return LineupReport(
        batting_errors=tuple(batting_errors),
        fielding_errors=tuple(fielding_errors),
        summary=tuple(summary),
    )


def check_candidate_lineup(
    entries: Sequence[FieldedPlayer],
    *,
    innings: int,
    catalog: PositionCatalog | str | None = None,
    roster_ids: Optional[Iterable[str]] = None,
    min_players: Optional[int] = None,
) -> CandidateCheck:
    """Accept or reject a proposed lineup.

    Errors: repeated player ids, ids missing from ``roster_ids``, positions
    arrays of the wrong length, unknown position codes, a position held twice
    in an inning, or an open position while enough players are listed to
    cover every slot. A roster below ``min_players`` (default: the number of
    catalog positions) is reported as a warning only.
    """

    resolved_catalog = resolve_catalog(catalog)
    issues: list[LineupIssue] = []

    counts = Counter(entry.player_id for entry in entries)
    for player_id, count in counts.items():
        if count > 1:
            issues.append(
                LineupIssue(
                    code="duplicate_player",
                    message=f"Player {player_id} appears {count} times",
                    player_ids=(player_id,),
                )
            )

    if roster_ids is not None:
        known = set(roster_ids)
        for player_id in counts:
            if player_id not in known:
                issues.append(
                    LineupIssue(
                        code="unknown_player",
                        message=f"Player {player_id} is not on the roster",
                        player_ids=(player_id,),
                    )
                )

    for entry in entries:
        if len(entry.positions) != innings:
            issues.append(
                LineupIssue(
                    code="wrong_inning_count",
                    message=(
                        f"{_name(entry)} has {len(entry.positions)} innings of positions, "
                        f"expected {innings}"
                    ),
                    player_ids=(entry.player_id,),
                )
            )
        for index, position in enumerate(entry.positions):
            if position != OUT and position not in resolved_catalog:
                issues.append(
                    LineupIssue(
                        code="unknown_position",
                        message=f"{_name(entry)} has unknown position {position!r}",
                        inning=index + 1,
                        position=position,
                        player_ids=(entry.player_id,),
                    )
                )

    covers_field = len(counts) >= len(resolved_catalog)
    for index in range(innings):
        number = index + 1
        by_position = _inning_positions(entries, index)
        for position, holders in by_position.items():
            if len(holders) > 1:
                issues.append(_duplicate_issue(position, holders, number))
        missing = [pos for pos in resolved_catalog.positions if pos not in by_position]
        if missing:
            issues.append(
                LineupIssue(
                    code="missing_position",
                    message=f"Inning {number}: Missing {', '.join(missing)}",
                    severity="error" if covers_field else "warning",
                    inning=number,
                )
            )

    minimum = len(resolved_catalog) if min_players is None else min_players
    if len(counts) < minimum:
        issues.append(
            LineupIssue(
                code="below_minimum_roster",
                message=f"Only {len(counts)} players available, at least {minimum} needed",
                severity="warning",
            )
        )

    accepted = not any(issue.severity == "error" for issue in issues)
    return CandidateCheck(accepted=accepted, issues=tuple(issues))


def require_valid_candidate(
    entries: Sequence[FieldedPlayer],
    *,
    innings: int,
    catalog: PositionCatalog | str | None = None,
    roster_ids: Optional[Iterable[str]] = None,
    min_players: Optional[int] = None,
) -> CandidateCheck:
    check = check_candidate_lineup(
        entries,
        innings=innings,
        catalog=catalog,
        roster_ids=roster_ids,
        min_players=min_players,
    )
    if not check.accepted:
        raise LineupRejected(check.issues)
    return check
