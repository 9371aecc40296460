import pytest

from pylineup.config import TeamSettings, get_catalog
from pylineup.lineup import (
    LineupRejected,
    build_lineup,
    check_candidate_lineup,
    require_valid_candidate,
    validate_lineup,
)
from pylineup.models import OUT, FieldedPlayer, Player

POSITIONS = get_catalog("softball").positions


def _entry(player_id: str, positions, gender: str = "Male") -> FieldedPlayer:
    return FieldedPlayer(
        player_id=player_id,
        first_name=f"First{player_id}",
        last_name=f"Last{player_id}",
        gender=gender,
        positions=tuple(positions),
    )


def _full_field(innings: int = 2) -> list[FieldedPlayer]:
    genders = ["Male", "Female"]
    return [
        _entry(str(i), [position] * innings, gender=genders[i % 2])
        for i, position in enumerate(POSITIONS)
    ]


def test_empty_lineup_reports_nothing():
    report = validate_lineup([])
    assert report.ok
    assert report.summary == ()


def test_clean_lineup_is_ok():
    report = validate_lineup(_full_field(), max_consecutive_males=3)

    assert report.ok
    assert [inning.inning for inning in report.fielding_errors] == [1, 2]


def test_consecutive_male_batters_are_reported():
    lineup = [_entry(str(i), ["Out"]) for i in range(5)]

    report = validate_lineup(lineup, max_consecutive_males=3, innings=0)

    assert [issue.player_ids for issue in report.batting_errors] == [("3",), ("4",)]
    assert report.summary[0] == "Batting Order: First3 Last3 is the 4th consecutive male batter."
    assert not report.ok


def test_zero_disables_batting_check():
    lineup = [_entry(str(i), []) for i in range(5)]
    assert validate_lineup(lineup, max_consecutive_males=0, innings=0).batting_errors == ()


def test_duplicate_and_missing_positions_are_reported():
    lineup = _full_field(innings=1)
    lineup[1] = _entry("1", ["Pitcher"])

    report = validate_lineup(lineup)

    inning = report.fielding_errors[0]
    assert inning.duplicates[0].position == "Pitcher"
    assert inning.duplicates[0].player_ids == ("0", "1")
    assert inning.missing == ("Catcher",)
    assert "Inning 1: Pitcher is assigned to First0 Last0 and First1 Last1." in report.summary
    assert "Inning 1: Missing Catcher." in report.summary


def test_all_out_inning_reports_missing_field():
    lineup = [_entry(str(i), [OUT]) for i in range(3)]

    report = validate_lineup(lineup)

    assert report.fielding_errors[0].missing == POSITIONS
    assert report.summary[-1] == "Inning 1: Missing all field positions."


def test_generated_lineup_passes_candidate_check():
    players = [
        Player(player_id=f"p{i}", gender="Male" if i % 2 else "Female") for i in range(12)
    ]
    settings = TeamSettings(innings=5, max_consecutive_males=3)
    lineup = build_lineup(players, settings)

    check = check_candidate_lineup(
        list(lineup.fielding_chart.players),
        innings=5,
        roster_ids=[p.player_id for p in players],
    )

    assert check.accepted
    assert check.issues == ()


def test_candidate_with_duplicate_player_is_rejected():
    lineup = _full_field() + [_entry("0", [OUT, OUT])]

    check = check_candidate_lineup(lineup, innings=2)

    assert not check.accepted
    assert "duplicate_player" in {issue.code for issue in check.issues}
    assert "Player 0 appears 2 times" in check.reasons


def test_candidate_with_shared_position_is_rejected():
    lineup = _full_field(innings=1)
    lineup[2] = _entry("2", ["Catcher"])

    check = check_candidate_lineup(lineup, innings=1)

    codes = [issue.code for issue in check.issues]
    assert "duplicate_position" in codes
    assert "missing_position" in codes
    assert not check.accepted


def test_candidate_with_unknown_values_is_rejected():
    lineup = _full_field(innings=2)
    lineup[0] = _entry("0", ["LF", "Pitcher"])
    lineup[1] = _entry("stranger", ["Catcher"])

    check = check_candidate_lineup(lineup, innings=2, roster_ids=[str(i) for i in range(10)])

    codes = {issue.code for issue in check.issues}
    assert {"unknown_position", "unknown_player", "wrong_inning_count"} <= codes


def test_short_roster_is_a_warning_only():
    lineup = [_entry(str(i), [position]) for i, position in enumerate(POSITIONS[:8])]

    check = check_candidate_lineup(lineup, innings=1)

    assert check.accepted
    assert {issue.code: issue.severity for issue in check.issues} == {
        "missing_position": "warning",
        "below_minimum_roster": "warning",
    }


def test_require_valid_candidate_raises_with_issues():
    lineup = _full_field(innings=1) + [_entry("0", ["Pitcher"])]

    with pytest.raises(LineupRejected) as excinfo:
        require_valid_candidate(lineup, innings=1)

    assert any(issue.code == "duplicate_player" for issue in excinfo.value.issues)
    assert "Lineup rejected" in str(excinfo.value)
