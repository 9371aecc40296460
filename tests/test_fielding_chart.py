import json
from collections import Counter

import pytest

from pylineup.config import get_catalog
from pylineup.lineup import build_fielding_chart, max_outs_for
from pylineup.models import OUT, Player

SOFTBALL = get_catalog("softball")


def _player(player_id: str, *preferred: str, gender: str = "Male") -> Player:
    return Player(
        player_id=player_id,
        first_name=f"Player{player_id}",
        last_name=f"Last{player_id}",
        gender=gender,
        preferred_positions=preferred,
    )


def _roster(count: int, start: int = 1) -> list[Player]:
    return [_player(str(i)) for i in range(start, start + count)]


def _assert_no_repeats(chart) -> None:
    for index in range(chart.innings):
        fielded = [p.positions[index] for p in chart.players if p.positions[index] != OUT]
        assert len(fielded) == len(set(fielded)), f"inning {index + 1}: {fielded}"


def test_every_player_gets_one_entry_per_inning():
    chart = build_fielding_chart(_roster(10))

    assert chart.innings == 7
    assert len(chart.players) == 10
    assert all(len(player.positions) == 7 for player in chart.players)


def test_custom_innings():
    chart = build_fielding_chart(_roster(10), innings=5)
    assert all(len(player.positions) == 5 for player in chart.players)


def test_output_keeps_identity_and_input_is_untouched():
    players = [Player(player_id="1", first_name="John", last_name="Doe", gender="Male")]

    chart = build_fielding_chart(players, innings=1)

    fielded = chart.players[0]
    assert (fielded.player_id, fielded.first_name, fielded.last_name) == ("1", "John", "Doe")
    assert fielded.gender == players[0].gender
    assert not hasattr(fielded, "preferred_positions")
    assert players[0].preferred_positions == ()


def test_ten_players_never_sit():
    chart = build_fielding_chart(_roster(10), innings=7)

    for player in chart.players:
        assert OUT not in player.positions
    assert chart.unfilled == ((),) * 7
    _assert_no_repeats(chart)


def test_pitcher_goes_to_player_who_prefers_it():
    players = [_player("1", "Pitcher"), _player("2", "Catcher"), *_roster(8, start=3)]

    chart = build_fielding_chart(players, innings=1)

    assert chart.positions_for("1") == ("Pitcher",)
    assert chart.positions_for("2") == ("Catcher",)


def test_preferred_positions_are_honored():
    players = [
        _player("1", "Shortstop"),
        _player("2", "Catcher"),
        _player("3", "First Base"),
        *_roster(7, start=4),
    ]

    chart = build_fielding_chart(players, innings=1)

    assert chart.positions_for("1") == ("Shortstop",)
    assert chart.positions_for("2") == ("Catcher",)
    assert chart.positions_for("3") == ("First Base",)


def test_only_one_pitcher_when_several_want_it():
    players = [_player("1", "Pitcher"), _player("2", "Pitcher"), _player("3", "Pitcher"), *_roster(7, start=4)]

    chart = build_fielding_chart(players, innings=1)

    pitchers = [p for p in chart.players if p.positions[0] == "Pitcher"]
    assert [p.player_id for p in pitchers] == ["1"]


def test_extra_players_sit_out():
    chart = build_fielding_chart(_roster(12), innings=1)

    assert sum(1 for p in chart.players if p.positions[0] == OUT) == 2


def test_sitters_return_next_inning():
    chart = build_fielding_chart(_roster(12), innings=3)

    for player in chart.players:
        if player.positions[0] == OUT:
            assert player.positions[1] != OUT


def test_fairness_for_twelve_players():
    chart = build_fielding_chart(_roster(12), innings=7)

    outs = [player.out_count for player in chart.players]
    assert sum(outs) == 14
    assert max(outs) - min(outs) <= 2
    assert max(outs) <= chart.max_outs
    _assert_no_repeats(chart)


@pytest.mark.parametrize("size, expected", [(10, 2), (13, 2), (14, 3), (18, 3)])
def test_max_outs_depends_on_roster_size(size, expected):
    assert max_outs_for(size) == expected


def test_fewer_players_than_positions_leaves_positions_unfilled():
    chart = build_fielding_chart(_roster(8), innings=2)

    assert all(OUT not in player.positions for player in chart.players)
    assert [len(open_positions) for open_positions in chart.unfilled] == [2, 2]


def test_single_player_and_empty_roster():
    assert len(build_fielding_chart(_roster(1), innings=1).players[0].positions) == 1

    empty = build_fielding_chart([], innings=1)
    assert empty.players == ()


def test_team_positioning_beats_personal_preference():
    players = [_player("1", "Catcher"), _player("2", "Pitcher"), *_roster(8, start=3)]

    chart = build_fielding_chart(
        players,
        innings=1,
        ideal_positioning={"Pitcher": ["1"], "Catcher": ["2"]},
    )

    assert chart.positions_for("1") == ("Pitcher",)
    assert chart.positions_for("2") == ("Catcher",)


def test_team_positioning_as_json_string():
    chart = build_fielding_chart(_roster(10), innings=1, ideal_positioning=json.dumps({"Pitcher": ["1"]}))
    assert chart.positions_for("1") == ("Pitcher",)


def test_priority_chain_falls_back_to_next_available_player():
    players = _roster(10, start=2)

    chart = build_fielding_chart(players, innings=1, ideal_positioning={"Pitcher": ["1", "2"]})

    assert chart.positions_for("2") == ("Pitcher",)


def test_chain_player_is_not_taken_by_earlier_preference():
    players = [_player("1", "Catcher", "First Base"), _player("2", "Catcher"), *_roster(8, start=3)]

    chart = build_fielding_chart(
        players,
        innings=1,
        ideal_positioning={"Shortstop": ["1"], "Catcher": ["2"]},
    )

    assert chart.positions_for("1") == ("Shortstop",)
    assert chart.positions_for("2") == ("Catcher",)


def test_player_in_several_chains_takes_pitcher_first():
    chart = build_fielding_chart(
        _roster(10),
        innings=1,
        ideal_positioning={"Pitcher": ["1", "2"], "Catcher": ["1", "3"], "Shortstop": ["1", "4"]},
    )

    assert chart.positions_for("1") == ("Pitcher",)
    assert chart.positions_for("3") == ("Catcher",)
    assert chart.positions_for("4") == ("Shortstop",)


def test_partial_positioning_still_fills_the_field():
    players = [_player("1", "Right Field")] + [_player(str(i), "Left Field") for i in range(2, 11)]

    chart = build_fielding_chart(players, innings=1, ideal_positioning={"Pitcher": ["1"], "Catcher": ["2"]})

    assigned = [player.positions[0] for player in chart.players]
    assert len(set(assigned)) == 10
    assert OUT not in assigned


@pytest.mark.parametrize("size, innings", [(9, 3), (12, 5), (15, 7), (18, 9)])
def test_locked_player_holds_position_every_inning(size, innings):
    chart = build_fielding_chart(
        _roster(size),
        innings=innings,
        ideal_positioning={"Pitcher": [{"id": "1", "neverSub": True}]},
    )

    assert chart.positions_for("1") == ("Pitcher",) * innings
    _assert_no_repeats(chart)


def test_locked_player_never_rotates_out_on_big_roster():
    chart = build_fielding_chart(
        _roster(15),
        innings=7,
        ideal_positioning={"Catcher": [{"id": "1", "neverSub": True}]},
    )

    assert chart.positions_for("1") == ("Catcher",) * 7
    assert OUT in chart.positions_for("2")


def test_multiple_locked_players():
    chart = build_fielding_chart(
        _roster(12),
        innings=3,
        ideal_positioning={
            "Pitcher": [{"id": "1", "neverSub": True}],
            "Catcher": [{"id": "2", "neverSub": True}],
            "Shortstop": [{"id": "3", "neverSub": True}],
        },
    )

    assert chart.positions_for("1") == ("Pitcher",) * 3
    assert chart.positions_for("2") == ("Catcher",) * 3
    assert chart.positions_for("3") == ("Shortstop",) * 3


def test_locked_player_missing_from_roster_is_ignored():
    chart = build_fielding_chart(
        _roster(10),
        innings=3,
        ideal_positioning={"Pitcher": [{"id": "99", "neverSub": True}]},
    )

    assert all(OUT not in player.positions for player in chart.players)
    assert all("Pitcher" in chart.inning(index) for index in range(3))


def test_locked_catcher_scenario_with_alternating_genders():
    players = [
        _player(f"p{i}", gender="Male" if i % 2 else "Female") for i in range(1, 13)
    ]

    chart = build_fielding_chart(
        players,
        innings=3,
        ideal_positioning={"Catcher": [{"id": "p2", "neverSub": True}]},
    )

    assert chart.positions_for("p2") == ("Catcher", "Catcher", "Catcher")
    assert all(len(player.positions) == 3 for player in chart.players)
    _assert_no_repeats(chart)


def test_malformed_positioning_matches_omitted_option():
    players = [_player("1", "Pitcher"), *_roster(11, start=2)]

    broken = build_fielding_chart(players, innings=4, ideal_positioning="invalid-json")
    plain = build_fielding_chart(players, innings=4)

    assert broken.as_mapping() == plain.as_mapping()


def test_chart_is_deterministic():
    players = [_player(str(i), "Pitcher" if i == 3 else "Left Field") for i in range(13)]

    assert build_fielding_chart(players).as_mapping() == build_fielding_chart(players).as_mapping()


def test_baseball_catalog_has_nine_slots():
    chart = build_fielding_chart(_roster(10), innings=2, catalog="baseball")

    per_inning = Counter(player.positions[0] for player in chart.players)
    assert per_inning[OUT] == 1
    assert "Center Field" in chart.inning(0)


def test_players_with_preferences_take_their_turn_sitting():
    players = [
        _player("p0", "Pitcher"),
        _player("p1", "Catcher"),
        _player("p2", "Shortstop"),
        _player("p3", "First Base"),
        *[_player(f"p{i}") for i in range(4, 14)],
    ]

    chart = build_fielding_chart(players, innings=7)

    outs = {player.player_id: player.out_count for player in chart.players}
    assert max(outs.values()) - min(outs.values()) <= 1
    assert max(outs.values()) <= chart.max_outs
    assert all(outs[player_id] >= 1 for player_id in ("p0", "p1", "p2", "p3"))
    _assert_no_repeats(chart)


def test_sit_out_cap_holds_when_roster_allows_it():
    preferred = ["Pitcher", "Catcher", "Shortstop", "First Base", "Left Field"]
    players = [
        _player(str(i), *([preferred[i]] if i < len(preferred) else [])) for i in range(13)
    ]

    chart = build_fielding_chart(players, innings=8)

    outs = [player.out_count for player in chart.players]
    assert chart.max_outs == 2
    assert sum(outs) == 24
    assert max(outs) <= chart.max_outs
    for player in chart.players:
        assert (OUT, OUT) not in zip(player.positions, player.positions[1:])
    _assert_no_repeats(chart)
